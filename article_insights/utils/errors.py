"""
Custom exception classes and error handling utilities.
"""

from typing import Optional, Dict, Any
import traceback


class ArticleInsightsError(Exception):
    """Base exception for all article insights errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class RosterError(ArticleInsightsError):
    """Exception raised when a roster or word-list file is missing or malformed."""
    pass


class ArticleParseError(ArticleInsightsError):
    """Exception raised when an article file cannot be read or decoded."""
    pass


class BarrierViolationError(ArticleInsightsError):
    """Exception raised when shared state is touched outside its phase."""
    pass


class WorkerPoolError(ArticleInsightsError):
    """Exception raised when a pool worker dies with an unexpected error."""
    pass


class ConfigurationError(ArticleInsightsError):
    """Exception raised for configuration-related issues."""
    pass


class ValidationError(ArticleInsightsError):
    """Exception raised for data validation failures."""
    pass


class ReportError(ArticleInsightsError):
    """Exception raised while writing output reports."""
    pass


def handle_error(
    error: Exception,
    logger,
    context: Optional[Dict[str, Any]] = None,
    reraise: bool = True
) -> None:
    """
    Handle and log errors with context information.

    Args:
        error: The exception that occurred
        logger: Logger instance to use for logging
        context: Additional context information
        reraise: Whether to reraise the exception after logging
    """
    error_context = {
        "error_type": type(error).__name__,
        "error_message": str(error),
        **(context or {})
    }

    if isinstance(error, ArticleInsightsError):
        error_context.update(error.details)

    logger.error(f"Error occurred: {error_context}")
    logger.debug(f"Traceback: {traceback.format_exc()}")

    if reraise:
        raise error
