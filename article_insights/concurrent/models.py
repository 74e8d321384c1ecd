"""
Data models for the pipeline worker pools.
"""

import threading
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from article_insights.utils.errors import ValidationError


MAX_WORKERS = 256


class WorkerState(Enum):
    """Worker thread state."""
    STARTING = "starting"
    IDLE = "idle"
    WORKING = "working"
    ERROR = "error"
    STOPPED = "stopped"


@dataclass
class ConcurrentConfig:
    """Configuration for a worker pool."""
    max_workers: int = 4
    name: str = "pool"

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.validate()

    def validate(self) -> None:
        """
        Validate configuration parameters.

        Raises:
            ValidationError: If configuration is invalid
        """
        errors = []

        if isinstance(self.max_workers, bool) or not isinstance(self.max_workers, int):
            errors.append("max_workers must be an integer")
        elif not (1 <= self.max_workers <= MAX_WORKERS):
            errors.append(f"max_workers must be between 1 and {MAX_WORKERS}")

        if not self.name:
            errors.append("name is required")

        if errors:
            raise ValidationError(
                "Concurrent configuration validation failed",
                {"errors": errors}
            )


@dataclass
class WorkerStatus:
    """Status information for a worker thread."""
    worker_id: str
    state: WorkerState = WorkerState.STARTING
    current_item: Optional[str] = None
    items_processed: int = 0
    items_failed: int = 0
    last_activity: datetime = field(default_factory=datetime.now)
    error_message: Optional[str] = None
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def update_activity(self) -> None:
        """Update last activity timestamp."""
        with self._lock:
            self.last_activity = datetime.now()

    def start_item(self, item_label: str) -> None:
        """Mark worker as processing an item."""
        with self._lock:
            self.state = WorkerState.WORKING
            self.current_item = item_label
            self.last_activity = datetime.now()

    def complete_item(self) -> None:
        """Mark the current item as processed."""
        with self._lock:
            self.state = WorkerState.IDLE
            self.current_item = None
            self.items_processed += 1
            self.last_activity = datetime.now()

    def fail_item(self, error_message: str) -> None:
        """Mark the current item as failed."""
        with self._lock:
            self.state = WorkerState.IDLE
            self.current_item = None
            self.items_failed += 1
            self.error_message = error_message
            self.last_activity = datetime.now()

    def set_error_state(self, error_message: str) -> None:
        """Set worker to error state."""
        with self._lock:
            self.state = WorkerState.ERROR
            self.error_message = error_message
            self.last_activity = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Convert status to dictionary."""
        with self._lock:
            return {
                "worker_id": self.worker_id,
                "state": self.state.value,
                "current_item": self.current_item,
                "items_processed": self.items_processed,
                "items_failed": self.items_failed,
                "last_activity": self.last_activity.isoformat(),
                "error_message": self.error_message
            }


@dataclass
class PoolRunResult:
    """Summary of one drained pool run."""
    pool_name: str
    worker_count: int
    items_processed: int
    items_failed: int
    elapsed_seconds: float
    worker_statuses: List[WorkerStatus] = field(default_factory=list)

    @property
    def items_total(self) -> int:
        return self.items_processed + self.items_failed
