"""
Configuration management for the article insights pipeline.
"""

import os
import threading
from typing import Dict, Any, Optional
from dataclasses import dataclass, field, asdict
from pathlib import Path
import json
import logging
from jsonschema import validate, ValidationError

from article_insights.concurrent.models import MAX_WORKERS
from article_insights.utils.errors import ConfigurationError


@dataclass
class PipelineConfig:
    """Pipeline configuration settings."""
    worker_count: int = 4
    keyword_language: str = "english"


@dataclass
class OutputConfig:
    """Report output settings."""
    output_dir: str = "."
    all_articles_file: str = "all_articles.txt"
    keywords_file: str = "keywords_count.txt"
    reports_file: str = "reports.txt"


@dataclass
class LoggingConfig:
    """Logging settings."""
    log_level: str = "INFO"
    log_file: Optional[str] = None
    retention_days: int = 7


@dataclass
class SystemConfig:
    """Main system configuration."""
    pipeline: PipelineConfig = field(default_factory=PipelineConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Configuration schema for validation
CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "pipeline": {
            "type": "object",
            "properties": {
                "worker_count": {"type": "integer", "minimum": 1, "maximum": MAX_WORKERS},
                "keyword_language": {"type": "string", "minLength": 1}
            },
            "additionalProperties": False
        },
        "output": {
            "type": "object",
            "properties": {
                "output_dir": {"type": "string", "minLength": 1},
                "all_articles_file": {"type": "string", "minLength": 1},
                "keywords_file": {"type": "string", "minLength": 1},
                "reports_file": {"type": "string", "minLength": 1}
            },
            "additionalProperties": False
        },
        "logging": {
            "type": "object",
            "properties": {
                "log_level": {"type": "string", "enum": LOG_LEVELS},
                "log_file": {"type": ["string", "null"]},
                "retention_days": {"type": "integer", "minimum": 1, "maximum": 365}
            },
            "additionalProperties": False
        }
    },
    "additionalProperties": False
}


class ConfigManager:
    """Configuration manager with schema validation and environment overrides."""

    ENV_PREFIX = "ARTICLE_INSIGHTS_"

    def __init__(self, config_path: str = "article_insights.json"):
        self.config_path = Path(config_path)
        self._config: Optional[SystemConfig] = None
        self._last_modified: Optional[float] = None
        self._lock = threading.RLock()

    def validate_config(self, config_data: Dict[str, Any]) -> None:
        """Validate configuration data against schema."""
        try:
            validate(instance=config_data, schema=CONFIG_SCHEMA)
        except ValidationError as e:
            raise ConfigurationError(f"Configuration validation failed: {e.message}")

    def load_config(self) -> SystemConfig:
        """Load configuration from file (if present) and environment variables."""
        with self._lock:
            if self.config_path.exists():
                current_modified = self.config_path.stat().st_mtime
                if self._config is None or current_modified != self._last_modified:
                    self._load_from_file()
                    self._last_modified = current_modified
            elif self._config is None:
                self._config = SystemConfig()
                self._override_with_env_vars()
                logging.info("No configuration file found, using defaults")

            return self._config or SystemConfig()

    def _load_from_file(self) -> None:
        """Load configuration from JSON file with validation."""
        try:
            with open(self.config_path, 'r', encoding='utf-8') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.error(f"Failed to load config from file: {e}")
            if self._config is None:
                self._config = SystemConfig()
                self._override_with_env_vars()
            return

        # Schema failures are fatal; a broken file is not silently ignored
        self.validate_config(config_data)

        self._config = self._dict_to_config(config_data)
        self._override_with_env_vars()

        logging.info(f"Configuration loaded and validated from {self.config_path}")

    def _override_with_env_vars(self) -> None:
        """Override configuration with environment variables."""
        prefix = self.ENV_PREFIX

        workers = os.getenv(f"{prefix}WORKERS")
        if workers:
            try:
                worker_count = int(workers)
            except ValueError:
                raise ConfigurationError(f"{prefix}WORKERS must be an integer, got {workers!r}")
            if not (1 <= worker_count <= MAX_WORKERS):
                raise ConfigurationError(f"{prefix}WORKERS must be between 1 and {MAX_WORKERS}")
            self._config.pipeline.worker_count = worker_count

        if os.getenv(f"{prefix}OUTPUT_DIR"):
            self._config.output.output_dir = os.getenv(f"{prefix}OUTPUT_DIR")

        log_level = os.getenv(f"{prefix}LOG_LEVEL")
        if log_level:
            if log_level.upper() not in LOG_LEVELS:
                raise ConfigurationError(f"{prefix}LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}")
            self._config.logging.log_level = log_level.upper()

        if os.getenv(f"{prefix}LOG_FILE"):
            self._config.logging.log_file = os.getenv(f"{prefix}LOG_FILE")

    def _dict_to_config(self, data: Dict[str, Any]) -> SystemConfig:
        """Convert dictionary to SystemConfig object."""
        config = SystemConfig()

        if "pipeline" in data:
            config.pipeline = PipelineConfig(**data["pipeline"])

        if "output" in data:
            config.output = OutputConfig(**data["output"])

        if "logging" in data:
            config.logging = LoggingConfig(**data["logging"])

        return config

    def reload_if_changed(self) -> bool:
        """Check if config file has changed and reload if necessary."""
        with self._lock:
            if not self.config_path.exists():
                return False

            current_modified = self.config_path.stat().st_mtime
            if current_modified != self._last_modified:
                self.load_config()
                return True
            return False

    def export_config(self) -> Dict[str, Any]:
        """Export current configuration as dictionary."""
        with self._lock:
            if not self._config:
                return {}

            return {
                "pipeline": asdict(self._config.pipeline),
                "output": asdict(self._config.output),
                "logging": asdict(self._config.logging)
            }

    def save_config(self, config_path: Optional[str] = None) -> None:
        """Save current configuration to file."""
        with self._lock:
            if not self._config:
                raise ConfigurationError("No configuration loaded to save")

            save_path = Path(config_path) if config_path else self.config_path
            config_dict = self.export_config()

            # Validate before saving
            self.validate_config(config_dict)

            with open(save_path, 'w', encoding='utf-8') as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)

            logging.info(f"Configuration saved to {save_path}")

