"""Logging infrastructure with per-file context."""
import logging
import os
import sys
from pathlib import Path
from logging.handlers import RotatingFileHandler
from typing import Optional

from statementai.config.settings import get_settings


def get_app_home() -> Path:
    """Return the application home directory (logs live under it)."""
    override = os.getenv("STATEMENTAI_HOME")
    if override:
        return Path(override)
    return Path.home() / get_settings().home_dir


class SourceContextFilter(logging.Filter):
    """Add the file currently being processed to log records."""

    def __init__(self):
        super().__init__()
        self.source: Optional[str] = None

    def filter(self, record):
        """Add source to record."""
        record.source = self.source or "system"
        return True


class StatementAILogger:
    """Centralized logging manager."""

    def __init__(self, log_level: str = "INFO", log_dir: Optional[Path] = None):
        settings = get_settings()
        self.log_dir = log_dir or get_app_home() / settings.logs_dir
        self.log_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.log_dir / settings.log_file
        self.source_filter = SourceContextFilter()

        # Configure application logger
        self.logger = logging.getLogger("statementai")
        self.logger.setLevel(getattr(logging, log_level.upper()))
        self.logger.propagate = False

        # Remove existing handlers
        self.logger.handlers.clear()

        file_handler = RotatingFileHandler(
            self.log_file,
            maxBytes=settings.log_max_file_size_mb * 1024 * 1024,
            backupCount=settings.log_backup_count,
            encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(logging.INFO)

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] [file:%(source)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        file_handler.addFilter(self.source_filter)
        console_handler.addFilter(self.source_filter)

        self.logger.addHandler(file_handler)
        self.logger.addHandler(console_handler)

    def set_source_context(self, source: Optional[str]):
        """Set the file name shown in log lines."""
        self.source_filter.source = source

    def set_level(self, log_level: str):
        self.logger.setLevel(getattr(logging, log_level.upper()))

    def get_logger(self) -> logging.Logger:
        """Get the configured logger."""
        return self.logger


# Global logger instance
_logger_instance: Optional[StatementAILogger] = None


def get_logger(log_level: Optional[str] = None) -> logging.Logger:
    """Get or create global logger instance.

    Passing a level on a later call re-levels the existing logger.
    """
    global _logger_instance
    if _logger_instance is None:
        _logger_instance = StatementAILogger(log_level or get_settings().log_level)
    elif log_level:
        _logger_instance.set_level(log_level)
    return _logger_instance.get_logger()


def set_source_context(source: Optional[str]):
    """Set file context for logging."""
    if _logger_instance:
        _logger_instance.set_source_context(source)
