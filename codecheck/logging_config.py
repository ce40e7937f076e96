"""
Logging configuration for code review runs.

This module provides structured (JSON) logging of review task events,
including state transitions, per-file scan results, and persistence failures.
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler
from typing import Any

from .constants import DEFAULT_LOG_LEVEL

LOGGER_NAME = "codecheck"


class ReviewEventFormatter(logging.Formatter):
    """Custom formatter for review task logs."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log records with structured data."""
        log_entry: dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "event"):
            log_entry["event"] = record.event

        # Task and file context
        for field in ["task_id", "agent", "state", "file"]:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        # Result fields
        for field in ["rule", "issues_found", "score", "execution_time"]:
            if hasattr(record, field):
                log_entry[field] = getattr(record, field)

        if hasattr(record, "error"):
            log_entry["error"] = record.error

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def configure_review_logging(
    log_file: str | None = None,
    log_level: str = DEFAULT_LOG_LEVEL,
    enable_console: bool = True,
) -> None:
    """
    Configure logging for code review runs.

    Args:
        log_file: Path to log file for review events (optional)
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        enable_console: Whether to also log to console
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(getattr(logging, log_level.upper()))
    logger.propagate = False

    logger.handlers.clear()

    formatter = ReviewEventFormatter()

    if log_file:
        file_handler = TimedRotatingFileHandler(
            log_file,
            when='D',
            interval=1,
            backupCount=14,
            encoding='utf-8',
            utc=False
        )
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    if enable_console:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)


def get_review_logger() -> logging.Logger:
    """Get the configured codecheck logger."""
    return logging.getLogger(LOGGER_NAME)
