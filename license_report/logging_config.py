"""Logging configuration for license-report."""

import logging
import os
import sys
from typing import Any, Dict


def setup_logging(level: str = "INFO", structured: bool = False) -> logging.Logger:
    """
    Set up logging configuration.

    Calling this again reconfigures the level and formatter of the existing
    handler instead of adding a second one.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR)
        structured: Whether to use structured JSON logging

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("license_report")
    log_level = getattr(logging, level.upper())
    logger.setLevel(log_level)

    if structured:
        formatter: logging.Formatter = StructuredFormatter()
    else:
        formatter = logging.Formatter(
            "[%(asctime)s] %(levelname)s - %(name)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(log_level)
            handler.setFormatter(formatter)
        return logger

    # Logs go to stderr so the report and the rich output on stdout stay clean
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)

    return logger


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        import json
        from datetime import datetime

        log_entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _level_from_env() -> str:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    return level if level in VALID_LOG_LEVELS else "INFO"


# Global logger instance
logger = setup_logging(level=_level_from_env(), structured=os.getenv("LOG_FORMAT", "").lower() == "json")
