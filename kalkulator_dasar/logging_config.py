"""Logging setup for Kalkulator Dasar.

Every module logs through get_logger(), which places it under the
"kalkulator_dasar" logger; setup_logging() is called once by the CLI.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime

from . import config

ROOT_LOGGER_NAME = "kalkulator_dasar"


class StructuredFormatter(logging.Formatter):
    """One line per record: ``<iso timestamp> [LEVEL] logger: message``."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        line = f"{timestamp} [{record.levelname}] {record.name}: {record.getMessage()}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


def resolve_level(level: str | None) -> int:
    """Map a level name to its number; unknown names fall back to WARNING."""
    name = (level or config.LOG_LEVEL).upper()
    value = logging.getLevelName(name)
    return value if isinstance(value, int) else logging.WARNING


def setup_logging(level: str | None = None, log_file: str | None = None) -> logging.Logger:
    """Route package logs to stderr and, optionally, a file.

    Args:
        level: Level name; defaults to config.LOG_LEVEL
        log_file: Optional path that receives the same records as stderr

    Returns:
        The package root logger
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(resolve_level(level))
    logger.handlers.clear()

    formatter = StructuredFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return logger


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a package module, e.g. get_logger("engine")."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
