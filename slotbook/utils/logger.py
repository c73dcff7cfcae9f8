# File: slotbook/utils/logger.py
"""
Centralized logging configuration for slotbook.
"""

import logging
import os
import sys
from pathlib import Path
from datetime import datetime

DEFAULT_LOGS_DIR = Path(__file__).parent.parent.parent / "logs"


def _resolve_level(level) -> int:
    if isinstance(level, int):
        return level
    value = logging.getLevelName(str(level).upper())
    return value if isinstance(value, int) else logging.INFO


def setup_logger(name: str = "slotbook", level=None) -> logging.Logger:
    """
    Configure and return a logger instance.

    Args:
        name: Logger name
        level: Logging level (default: SLOTBOOK_LOG_LEVEL or INFO)

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)

    # Prevent duplicate handlers
    if logger.handlers:
        return logger

    if level is None:
        level = os.getenv("SLOTBOOK_LOG_LEVEL", "INFO")
    level = _resolve_level(level)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)

    console_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
        datefmt='%H:%M:%S'
    )
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    # File handler for persistent logs
    log_dir = Path(os.getenv("SLOTBOOK_LOGS_DIR", str(DEFAULT_LOGS_DIR)))
    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f"slotbook_{datetime.now().strftime('%Y%m%d')}.log"
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
    except OSError as e:
        logger.warning(f"File logging disabled, cannot write to {log_dir}: {e}")
        return logger
    file_handler.setLevel(logging.DEBUG)

    # More detailed format for file
    file_format = logging.Formatter(
        '%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )
    file_handler.setFormatter(file_format)
    logger.addHandler(file_handler)

    return logger


class LoggerMixin:
    """Mixin to add logging capability to any class."""

    @property
    def logger(self) -> logging.Logger:
        """Get logger for this class."""
        if not hasattr(self, '_logger'):
            self._logger = setup_logger(f"slotbook.{self.__class__.__name__}")
        return self._logger
