# File: slotbook/core/config_manager.py
"""
Centralized configuration management for slotbook.
Loads settings from environment variables and the project .env file.
"""

import os
import logging
from pathlib import Path
from typing import List
from dotenv import load_dotenv

from slotbook.utils.logger import setup_logger, DEFAULT_LOGS_DIR

# Load environment variables
load_dotenv()

logger = setup_logger(__name__)


class Config:
    """Application configuration singleton."""

    # Base directories
    BASE_DIR = Path(__file__).parent.parent.parent  # Go up 3 levels from slotbook/core/

    DATA_DIR = Path(os.getenv("SLOTBOOK_DATA_DIR", str(BASE_DIR / "data")))
    LOGS_DIR = Path(os.getenv("SLOTBOOK_LOGS_DIR", str(DEFAULT_LOGS_DIR)))

    # Files
    DB_FILE = Path(os.getenv("SLOTBOOK_DB_FILE", str(DATA_DIR / "slotbook.db")))
    SETTINGS_FILE = DATA_DIR / "settings.json"
    CALL_LOG_FILE = DATA_DIR / "calls.json"
    ENV_FILE = BASE_DIR / ".env"

    # Application Settings
    LOG_LEVEL = os.getenv("SLOTBOOK_LOG_LEVEL", "INFO").upper()
    SETTINGS_VERSION = 1
    CALL_LOG_VERSION = 1
    CALL_LOG_LIMIT = 100

    @classmethod
    def ensure_directories(cls) -> None:
        """Create the data and log directories if they are missing."""
        for directory in (cls.DATA_DIR, cls.DB_FILE.parent, cls.LOGS_DIR):
            directory.mkdir(parents=True, exist_ok=True)

    @classmethod
    def validate(cls) -> bool:
        """Validate that the configuration is usable."""
        errors: List[str] = []

        if not isinstance(logging.getLevelName(cls.LOG_LEVEL), int):
            errors.append(f"SLOTBOOK_LOG_LEVEL '{cls.LOG_LEVEL}' is not a logging level")

        if cls.DATA_DIR.exists() and not os.access(cls.DATA_DIR, os.W_OK):
            errors.append(f"Data directory is not writable: {cls.DATA_DIR}")

        if cls.DATA_DIR.exists() and not cls.DATA_DIR.is_dir():
            errors.append(f"Data path is not a directory: {cls.DATA_DIR}")

        if errors:
            for error in errors:
                logger.error(f"Configuration Error: {error}")
            return False

        return True
