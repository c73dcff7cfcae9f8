# File: slotbook/storage/state_file.py

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Optional, Union

from slotbook.models.errors import StorageError
from slotbook.utils.logger import setup_logger

logger = setup_logger(__name__)


class JsonStateFile:
    """
    Small versioned JSON document on disk.

    Layout: {"state": {...}, "version": n}. Writes go to a temporary file
    in the same directory, which then replaces the target.
    """

    def __init__(self, path: Union[str, Path], version: int = 1):
        self.path = Path(path)
        self.version = version

    def load(self) -> Optional[Dict[str, Any]]:
        """
        Read the stored state.

        Returns:
            The state dict, or None when the file does not exist yet

        Raises:
            StorageError: unreadable file, malformed JSON or unexpected layout
        """
        if not self.path.exists():
            return None
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                document = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StorageError(f"Cannot read {self.path}: {e}") from e

        if not isinstance(document, dict) or not isinstance(document.get("state"), dict):
            raise StorageError(f"Unexpected layout in {self.path}")

        stored_version = document.get("version", self.version)
        if stored_version != self.version:
            logger.warning(
                f"{self.path.name} was written as v{stored_version}, reading as v{self.version}"
            )
        return document["state"]

    def save(self, state: Dict[str, Any]) -> None:
        """Atomically replace the stored state."""
        document = {"state": state, "version": self.version}
        tmp_name = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                json.dump(document, f, indent=2)
            os.replace(tmp_name, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write {self.path}: {e}") from e
        logger.debug(f"Saved {self.path}")
