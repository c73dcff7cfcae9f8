# File: slotbook/core/settings_store.py

import threading
from pathlib import Path
from typing import Optional, Union

from slotbook.core.config_manager import Config
from slotbook.core.observable import Observable
from slotbook.models.errors import StorageError, ValidationError
from slotbook.models.settings import OverlapSettings, SettingsUpdate
from slotbook.storage.state_file import JsonStateFile
from slotbook.utils.logger import LoggerMixin


class SettingsStore(Observable, LoggerMixin):
    """
    Persisted overlap policy singleton.

    A missing file means defaults (both overlaps disallowed). Every update
    is written through immediately.
    """

    def __init__(self, state_file: JsonStateFile):
        super().__init__()
        self._file = state_file
        self._lock = threading.RLock()
        stored = state_file.load()
        try:
            self._settings = OverlapSettings.from_dict(stored) if stored is not None else OverlapSettings()
        except ValidationError as e:
            raise StorageError(f"Corrupt settings file {state_file.path}: {e}") from e
        self.logger.debug(f"Loaded settings: {self._settings}")

    @classmethod
    def from_path(cls, path: Optional[Union[str, Path]] = None) -> 'SettingsStore':
        return cls(JsonStateFile(path or Config.SETTINGS_FILE, Config.SETTINGS_VERSION))

    def get(self) -> OverlapSettings:
        return self._settings

    def snapshot(self) -> OverlapSettings:
        return self._settings

    def update(self, changes: SettingsUpdate) -> OverlapSettings:
        """
        Merge the given fields and persist.

        Raises:
            ValidationError: a given field is not a bool
            StorageError: the settings file cannot be written
        """
        with self._lock:
            merged = self._settings.merged(changes)
            self._file.save(merged.to_dict())
            self._settings = merged
        self.logger.info(f"Settings updated: {merged}")
        self._notify()
        return merged
