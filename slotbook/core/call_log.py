# File: slotbook/core/call_log.py

import threading
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple, Union

from slotbook.core.config_manager import Config
from slotbook.core.observable import Observable
from slotbook.models.calls import CallRecord, call_from_dict
from slotbook.models.errors import StorageError, ValidationError
from slotbook.storage.state_file import JsonStateFile
from slotbook.utils.logger import LoggerMixin


class CallLog(Observable, LoggerMixin):
    """Operator call journal, newest first, capped at `limit` entries."""

    def __init__(self, state_file: JsonStateFile, limit: int = Config.CALL_LOG_LIMIT):
        super().__init__()
        self._file = state_file
        self._limit = limit
        self._lock = threading.RLock()
        self._calls: Tuple[CallRecord, ...] = self._read()

    @classmethod
    def from_path(cls, path: Optional[Union[str, Path]] = None) -> 'CallLog':
        return cls(JsonStateFile(path or Config.CALL_LOG_FILE, Config.CALL_LOG_VERSION))

    def _read(self) -> Tuple[CallRecord, ...]:
        stored = self._file.load()
        if stored is None:
            return ()
        try:
            calls = tuple(call_from_dict(item) for item in stored.get("calls", []))
        except (KeyError, TypeError, ValueError, ValidationError) as e:
            raise StorageError(f"Corrupt call log {self._file.path}: {e}") from e
        return calls[:self._limit]

    @property
    def calls(self) -> Tuple[CallRecord, ...]:
        return self._calls

    def snapshot(self) -> Tuple[CallRecord, ...]:
        return self._calls

    def log_call(
        self,
        name: str,
        phone_number: str,
        issue: str,
        start_time: Union[datetime, str],
        end_time: Union[datetime, str]
    ) -> CallRecord:
        """
        Record a call at the head of the journal and persist.

        Raises:
            ValidationError: end_time before start_time
            StorageError: the journal cannot be written
        """
        record = CallRecord(
            name=(name or "").strip(),
            phone_number=(phone_number or "").strip(),
            issue=(issue or "").strip(),
            start_time=start_time,
            end_time=end_time,
        )
        with self._lock:
            calls = ((record,) + self._calls)[:self._limit]
            self._file.save({"calls": [c.to_dict() for c in calls]})
            self._calls = calls
        self.logger.info(f"Logged call {record.id} from {record.name}")
        self._notify()
        return record
