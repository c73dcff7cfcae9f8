# File: slotbook/core/record_store.py
"""
Generic timed-record store.

A TimedRecordStore is the in-memory authoritative cache over one table.
It owns load/create/update/delete for a record type, keeps the cache
sorted by the record's primary time field, and notifies subscribers
after every state change.

Every operation runs inside one critical section (the store lock), so a
write's trailing reload completes before the next operation validates
against the cache. Stores that validate against each other share a lock.
"""

import threading
from contextlib import contextmanager
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Generic, Iterator, Optional, Tuple, TypeVar

from slotbook.core.observable import Observable
from slotbook.models.errors import (
    NotFoundError,
    SchedulingError,
    StorageError,
    ValidationError,
)
from slotbook.storage.tables import Table
from slotbook.utils.logger import LoggerMixin

# Record types expose: id, created_at, sort_key, normalized(), validate()
R = TypeVar("R")


@dataclass(frozen=True)
class CollectionSnapshot(Generic[R]):
    """Immutable view of one store's state."""
    records: Tuple[R, ...]
    is_loading: bool
    error: Optional[SchedulingError]


class TimedRecordStore(Observable, LoggerMixin, Generic[R]):
    """Cache + business rules for one record collection."""

    entity = "record"

    def __init__(self, table: Table, lock: Optional[threading.RLock] = None):
        super().__init__()
        self._table = table
        self._lock = lock if lock is not None else threading.RLock()
        self._records: Tuple[R, ...] = ()
        self._is_loading = False
        self._loaded = False
        self._load_generation = 0
        self._error: Optional[SchedulingError] = None

    # ==================== State ====================

    @property
    def records(self) -> Tuple[R, ...]:
        return self._records

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def error(self) -> Optional[SchedulingError]:
        return self._error

    def snapshot(self) -> CollectionSnapshot:
        return CollectionSnapshot(self._records, self._is_loading, self._error)

    def get(self, record_id: int) -> R:
        """Look a record up in the cache."""
        for record in self._records:
            if record.id == record_id:
                return record
        raise NotFoundError(self.entity, record_id)

    # ==================== Operations ====================

    def load_all(self) -> bool:
        """
        Refresh the cache from storage, sorted by the primary time field.

        Returns:
            True if this call reloaded, False if it was skipped because a
            load was in flight or completed while this call waited
        """
        if self._is_loading:
            self.logger.debug(f"{self.entity} load already in flight, skipping")
            return False

        seen = self._load_generation
        with self._lock:
            if self._is_loading or self._load_generation != seen:
                self.logger.debug(f"{self.entity} load coalesced with a completed load")
                return False
            with self._operation("load"):
                self._reload()
        return True

    def create(self, record: R) -> R:
        """
        Validate and persist a new record, then reload.

        Any id on the input is ignored; storage assigns one.

        Raises:
            ValidationError, OverlapError, StorageError
        """
        with self._operation("create"):
            self.ensure_loaded()
            candidate = replace(record.normalized(), id=None, created_at=None)
            self._validate(candidate, exclude_id=None)
            candidate = replace(candidate, created_at=datetime.now().replace(microsecond=0))
            new_id = self._table.add(candidate)
            created = replace(candidate, id=new_id)
            self._reload()
        self.logger.info(f"Created {self.entity} {new_id}")
        return created

    def update(self, record: R) -> R:
        """
        Replace a stored record (full record, by id), then reload.

        The record is excluded from its own overlap check and keeps the
        created_at stamped at creation.

        Raises:
            ValidationError, NotFoundError, OverlapError, StorageError
        """
        with self._operation("update"):
            if record.id is None:
                raise ValidationError("id", f"an {self.entity} id is required for update")
            self.ensure_loaded()
            stored = self._table.get(record.id)
            candidate = replace(record.normalized(), created_at=stored.created_at)
            self._validate(candidate, exclude_id=candidate.id)
            self._table.put(candidate)
            self._reload()
        self.logger.info(f"Updated {self.entity} {candidate.id}")
        return candidate

    def delete(self, record_id: int) -> None:
        """
        Remove a record by id, then reload.

        Raises:
            NotFoundError, StorageError
        """
        with self._operation("delete"):
            self._table.delete(record_id)
            self._reload()
        self.logger.info(f"Deleted {self.entity} {record_id}")

    def ensure_loaded(self) -> None:
        """Load the cache once so validation never reads an unloaded snapshot."""
        with self._lock:
            if not self._loaded:
                self._reload()

    # ==================== Internals ====================

    def _validate(self, record: R, exclude_id: Optional[int]) -> None:
        record.validate()

    def _reload(self) -> None:
        """Swap in a fresh sorted cache. Caller holds the lock."""
        self._is_loading = True
        self._notify()
        try:
            records = self._table.list_all()
        finally:
            self._is_loading = False
        self._records = tuple(sorted(records, key=lambda r: (r.sort_key, r.id)))
        self._loaded = True
        self._load_generation += 1
        self.logger.debug(f"Loaded {len(self._records)} {self.entity} records")
        self._notify()

    @contextmanager
    def _operation(self, action: str) -> Iterator[None]:
        """
        Serialize one operation and record its failure.

        The previous error is cleared when the operation starts. On failure
        the cache is untouched, the error is stored and published, and the
        exception propagates to the caller.
        """
        with self._lock:
            self._error = None
            try:
                yield
            except SchedulingError as e:
                self._error = e
                if isinstance(e, StorageError):
                    self.logger.error(f"Failed to {action} {self.entity}: {e}", exc_info=True)
                else:
                    self.logger.warning(f"Rejected {action} {self.entity}: {e}")
                self._notify()
                raise
