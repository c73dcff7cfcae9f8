# File: slotbook/models/errors.py
"""
Error taxonomy shared by the storage layer and the stores.

Every failure raised to callers derives from SchedulingError.
"""

from typing import Iterable, Optional, Tuple

from .enums import OverlapKind


class SchedulingError(Exception):
    """Base class for all slotbook errors."""


class ValidationError(SchedulingError):
    """A record or setting failed validation before touching storage."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(str(self))

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class OverlapError(SchedulingError):
    """A candidate appointment collides with existing bookings."""

    def __init__(self, kind: OverlapKind, conflicting_ids: Iterable[int] = ()):
        self.kind = kind
        self.conflicting_ids: Tuple[int, ...] = tuple(conflicting_ids)
        super().__init__(str(self))

    def __str__(self) -> str:
        if self.kind is OverlapKind.EVENT:
            message = "This time slot overlaps with an existing event"
        else:
            message = "This time slot is already booked"
        if self.conflicting_ids:
            ids = ", ".join(str(i) for i in self.conflicting_ids)
            message += f" ({self.kind.value} id {ids})"
        return message


class StorageError(SchedulingError):
    """The persistence layer failed (disk, quota, corruption, locking)."""


class NotFoundError(SchedulingError):
    """An operation referenced an id that does not exist."""

    def __init__(self, entity: str, record_id: Optional[int]):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} {record_id} not found")
