from .enums import EventStatus, OverlapKind
from .common import Interval, parse_iso_datetime, coerce_datetime
from .errors import (
    SchedulingError,
    ValidationError,
    OverlapError,
    StorageError,
    NotFoundError,
)
from .events import Event, event_from_dict, coerce_status
from .appointments import Appointment, APPOINTMENT_DURATION, appointment_from_dict
from .settings import OverlapSettings, SettingsUpdate
from .calls import CallRecord, call_from_dict

__all__ = [
    "EventStatus",
    "OverlapKind",
    "Interval",
    "parse_iso_datetime",
    "coerce_datetime",
    "SchedulingError",
    "ValidationError",
    "OverlapError",
    "StorageError",
    "NotFoundError",
    "Event",
    "event_from_dict",
    "coerce_status",
    "Appointment",
    "APPOINTMENT_DURATION",
    "appointment_from_dict",
    "OverlapSettings",
    "SettingsUpdate",
    "CallRecord",
    "call_from_dict",
]
