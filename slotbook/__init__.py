"""
slotbook: a local scheduling store where operator events and client
appointments share one timeline without unintended double-booking.
"""

from slotbook.models import (
    Appointment,
    APPOINTMENT_DURATION,
    CallRecord,
    Event,
    EventStatus,
    NotFoundError,
    OverlapError,
    OverlapKind,
    OverlapSettings,
    SchedulingError,
    SettingsUpdate,
    StorageError,
    ValidationError,
)
from slotbook.core import (
    AppointmentStore,
    CallLog,
    Config,
    EventStore,
    SchedulingSnapshot,
    SchedulingStore,
    SettingsStore,
)
from slotbook.storage import Database, JsonStateFile

__version__ = "1.0.0"

__all__ = [
    "Appointment",
    "APPOINTMENT_DURATION",
    "CallRecord",
    "Event",
    "EventStatus",
    "NotFoundError",
    "OverlapError",
    "OverlapKind",
    "OverlapSettings",
    "SchedulingError",
    "SettingsUpdate",
    "StorageError",
    "ValidationError",
    "AppointmentStore",
    "CallLog",
    "Config",
    "EventStore",
    "SchedulingSnapshot",
    "SchedulingStore",
    "SettingsStore",
    "Database",
    "JsonStateFile",
]
