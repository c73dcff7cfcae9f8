from .config_manager import Config
from .observable import Observable
from .overlap import check_appointment_overlap, conflicting_appointments, conflicting_events
from .record_store import TimedRecordStore, CollectionSnapshot
from .event_store import EventStore
from .settings_store import SettingsStore
from .appointment_store import AppointmentStore
from .scheduling_store import SchedulingStore, SchedulingSnapshot
from .call_log import CallLog

__all__ = [
    "Config",
    "Observable",
    "check_appointment_overlap",
    "conflicting_appointments",
    "conflicting_events",
    "TimedRecordStore",
    "CollectionSnapshot",
    "EventStore",
    "SettingsStore",
    "AppointmentStore",
    "SchedulingStore",
    "SchedulingSnapshot",
    "CallLog",
]
