# File: slotbook/core/appointment_store.py

import threading
from typing import Optional

from slotbook.core.event_store import EventStore
from slotbook.core.overlap import check_appointment_overlap
from slotbook.core.record_store import TimedRecordStore
from slotbook.core.settings_store import SettingsStore
from slotbook.models.appointments import Appointment
from slotbook.storage.tables import Table


class AppointmentStore(TimedRecordStore[Appointment]):
    """Client bookings, gated by the overlap policy on every write."""

    entity = "appointment"

    def __init__(
        self,
        table: Table,
        events: EventStore,
        settings: SettingsStore,
        lock: Optional[threading.RLock] = None
    ):
        super().__init__(table, lock)
        self._events = events
        self._settings = settings

    def _validate(self, record: Appointment, exclude_id: Optional[int]) -> None:
        record.validate()
        self._events.ensure_loaded()
        # Policy is read per write
        check_appointment_overlap(
            record.datetime,
            self._records,
            self._events.records,
            self._settings.get(),
            exclude_id=exclude_id,
        )
