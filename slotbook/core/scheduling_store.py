# File: slotbook/core/scheduling_store.py
"""
Scheduling store facade.

Wires the events and appointments stores to one database and one lock,
so "read cache -> validate -> write -> reload" is a single critical
section across both collections. Views subscribe here and receive a
SchedulingSnapshot after every change to either collection.
"""

import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from slotbook.core.appointment_store import AppointmentStore
from slotbook.core.config_manager import Config
from slotbook.core.event_store import EventStore
from slotbook.core.observable import Observable
from slotbook.core.settings_store import SettingsStore
from slotbook.models.appointments import Appointment
from slotbook.models.errors import SchedulingError
from slotbook.models.events import Event
from slotbook.storage.database import Database
from slotbook.storage.tables import AppointmentTable, EventTable
from slotbook.utils.logger import LoggerMixin


@dataclass(frozen=True)
class SchedulingSnapshot:
    """What a view renders from."""
    events: Tuple[Event, ...]
    appointments: Tuple[Appointment, ...]
    is_loading: bool
    error: Optional[SchedulingError]


class SchedulingStore(Observable, LoggerMixin):
    """Authoritative cache over events and appointments."""

    def __init__(self, database: Database, settings: SettingsStore):
        super().__init__()
        self.database = database
        self.settings = settings
        self._lock = threading.RLock()
        self._error: Optional[SchedulingError] = None

        self.events = EventStore(EventTable(database), lock=self._lock)
        self.appointments = AppointmentStore(
            AppointmentTable(database),
            self.events,
            settings,
            lock=self._lock,
        )
        self._unsubscribers = [
            self.events.subscribe(self._relay),
            self.appointments.subscribe(self._relay),
        ]

    @classmethod
    def open(
        cls,
        db_path: Optional[Union[str, Path]] = None,
        settings_path: Optional[Union[str, Path]] = None
    ) -> 'SchedulingStore':
        """
        Build a store from Config, overriding paths where given.

        Raises:
            ValueError: Config is invalid (only checked when a default path is used)
            StorageError: the database or settings file cannot be opened
        """
        if db_path is None or settings_path is None:
            Config.ensure_directories()
            if not Config.validate():
                raise ValueError(
                    "Configuration validation failed. "
                    "Check the SLOTBOOK_* environment variables."
                )
        database = Database(db_path or Config.DB_FILE)
        try:
            settings = SettingsStore.from_path(settings_path)
        except SchedulingError:
            database.close()
            raise
        return cls(database, settings)

    def _relay(self, state) -> None:
        # Whichever store published last owns the combined error
        self._error = state.error
        self._notify()

    def snapshot(self) -> SchedulingSnapshot:
        return SchedulingSnapshot(
            events=self.events.records,
            appointments=self.appointments.records,
            is_loading=self.events.is_loading or self.appointments.is_loading,
            error=self._error,
        )

    def load_all(self) -> bool:
        """
        Reload both collections. True if either actually reloaded.

        Each store coalesces on its own, so a call that waited behind an
        in-flight load skips the collections that load already refreshed.
        """
        events_loaded = self.events.load_all()
        appointments_loaded = self.appointments.load_all()
        return events_loaded or appointments_loaded

    def close(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers = []
        self.database.close()
        self.logger.debug("Scheduling store closed")

    def __enter__(self) -> 'SchedulingStore':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
