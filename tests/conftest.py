# File: tests/conftest.py
"""
Pytest configuration and shared fixtures.
Provides temporary storage, wired stores and sample records for all tests.
"""

import os
import sys
import tempfile
from datetime import datetime
from pathlib import Path

import pytest

# Keep test logs out of the project tree; must happen before slotbook is imported
os.environ.setdefault("SLOTBOOK_LOGS_DIR", tempfile.mkdtemp(prefix="slotbook-logs-"))

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from slotbook.core.scheduling_store import SchedulingStore
from slotbook.core.settings_store import SettingsStore
from slotbook.models import Appointment, Event, EventStatus, SettingsUpdate
from slotbook.storage.database import Database
from slotbook.storage.state_file import JsonStateFile


# ==================== Storage Fixtures ====================

@pytest.fixture
def db_path(tmp_path):
    """Path of a fresh database file."""
    return tmp_path / "slotbook.db"


@pytest.fixture
def database(db_path):
    """Open database, closed after the test."""
    db = Database(db_path)
    yield db
    db.close()


@pytest.fixture
def settings_file(tmp_path):
    return JsonStateFile(tmp_path / "settings.json", version=1)


@pytest.fixture
def settings_store(settings_file):
    """Settings with both overlaps disallowed (the defaults)."""
    return SettingsStore(settings_file)


# ==================== Store Fixtures ====================

@pytest.fixture
def store(database, settings_store):
    """Scheduling store over an empty database."""
    scheduling = SchedulingStore(database, settings_store)
    scheduling.load_all()
    return scheduling


@pytest.fixture
def permissive_store(store):
    """Store where appointments may overlap everything."""
    store.settings.update(SettingsUpdate(
        allow_appointment_overlap=True,
        allow_event_overlap=True
    ))
    return store


# ==================== Record Fixtures ====================

def make_appointment(when: datetime, first_name: str = "Ada", **overrides) -> Appointment:
    """Appointment with valid contact details at `when`."""
    fields = {
        'first_name': first_name,
        'last_name': "Lovelace",
        'phone': "555-0100",
        'datetime': when,
    }
    fields.update(overrides)
    return Appointment(**fields)


def make_event(start: datetime, end: datetime, title: str = "Block", **overrides) -> Event:
    """Event spanning [start, end)."""
    fields = {
        'title': title,
        'from_datetime': start,
        'to_datetime': end,
    }
    fields.update(overrides)
    return Event(**fields)


@pytest.fixture
def morning_block():
    """Event [2024-01-10 09:00, 12:00), ongoing."""
    return make_event(
        datetime(2024, 1, 10, 9, 0),
        datetime(2024, 1, 10, 12, 0),
        title="Morning block",
        status=EventStatus.ONGOING,
    )


@pytest.fixture
def ten_oclock():
    """Appointment at 2024-01-10 10:00."""
    return make_appointment(datetime(2024, 1, 10, 10, 0))
