# File: slotbook/core/overlap.py
"""
Overlap detection for appointment writes.

Appointments occupy [datetime, datetime + 60 min). A candidate conflicts
with an existing interval [a, b) iff start < b and end > a, so back-to-back
slots that merely touch are accepted.

Only appointment writes are checked. Events never are, whatever their
status: they are operator blocks and may stack freely.
"""

from datetime import datetime
from typing import Iterable, List, Optional

from slotbook.models.appointments import Appointment, APPOINTMENT_DURATION
from slotbook.models.common import Interval
from slotbook.models.enums import OverlapKind
from slotbook.models.errors import OverlapError
from slotbook.models.events import Event
from slotbook.models.settings import OverlapSettings


def appointment_interval(start: datetime) -> Interval:
    return Interval(start, start + APPOINTMENT_DURATION)


def conflicting_appointments(
    candidate: Interval,
    appointments: Iterable[Appointment],
    exclude_id: Optional[int] = None
) -> List[int]:
    """Ids of appointments whose slot intersects `candidate`, skipping `exclude_id`."""
    return [
        appt.id for appt in appointments
        if not (exclude_id is not None and appt.id == exclude_id)
        and candidate.overlaps_with(appt.interval)
    ]


def conflicting_events(candidate: Interval, events: Iterable[Event]) -> List[int]:
    """Ids of events whose block intersects `candidate`."""
    return [event.id for event in events if candidate.overlaps_with(event.interval)]


def check_appointment_overlap(
    start: datetime,
    appointments: Iterable[Appointment],
    events: Iterable[Event],
    settings: OverlapSettings,
    exclude_id: Optional[int] = None
) -> None:
    """
    Gate an appointment write against the current collections.

    Args:
        start: candidate slot start
        appointments: existing appointments
        events: existing events
        settings: current overlap policy
        exclude_id: id of the appointment being edited

    Raises:
        OverlapError: kind APPOINTMENT first, then kind EVENT

    Algorithm:
        1. Unless allow_appointment_overlap, scan appointments (minus exclude_id)
        2. Unless allow_event_overlap, scan events
        A disabled check is skipped entirely.
    """
    candidate = appointment_interval(start)

    if not settings.allow_appointment_overlap:
        clashes = conflicting_appointments(candidate, appointments, exclude_id)
        if clashes:
            raise OverlapError(OverlapKind.APPOINTMENT, clashes)

    if not settings.allow_event_overlap:
        clashes = conflicting_events(candidate, events)
        if clashes:
            raise OverlapError(OverlapKind.EVENT, clashes)
