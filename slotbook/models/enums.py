# File: slotbook/models/enums.py

from enum import Enum


class EventStatus(Enum):
    """Operator-controlled event status. Any transition is allowed."""
    ONGOING = "ongoing"
    CANCELED = "canceled"
    DONE = "done"


class OverlapKind(Enum):
    """Which collection a rejected appointment collided with."""
    APPOINTMENT = "appointment"
    EVENT = "event"
