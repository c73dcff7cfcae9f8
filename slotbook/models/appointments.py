# File: slotbook/models/appointments.py

from dataclasses import dataclass, replace
from datetime import datetime, timedelta
from typing import Optional

from .common import Interval, coerce_datetime, format_datetime
from .errors import ValidationError

# Every appointment occupies one fixed slot; the length is never stored.
APPOINTMENT_DURATION = timedelta(minutes=60)


@dataclass
class Appointment:
    """Client booking tied to a contact."""
    first_name: str
    last_name: str
    phone: str
    datetime: datetime
    email: Optional[str] = None
    note: str = ""
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Convert ISO strings to datetimes."""
        try:
            self.datetime = coerce_datetime(self.datetime, "datetime")
            self.created_at = coerce_datetime(self.created_at, "created_at")
        except ValueError as e:
            raise ValidationError("datetime", str(e)) from None

    @property
    def end(self) -> datetime:
        return self.datetime + APPOINTMENT_DURATION

    @property
    def interval(self) -> Interval:
        return Interval(self.datetime, self.end)

    @property
    def sort_key(self) -> datetime:
        return self.datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def normalized(self) -> 'Appointment':
        """Return a copy with text fields trimmed and a blank email dropped."""
        email = (self.email or "").strip()
        return replace(
            self,
            first_name=(self.first_name or "").strip(),
            last_name=(self.last_name or "").strip(),
            phone=(self.phone or "").strip(),
            email=email or None,
            note=(self.note or "").strip(),
        )

    def validate(self) -> None:
        """
        Check the required contact fields and the slot start.

        Raises:
            ValidationError: on the first missing field
        """
        for field_name in ('first_name', 'last_name', 'phone'):
            if not (getattr(self, field_name) or "").strip():
                raise ValidationError(field_name, "is required")
        if self.datetime is None:
            raise ValidationError("datetime", "is required")

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'first_name': self.first_name,
            'last_name': self.last_name,
            'phone': self.phone,
            'email': self.email,
            'note': self.note,
            'datetime': format_datetime(self.datetime),
            'created_at': format_datetime(self.created_at),
        }


def appointment_from_dict(data: dict) -> Appointment:
    """Create Appointment from dictionary with type safety."""
    raw_id = data.get('id')
    return Appointment(
        id=int(raw_id) if raw_id is not None else None,
        first_name=str(data.get('first_name', '')),
        last_name=str(data.get('last_name', '')),
        phone=str(data.get('phone', '')),
        email=data.get('email') or None,
        note=str(data.get('note') or ''),
        datetime=data.get('datetime'),
        created_at=data.get('created_at'),
    )
