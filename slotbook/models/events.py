# File: slotbook/models/events.py

from dataclasses import dataclass, replace
from datetime import datetime
from typing import Optional

from .enums import EventStatus
from .common import Interval, coerce_datetime, format_datetime
from .errors import ValidationError


def coerce_status(value) -> EventStatus:
    """Accept an EventStatus or its string value."""
    if isinstance(value, EventStatus):
        return value
    try:
        return EventStatus(str(value).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in EventStatus)
        raise ValidationError("status", f"must be one of {allowed}, got {value!r}") from None


@dataclass
class Event:
    """Operator-defined block on the timeline."""
    title: str
    from_datetime: datetime
    to_datetime: datetime
    description: str = ""
    location: str = ""
    status: EventStatus = EventStatus.ONGOING
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    def __post_init__(self):
        """Convert string status and datetimes."""
        self.status = coerce_status(self.status)
        try:
            self.from_datetime = coerce_datetime(self.from_datetime, "from_datetime")
            self.to_datetime = coerce_datetime(self.to_datetime, "to_datetime")
            self.created_at = coerce_datetime(self.created_at, "created_at")
        except ValueError as e:
            raise ValidationError("datetime", str(e)) from None

    @property
    def interval(self) -> Interval:
        return Interval(self.from_datetime, self.to_datetime)

    @property
    def sort_key(self) -> datetime:
        return self.from_datetime

    def normalized(self) -> 'Event':
        """Return a copy with text fields trimmed."""
        return replace(
            self,
            title=(self.title or "").strip(),
            description=(self.description or "").strip(),
            location=(self.location or "").strip(),
        )

    def validate(self) -> None:
        """
        Check required fields and the time range.

        Raises:
            ValidationError: empty title, missing datetimes or from >= to
        """
        if not (self.title or "").strip():
            raise ValidationError("title", "is required")
        if self.from_datetime is None or self.to_datetime is None:
            raise ValidationError("from_datetime", "both start and end are required")
        if self.from_datetime >= self.to_datetime:
            raise ValidationError(
                "to_datetime",
                f"must be after from_datetime ({self.from_datetime.isoformat()})"
            )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'title': self.title,
            'description': self.description,
            'location': self.location,
            'status': self.status.value,
            'from_datetime': format_datetime(self.from_datetime),
            'to_datetime': format_datetime(self.to_datetime),
            'created_at': format_datetime(self.created_at),
        }


def event_from_dict(data: dict) -> Event:
    """Create Event from dictionary with type safety."""
    raw_id = data.get('id')
    return Event(
        id=int(raw_id) if raw_id is not None else None,
        title=str(data.get('title', '')),
        description=str(data.get('description') or ''),
        location=str(data.get('location') or ''),
        status=data.get('status', EventStatus.ONGOING.value),
        from_datetime=data.get('from_datetime'),
        to_datetime=data.get('to_datetime'),
        created_at=data.get('created_at'),
    )
