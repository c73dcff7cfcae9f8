# File: slotbook/models/calls.py

from dataclasses import dataclass, field
from datetime import datetime
from uuid import uuid4

from .common import coerce_datetime, format_datetime
from .errors import ValidationError


@dataclass
class CallRecord:
    """One entry in the operator call journal."""
    name: str
    phone_number: str
    issue: str
    start_time: datetime
    end_time: datetime
    id: str = field(default_factory=lambda: uuid4().hex)

    def __post_init__(self):
        try:
            self.start_time = coerce_datetime(self.start_time, "start_time")
            self.end_time = coerce_datetime(self.end_time, "end_time")
        except ValueError as e:
            raise ValidationError("start_time", str(e)) from None
        if self.start_time is None or self.end_time is None:
            raise ValidationError("start_time", "start and end are required")
        if self.end_time < self.start_time:
            raise ValidationError("end_time", "must not be before start_time")

    def duration_minutes(self) -> int:
        return int((self.end_time - self.start_time).total_seconds() / 60)

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'phone_number': self.phone_number,
            'issue': self.issue,
            'start_time': format_datetime(self.start_time),
            'end_time': format_datetime(self.end_time),
        }


def call_from_dict(data: dict) -> CallRecord:
    return CallRecord(
        id=str(data['id']),
        name=str(data.get('name', '')),
        phone_number=str(data.get('phone_number', '')),
        issue=str(data.get('issue', '')),
        start_time=data.get('start_time'),
        end_time=data.get('end_time'),
    )
