# File: slotbook/models/common.py

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union


def parse_iso_datetime(date_str: Optional[str]) -> Optional[datetime]:
    """Robustly parse ISO date strings with 'Z' or offsets."""
    if not date_str:
        return None
    try:
        # fromisoformat only accepts 'Z' from Python 3.11 on
        clean_str = date_str.replace('Z', '+00:00')
        return datetime.fromisoformat(clean_str)
    except ValueError:
        # Fallback for simple date strings without time
        try:
            return datetime.strptime(date_str, "%Y-%m-%d")
        except ValueError:
            return None


def to_local_naive(value: datetime) -> datetime:
    """Convert an aware datetime to local wall-clock time; naive values pass through."""
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def coerce_datetime(value: Union[datetime, str, None], field_name: str) -> Optional[datetime]:
    """
    Accept a datetime or ISO string and return a naive local datetime.

    Raises:
        ValueError: if a string cannot be parsed
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return to_local_naive(value)
    parsed = parse_iso_datetime(value)
    if parsed is None:
        raise ValueError(f"{field_name} is not an ISO datetime: {value!r}")
    return to_local_naive(parsed)


def format_datetime(value: Optional[datetime]) -> Optional[str]:
    """Serialize a datetime for storage."""
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Interval:
    """Half-open time interval [start, end)."""
    start: datetime
    end: datetime

    def overlaps_with(self, other: 'Interval') -> bool:
        """Touching boundaries do not overlap."""
        return self.start < other.end and self.end > other.start

    def duration_minutes(self) -> int:
        return int((self.end - self.start).total_seconds() / 60)
