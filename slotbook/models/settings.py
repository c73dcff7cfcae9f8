# File: slotbook/models/settings.py
"""
Overlap policy toggles read by the appointment store at check time.
"""

from dataclasses import dataclass, fields, replace
from typing import Optional

from .errors import ValidationError


@dataclass(frozen=True)
class OverlapSettings:
    """Persisted overlap policy."""
    allow_appointment_overlap: bool = False
    allow_event_overlap: bool = False

    def merged(self, changes: 'SettingsUpdate') -> 'OverlapSettings':
        """Apply every non-None field of `changes`."""
        updates = {}
        for f in fields(changes):
            value = getattr(changes, f.name)
            if value is None:
                continue
            if not isinstance(value, bool):
                raise ValidationError(f.name, f"must be a bool, got {type(value).__name__}")
            updates[f.name] = value
        return replace(self, **updates)

    def to_dict(self) -> dict:
        return {
            'allow_appointment_overlap': self.allow_appointment_overlap,
            'allow_event_overlap': self.allow_event_overlap,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'OverlapSettings':
        """
        Unknown keys are ignored; missing keys fall back to defaults.

        Raises:
            ValidationError: a stored toggle is not a bool
        """
        values = {}
        for f in fields(cls):
            value = data.get(f.name, f.default)
            if not isinstance(value, bool):
                raise ValidationError(f.name, f"must be a bool, got {value!r}")
            values[f.name] = value
        return cls(**values)


@dataclass(frozen=True)
class SettingsUpdate:
    """Partial settings change; None leaves a field untouched."""
    allow_appointment_overlap: Optional[bool] = None
    allow_event_overlap: Optional[bool] = None
