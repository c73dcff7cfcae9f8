# File: tests/unit/test_models.py
"""
Unit tests for data models.
Tests the dataclasses, their coercion and their validation rules.
"""

import pytest
from datetime import datetime, timedelta, timezone

from slotbook.models import (
    Appointment,
    APPOINTMENT_DURATION,
    CallRecord,
    Event,
    EventStatus,
    Interval,
    OverlapError,
    OverlapKind,
    OverlapSettings,
    SettingsUpdate,
    ValidationError,
    appointment_from_dict,
    event_from_dict,
    parse_iso_datetime,
)
from slotbook.models.common import coerce_datetime


# ==================== Datetime Helpers ====================

class TestDatetimeHelpers:
    """Tests for ISO parsing and local wall-clock coercion."""

    def test_parse_iso_with_z_suffix(self):
        """Test that a trailing Z is treated as UTC."""
        parsed = parse_iso_datetime("2024-01-10T10:00:00Z")

        assert parsed == datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)

    def test_parse_date_only(self):
        """Test that a bare date parses as midnight."""
        assert parse_iso_datetime("2024-01-10") == datetime(2024, 1, 10)

    def test_parse_garbage_returns_none(self):
        assert parse_iso_datetime("next tuesday") is None
        assert parse_iso_datetime(None) is None

    def test_coerce_aware_becomes_naive_local(self):
        """Test that aware values are converted to local time and made naive."""
        aware = datetime(2024, 1, 10, 10, 0, tzinfo=timezone.utc)

        result = coerce_datetime(aware, "datetime")

        assert result.tzinfo is None
        assert result == aware.astimezone().replace(tzinfo=None)

    def test_coerce_rejects_unparseable_string(self):
        with pytest.raises(ValueError, match="not an ISO datetime"):
            coerce_datetime("soon", "datetime")


# ==================== Interval Tests ====================

class TestInterval:
    """Tests for half-open interval intersection."""

    def test_overlapping_intervals(self):
        a = Interval(datetime(2024, 1, 10, 10, 0), datetime(2024, 1, 10, 11, 0))
        b = Interval(datetime(2024, 1, 10, 10, 30), datetime(2024, 1, 10, 11, 30))

        assert a.overlaps_with(b) is True
        assert b.overlaps_with(a) is True

    def test_touching_intervals_do_not_overlap(self):
        """Test that [10, 11) and [11, 12) are disjoint."""
        a = Interval(datetime(2024, 1, 10, 10, 0), datetime(2024, 1, 10, 11, 0))
        b = Interval(datetime(2024, 1, 10, 11, 0), datetime(2024, 1, 10, 12, 0))

        assert a.overlaps_with(b) is False
        assert b.overlaps_with(a) is False

    def test_containment_overlaps(self):
        outer = Interval(datetime(2024, 1, 10, 9, 0), datetime(2024, 1, 10, 12, 0))
        inner = Interval(datetime(2024, 1, 10, 10, 0), datetime(2024, 1, 10, 11, 0))

        assert outer.overlaps_with(inner) is True
        assert inner.overlaps_with(outer) is True

    def test_duration_minutes(self):
        interval = Interval(datetime(2024, 1, 10, 9, 0), datetime(2024, 1, 10, 10, 30))
        assert interval.duration_minutes() == 90


# ==================== Event Tests ====================

class TestEvent:
    """Tests for Event dataclass."""

    def test_event_defaults(self):
        """Test that a new event starts ongoing with empty text fields."""
        event = Event("Standup", datetime(2024, 1, 10, 9, 0), datetime(2024, 1, 10, 9, 15))

        assert event.status == EventStatus.ONGOING
        assert event.description == ""
        assert event.location == ""
        assert event.id is None
        assert event.created_at is None

    def test_string_status_is_coerced(self):
        event = Event(
            "Standup",
            datetime(2024, 1, 10, 9, 0),
            datetime(2024, 1, 10, 9, 15),
            status="Canceled"
        )
        assert event.status == EventStatus.CANCELED

    def test_unknown_status_raises_validation_error(self):
        with pytest.raises(ValidationError, match="status"):
            Event("x", datetime(2024, 1, 10, 9), datetime(2024, 1, 10, 10), status="paused")

    def test_iso_strings_are_parsed(self):
        event = Event("x", "2024-01-10T09:00:00", "2024-01-10T10:00:00")

        assert event.from_datetime == datetime(2024, 1, 10, 9, 0)
        assert event.interval.duration_minutes() == 60

    def test_validate_rejects_equal_bounds(self):
        """Test that from == to is rejected."""
        event = Event("x", datetime(2024, 1, 10, 9), datetime(2024, 1, 10, 9))

        with pytest.raises(ValidationError, match="to_datetime"):
            event.validate()

    def test_validate_rejects_reversed_bounds(self):
        event = Event("x", datetime(2024, 1, 10, 10), datetime(2024, 1, 10, 9))

        with pytest.raises(ValidationError):
            event.validate()

    def test_validate_rejects_blank_title(self):
        event = Event("   ", datetime(2024, 1, 10, 9), datetime(2024, 1, 10, 10))

        with pytest.raises(ValidationError, match="title"):
            event.validate()

    def test_normalized_trims_text(self):
        event = Event(
            "  Standup ",
            datetime(2024, 1, 10, 9),
            datetime(2024, 1, 10, 10),
            description=" daily ",
            location=" room 1 "
        )

        normalized = event.normalized()

        assert normalized.title == "Standup"
        assert normalized.description == "daily"
        assert normalized.location == "room 1"
        assert event.title == "  Standup "

    def test_event_from_dict(self):
        data = {
            'id': "7",
            'title': "Review",
            'status': "done",
            'from_datetime': "2024-01-10T09:00:00",
            'to_datetime': "2024-01-10T10:00:00",
            'created_at': "2024-01-01T08:00:00",
        }

        event = event_from_dict(data)

        assert event.id == 7
        assert event.status == EventStatus.DONE
        assert event.created_at == datetime(2024, 1, 1, 8, 0)
        assert event.to_dict()['status'] == "done"


# ==================== Appointment Tests ====================

class TestAppointment:
    """Tests for Appointment dataclass."""

    def test_fixed_sixty_minute_slot(self):
        appt = Appointment("Ada", "Lovelace", "555", datetime(2024, 1, 10, 10, 0))

        assert APPOINTMENT_DURATION == timedelta(minutes=60)
        assert appt.end == datetime(2024, 1, 10, 11, 0)
        assert appt.interval == Interval(appt.datetime, appt.end)

    @pytest.mark.parametrize("field_name", ["first_name", "last_name", "phone"])
    def test_required_fields(self, field_name):
        """Test that each contact field is required after trimming."""
        fields = {
            'first_name': "Ada",
            'last_name': "Lovelace",
            'phone': "555",
            'datetime': datetime(2024, 1, 10, 10, 0),
        }
        fields[field_name] = "   "

        with pytest.raises(ValidationError) as exc_info:
            Appointment(**fields).validate()

        assert exc_info.value.field == field_name

    def test_email_is_optional(self):
        Appointment("Ada", "Lovelace", "555", datetime(2024, 1, 10, 10, 0)).validate()

    def test_normalized_drops_blank_email(self):
        appt = Appointment(
            " Ada ", " Lovelace ", " 555 ", datetime(2024, 1, 10, 10, 0),
            email="  ", note=" first visit "
        )

        normalized = appt.normalized()

        assert normalized.email is None
        assert normalized.first_name == "Ada"
        assert normalized.note == "first visit"
        assert normalized.full_name == "Ada Lovelace"

    def test_appointment_from_dict(self):
        appt = appointment_from_dict({
            'id': 3,
            'first_name': "Ada",
            'last_name': "Lovelace",
            'phone': "555",
            'email': "",
            'datetime': "2024-01-10T10:00:00",
        })

        assert appt.id == 3
        assert appt.email is None
        assert appt.note == ""
        assert appt.datetime == datetime(2024, 1, 10, 10, 0)


# ==================== Settings Tests ====================

class TestOverlapSettings:
    """Tests for the overlap policy model."""

    def test_defaults_disallow_everything(self):
        settings = OverlapSettings()

        assert settings.allow_appointment_overlap is False
        assert settings.allow_event_overlap is False

    def test_merge_only_given_fields(self):
        settings = OverlapSettings(allow_appointment_overlap=True)

        merged = settings.merged(SettingsUpdate(allow_event_overlap=True))

        assert merged == OverlapSettings(True, True)
        assert settings == OverlapSettings(True, False)

    def test_merge_rejects_non_bool(self):
        with pytest.raises(ValidationError, match="allow_event_overlap"):
            OverlapSettings().merged(SettingsUpdate(allow_event_overlap="yes"))

    def test_from_dict_ignores_unknown_keys(self):
        settings = OverlapSettings.from_dict({'allow_event_overlap': True, 'theme': "dark"})

        assert settings == OverlapSettings(False, True)

    def test_from_dict_rejects_non_bool_toggle(self):
        """Test that a hand-edited "false" string is not read as True."""
        with pytest.raises(ValidationError, match="allow_event_overlap"):
            OverlapSettings.from_dict({'allow_event_overlap': "false"})


# ==================== Error and Call Tests ====================

class TestErrors:
    """Tests for error messages."""

    def test_overlap_error_message_mentions_kind(self):
        error = OverlapError(OverlapKind.EVENT, [4])

        assert error.kind is OverlapKind.EVENT
        assert error.conflicting_ids == (4,)
        assert "existing event" in str(error)

    def test_validation_error_str(self):
        assert str(ValidationError("title", "is required")) == "title: is required"


class TestCallRecord:
    """Tests for CallRecord dataclass."""

    def test_call_gets_unique_id(self):
        start = datetime(2024, 1, 10, 10, 0)
        a = CallRecord("Ada", "555", "Booking", start, start + timedelta(minutes=5))
        b = CallRecord("Ada", "555", "Booking", start, start + timedelta(minutes=5))

        assert a.id != b.id
        assert a.duration_minutes() == 5

    def test_end_before_start_rejected(self):
        start = datetime(2024, 1, 10, 10, 0)

        with pytest.raises(ValidationError, match="end_time"):
            CallRecord("Ada", "555", "Booking", start, start - timedelta(minutes=1))
