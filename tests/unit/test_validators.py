"""Tests for tracked application validators."""

from datetime import datetime, timedelta, timezone

import pytest

from jobtrack.core.exceptions import ValidationError
from jobtrack.models import ApplicationStatus
from jobtrack.utils.validators import (
    MAX_INTERVIEW_ROUNDS,
    MAX_TAGS,
    ValidationResult,
    parse_status,
    to_naive_utc,
    validate_application_update,
)


class TestParseStatus:
    """Tests for parse_status."""

    def test_enum_passes_through(self):
        """Test that enum members are returned as is."""
        assert parse_status(ApplicationStatus.OFFER) is ApplicationStatus.OFFER

    @pytest.mark.parametrize("raw", ["applied", " applied "])
    def test_string_is_coerced(self, raw):
        """Test raw strings are accepted."""
        assert parse_status(raw) == ApplicationStatus.APPLIED

    @pytest.mark.parametrize("raw", ["Applied", "hired", "", None])
    def test_unknown_value_rejected(self, raw):
        """Test values outside the enumerated set."""
        with pytest.raises(ValidationError) as exc_info:
            parse_status(raw)

        assert exc_info.value.field == "status"
        assert "not_interested" in exc_info.value.message


class TestToNaiveUtc:
    """Tests for to_naive_utc."""

    def test_naive_unchanged(self):
        """Test naive datetimes are treated as UTC already."""
        value = datetime(2026, 1, 1, 12, 0)
        assert to_naive_utc(value) == value

    def test_aware_converted(self):
        """Test aware datetimes are converted to UTC."""
        value = datetime(2026, 1, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        result = to_naive_utc(value)

        assert result == datetime(2026, 1, 1, 17, 0)
        assert result.tzinfo is None


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_defaults(self):
        """Test default values and per-instance warning lists."""
        first = ValidationResult(is_valid=True)
        second = ValidationResult(is_valid=False, error="bad", field_name="notes")
        first.warnings.append("duplicate")

        assert first.field_name is None
        assert second.field_name == "notes"
        assert second.warnings == []


class TestValidateApplicationUpdate:
    """Tests for validate_application_update."""

    def test_empty_update_valid(self):
        """Test that an empty payload is valid."""
        result = validate_application_update({})
        assert result.is_valid is True
        assert result.warnings == []

    def test_too_many_tags(self):
        """Test the tag limit."""
        result = validate_application_update(
            {"custom_tags": [f"tag{i}" for i in range(MAX_TAGS + 1)]}
        )
        assert result.is_valid is False
        assert result.field_name == "custom_tags"

    def test_blank_tag(self):
        """Test that blank tags are rejected."""
        result = validate_application_update({"custom_tags": ["remote", " "]})
        assert result.is_valid is False
        assert result.field_name == "custom_tags"

    def test_duplicate_tags_warn(self):
        """Test that duplicate tags only warn."""
        result = validate_application_update({"custom_tags": ["Remote", "remote"]})
        assert result.is_valid is True
        assert result.warnings == ["Duplicate tags were supplied"]

    def test_blank_next_step(self):
        """Test that blank tasks are rejected."""
        result = validate_application_update({"next_steps": ["call back", ""]})
        assert result.is_valid is False
        assert result.field_name == "next_steps"

    def test_too_many_interview_rounds(self):
        """Test the interview round limit."""
        dates = [datetime(2026, 1, 1)] * (MAX_INTERVIEW_ROUNDS + 1)
        result = validate_application_update({"interview_dates": dates})
        assert result.is_valid is False
        assert result.field_name == "interview_dates"

    def test_none_lists_valid(self):
        """Test that null lists pass validation."""
        result = validate_application_update(
            {"custom_tags": None, "next_steps": None, "interview_dates": None}
        )
        assert result.is_valid is True
