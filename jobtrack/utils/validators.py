"""Validation logic for tracked application input."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from jobtrack.core.exceptions import ValidationError
from jobtrack.models.tracked_application import ApplicationStatus

MAX_TAGS = 50
MAX_NEXT_STEPS = 100
MAX_INTERVIEW_ROUNDS = 20


@dataclass
class ValidationResult:
    """Result of validation process."""

    is_valid: bool
    error: str | None = None
    field_name: str | None = None
    warnings: list[str] = field(default_factory=list)


def parse_status(value: ApplicationStatus | str) -> ApplicationStatus:
    """Coerce a raw status value, rejecting anything outside the enumerated set."""
    if isinstance(value, ApplicationStatus):
        return value
    try:
        return ApplicationStatus(str(value).strip())
    except ValueError:
        allowed = ", ".join(s.value for s in ApplicationStatus)
        raise ValidationError(
            f"Invalid status '{value}'. Allowed values: {allowed}", field="status"
        ) from None


def to_naive_utc(value: datetime) -> datetime:
    """Normalize a datetime to timezone-naive UTC for DB storage."""
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


def validate_application_update(changes: dict[str, Any]) -> ValidationResult:
    """Validate a whole-field replacement payload."""
    warnings = []

    tags = changes.get("custom_tags")
    if tags is not None:
        if len(tags) > MAX_TAGS:
            return ValidationResult(
                is_valid=False,
                error=f"Cannot store more than {MAX_TAGS} tags",
                field_name="custom_tags",
            )
        if any(not tag.strip() for tag in tags):
            return ValidationResult(
                is_valid=False,
                error="Tags must not be blank",
                field_name="custom_tags",
            )
        if len({tag.strip().lower() for tag in tags}) != len(tags):
            warnings.append("Duplicate tags were supplied")

    steps = changes.get("next_steps")
    if steps is not None:
        if len(steps) > MAX_NEXT_STEPS:
            return ValidationResult(
                is_valid=False,
                error=f"Cannot store more than {MAX_NEXT_STEPS} next steps",
                field_name="next_steps",
            )
        if any(not step.strip() for step in steps):
            return ValidationResult(
                is_valid=False,
                error="Next steps must not be blank",
                field_name="next_steps",
            )

    dates = changes.get("interview_dates")
    if dates is not None and len(dates) > MAX_INTERVIEW_ROUNDS:
        return ValidationResult(
            is_valid=False,
            error=f"Cannot schedule more than {MAX_INTERVIEW_ROUNDS} interview rounds",
            field_name="interview_dates",
        )

    return ValidationResult(is_valid=True, warnings=warnings)
