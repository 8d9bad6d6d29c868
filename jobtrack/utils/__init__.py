"""Utility functions and classes."""

from jobtrack.utils.filters import TrackedApplicationFilter
from jobtrack.utils.validators import (
    ValidationResult,
    parse_status,
    validate_application_update,
)

__all__ = [
    "TrackedApplicationFilter",
    "ValidationResult",
    "parse_status",
    "validate_application_update",
]
