"""Pydantic schemas."""

from jobtrack.schemas.jobs import JobResponse, JobSummary
from jobtrack.schemas.tracking import (
    StatusHistoryItem,
    StatusHistoryResponse,
    StatusUpdateRequest,
    TrackedApplicationCreate,
    TrackedApplicationPage,
    TrackedApplicationResponse,
    TrackedApplicationUpdate,
)

__all__ = [
    "JobResponse",
    "JobSummary",
    "StatusHistoryItem",
    "StatusHistoryResponse",
    "StatusUpdateRequest",
    "TrackedApplicationCreate",
    "TrackedApplicationPage",
    "TrackedApplicationResponse",
    "TrackedApplicationUpdate",
]
