"""Database models."""

from jobtrack.models.job import Job, JobType
from jobtrack.models.status_history import StatusHistoryEntry
from jobtrack.models.tracked_application import ApplicationStatus, TrackedApplication

__all__ = [
    "ApplicationStatus",
    "Job",
    "JobType",
    "StatusHistoryEntry",
    "TrackedApplication",
]
