"""Application services."""

from jobtrack.services.job_catalog import JobCatalog, get_job_catalog
from jobtrack.services.tracking_service import (
    ApplicationPage,
    TrackingService,
    get_tracking_service,
)

__all__ = [
    "ApplicationPage",
    "JobCatalog",
    "TrackingService",
    "get_job_catalog",
    "get_tracking_service",
]
