"""API routers."""

from jobtrack.routers.jobs import router as jobs_router
from jobtrack.routers.tracked_applications import router as tracked_applications_router

__all__ = ["jobs_router", "tracked_applications_router"]
