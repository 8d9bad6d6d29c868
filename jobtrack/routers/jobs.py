"""Read-only API routes for the job catalog."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError

from jobtrack.core.exceptions import DatabaseError
from jobtrack.routers.dependencies import get_current_user_id
from jobtrack.schemas.jobs import JobResponse
from jobtrack.services.job_catalog import JobCatalog, get_job_catalog

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.get("/{job_id}", response_model=JobResponse)
async def get_job(
    job_id: int,
    user_id: str = Depends(get_current_user_id),
    catalog: JobCatalog = Depends(get_job_catalog),
):
    """Get a job posting by ID."""
    try:
        return await catalog.get(job_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error getting job {job_id}: {e}")
        raise DatabaseError() from e
