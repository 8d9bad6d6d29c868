"""API routes for tracked applications."""

import logging

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.exc import SQLAlchemyError

from jobtrack.core.config import settings
from jobtrack.core.exceptions import DatabaseError
from jobtrack.models.tracked_application import ApplicationStatus
from jobtrack.routers.dependencies import get_current_user_id
from jobtrack.schemas.tracking import (
    StatusHistoryItem,
    StatusHistoryResponse,
    StatusUpdateRequest,
    TrackedApplicationCreate,
    TrackedApplicationPage,
    TrackedApplicationResponse,
    TrackedApplicationUpdate,
)
from jobtrack.services.tracking_service import TrackingService, get_tracking_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tracked-applications", tags=["tracked-applications"])


@router.put("/{job_id}/status", response_model=TrackedApplicationResponse)
async def set_status(
    job_id: int,
    request: StatusUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Set the pipeline status for a job, creating the record on first touch."""
    try:
        return await service.set_status(user_id, job_id, request.status, request.notes)
    except SQLAlchemyError as e:
        logger.error(f"Database error setting status for job {job_id}: {e}")
        raise DatabaseError() from e


@router.get("", response_model=TrackedApplicationPage)
async def list_applications(
    status_filter: ApplicationStatus | None = Query(default=None, alias="status"),
    search: str | None = Query(default=None, max_length=200),
    favorite: bool | None = Query(default=None),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    sort: str = Query(default="-created_at"),
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """List the current user's tracked applications."""
    limit = min(limit or settings.default_page_size, settings.max_page_size)
    try:
        result = await service.list_applications(
            user_id,
            status=status_filter,
            search=search,
            favorite=favorite,
            page=page,
            limit=limit,
            sort=sort,
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error listing applications: {e}")
        raise DatabaseError() from e

    return TrackedApplicationPage(
        items=[TrackedApplicationResponse.model_validate(r) for r in result.items],
        total=result.total,
        page=result.page,
        limit=result.limit,
        pages=result.pages,
    )


@router.get("/stats", response_model=dict[str, int])
async def get_status_counts(
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Count the current user's applications per status."""
    try:
        return await service.status_counts(user_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error computing status counts: {e}")
        raise DatabaseError() from e


@router.get("/reminders", response_model=list[TrackedApplicationResponse])
async def get_due_reminders(
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Applications whose reminder date has passed."""
    try:
        return await service.due_reminders(user_id=user_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error getting reminders: {e}")
        raise DatabaseError() from e


@router.post("", response_model=TrackedApplicationResponse)
async def create_application(
    request: TrackedApplicationCreate,
    response: Response,
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Start tracking a job; returns the existing record if already tracked."""
    try:
        record, created = await service.create(
            user_id,
            request.job_id,
            status=request.status,
            notes=request.notes,
            is_favorite=request.is_favorite,
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error creating application: {e}")
        raise DatabaseError() from e

    response.status_code = status.HTTP_201_CREATED if created else status.HTTP_200_OK
    return record


@router.get("/{application_id}", response_model=TrackedApplicationResponse)
async def get_application(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Get one tracked application."""
    try:
        return await service.get(user_id, application_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error getting application {application_id}: {e}")
        raise DatabaseError() from e


@router.get("/{application_id}/history", response_model=StatusHistoryResponse)
async def get_history(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Status history of a tracked application, oldest first."""
    try:
        entries = await service.history(user_id, application_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error getting history for {application_id}: {e}")
        raise DatabaseError() from e

    items = [StatusHistoryItem.model_validate(entry) for entry in entries]
    return StatusHistoryResponse(
        tracked_application_id=application_id,
        entries=items,
        total_count=len(items),
    )


@router.patch("/{application_id}", response_model=TrackedApplicationResponse)
async def update_application(
    application_id: int,
    request: TrackedApplicationUpdate,
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Replace editable fields; lists are replaced as a whole."""
    try:
        return await service.update_fields(
            user_id, application_id, request.model_dump(exclude_unset=True)
        )
    except SQLAlchemyError as e:
        logger.error(f"Database error updating application {application_id}: {e}")
        raise DatabaseError() from e


@router.delete("/{application_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_application(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: TrackingService = Depends(get_tracking_service),
):
    """Stop tracking a job; its status history is deleted too."""
    try:
        await service.delete(user_id, application_id)
    except SQLAlchemyError as e:
        logger.error(f"Database error deleting application {application_id}: {e}")
        raise DatabaseError() from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
