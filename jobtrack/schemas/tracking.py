"""Schemas for tracked applications and their status history."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from jobtrack.models.tracked_application import ApplicationStatus
from jobtrack.schemas.jobs import JobSummary


class StatusUpdateRequest(BaseModel):
    """Request to move a tracked application to a new status."""

    status: ApplicationStatus = Field(..., description="Target status")
    notes: str | None = Field(
        default=None, max_length=5000, description="Note stored with the transition"
    )


class TrackedApplicationCreate(BaseModel):
    """Request to start tracking a job explicitly."""

    job_id: int = Field(..., ge=1)
    status: ApplicationStatus = ApplicationStatus.NEW
    notes: str | None = Field(default=None, max_length=5000)
    is_favorite: bool = False


class TrackedApplicationUpdate(BaseModel):
    """Whole-field replacement of the editable fields.

    Omitted fields are left untouched; a provided list replaces the stored
    list entirely. Status is changed only through the status endpoint.
    """

    model_config = ConfigDict(extra="forbid")

    next_steps: list[str] | None = None
    interview_dates: list[datetime] | None = None
    custom_tags: list[str] | None = None
    notes: str | None = Field(default=None, max_length=5000)
    is_favorite: bool | None = None
    reminder_date: datetime | None = None


class TrackedApplicationResponse(BaseModel):
    """Tracked application joined with its job."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: str
    job_id: int
    status: ApplicationStatus
    is_favorite: bool
    custom_tags: list[str]
    notes: str | None
    next_steps: list[str]
    interview_dates: list[datetime]
    reminder_date: datetime | None
    created_at: datetime
    updated_at: datetime
    job: JobSummary | None = None


class TrackedApplicationPage(BaseModel):
    """Paginated list of tracked applications."""

    items: list[TrackedApplicationResponse]
    total: int
    page: int
    limit: int
    pages: int


class StatusHistoryItem(BaseModel):
    """Single status history entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    previous_status: str
    new_status: str
    notes: str
    updated_by: str
    created_at: datetime


class StatusHistoryResponse(BaseModel):
    """Status history of one tracked application, oldest first."""

    tracked_application_id: int
    entries: list[StatusHistoryItem]
    total_count: int


class ErrorResponse(BaseModel):
    """Structured error body returned for handled failures."""

    code: str
    message: str
    trace_id: str
    detail: dict | None = None
