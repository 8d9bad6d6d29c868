"""Schemas for job catalog records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from jobtrack.models.job import JobType


class JobSummary(BaseModel):
    """Job fields embedded in tracked application responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    company: str
    location: str
    job_type: str
    platform: str
    source_url: str | None = None


class JobResponse(JobSummary):
    """Full job record."""

    source_id: str
    deadline: datetime | None = None
    salary: str | None = None
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class JobUpsert(BaseModel):
    """Job data accepted from the catalog collaborator."""

    title: str = Field(..., min_length=1, max_length=500)
    company: str = Field(..., min_length=1, max_length=500)
    location: str = Field(..., min_length=1, max_length=500)
    job_type: JobType = JobType.N_A
    platform: str = Field(..., min_length=1, max_length=100)
    source_id: str = Field(..., min_length=1, max_length=255)
    source_url: str | None = None
    deadline: datetime | None = None
    salary: str | None = None
    description: str | None = None
