"""Tracked application model: one row per (user, job) pair."""

from datetime import datetime
from enum import Enum

from sqlalchemy import (
    JSON,
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtrack.core.storage import Base
from jobtrack.models._time import utc_now
from jobtrack.models.job import Job
from jobtrack.models.status_history import StatusHistoryEntry


class ApplicationStatus(str, Enum):
    """Pipeline status of a tracked application.

    The string values are part of the external contract: new values may be
    appended, existing ones must not be renamed.
    """

    NEW = "new"
    NOT_INTERESTED = "not_interested"
    PENDING = "pending"
    APPLIED = "applied"
    INTERVIEWING = "interviewing"
    OFFER = "offer"
    REJECTED = "rejected"
    WITHDRAWN = "withdrawn"
    CLOSED = "closed"


class TrackedApplication(Base):
    """Model linking a user to a job posting and its pipeline state."""

    __tablename__ = "tracked_applications"
    __table_args__ = (
        UniqueConstraint("user_id", "job_id", name="uq_tracked_applications_user_job"),
        Index("ix_tracked_applications_user_status", "user_id", "status"),
        Index("ix_tracked_applications_user_favorite", "user_id", "is_favorite"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    job_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("jobs.id", ondelete="CASCADE"), nullable=False, index=True
    )

    status: Mapped[str] = mapped_column(
        String(50), nullable=False, default=ApplicationStatus.NEW.value
    )
    is_favorite: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    custom_tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Pending tasks; a task is done once it is removed from the list
    next_steps: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    # ISO-8601 strings, one per interview round in round order
    interview_dates: Mapped[list[str]] = mapped_column(
        JSON, default=list, nullable=False
    )
    reminder_date: Mapped[datetime | None] = mapped_column(
        DateTime, nullable=True, index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False
    )

    job: Mapped[Job] = relationship(lazy="raise")
    history: Mapped[list[StatusHistoryEntry]] = relationship(
        back_populates="tracked_application",
        cascade="all, delete-orphan",
        order_by=[StatusHistoryEntry.created_at, StatusHistoryEntry.id],
    )
