"""Append-only status history for tracked applications."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobtrack.core.storage import Base
from jobtrack.models._time import utc_now

if TYPE_CHECKING:
    from jobtrack.models.tracked_application import TrackedApplication


class StatusHistoryEntry(Base):
    """One status transition of a tracked application."""

    __tablename__ = "status_history"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    tracked_application_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("tracked_applications.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Empty for the entry written when the record is first created
    previous_status: Mapped[str] = mapped_column(String(50), nullable=False, default="")
    new_status: Mapped[str] = mapped_column(String(50), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    updated_by: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False, index=True
    )

    tracked_application: Mapped[TrackedApplication] = relationship(
        back_populates="history"
    )
