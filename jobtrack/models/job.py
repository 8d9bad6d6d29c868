"""Job catalog model."""

from datetime import datetime
from enum import Enum

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from jobtrack.core.storage import Base
from jobtrack.models._time import utc_now


class JobType(str, Enum):
    FULL_TIME = "full-time"
    PART_TIME = "part-time"
    CONTRACT = "contract"
    FREELANCE = "freelance"
    INTERNSHIP = "internship"
    N_A = "n-a"


class Job(Base):
    """A job posting, owned by the catalog and referenced by tracked applications."""

    __tablename__ = "jobs"
    __table_args__ = (
        UniqueConstraint("source_id", "platform", name="uq_jobs_source_platform"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    company: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    location: Mapped[str] = mapped_column(String(500), nullable=False)
    job_type: Mapped[str] = mapped_column(
        String(50), nullable=False, default=JobType.N_A.value
    )

    platform: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    source_id: Mapped[str] = mapped_column(String(255), nullable=False)
    source_url: Mapped[str | None] = mapped_column(String(2000), nullable=True)

    deadline: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    salary: Mapped[str | None] = mapped_column(String(255), nullable=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, nullable=False, index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, default=utc_now, onupdate=utc_now, nullable=False
    )
