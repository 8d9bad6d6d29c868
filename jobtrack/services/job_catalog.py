"""Job catalog access for the tracking core."""

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from jobtrack.core.exceptions import ConflictError, NotFoundError
from jobtrack.core.storage import async_session
from jobtrack.models.job import Job
from jobtrack.schemas.jobs import JobUpsert
from jobtrack.utils.validators import to_naive_utc

logger = logging.getLogger(__name__)


class JobCatalog:
    """Reads jobs for the tracking core and accepts upserts from ingestion."""

    def __init__(self, session_factory=async_session):
        self.session_factory = session_factory

    async def get(self, job_id: int) -> Job:
        """Return a job by id."""
        async with self.session_factory() as session:
            job = await session.get(Job, job_id)
            if job is None:
                raise NotFoundError("Job", job_id)
            return job

    async def exists(self, job_id: int) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(select(Job.id).where(Job.id == job_id))
            return result.scalar_one_or_none() is not None

    async def upsert(self, data: JobUpsert) -> Job:
        """Create a job, or update the one already stored for the same posting.

        A posting is identified by ``(source_id, platform)``.
        """
        values = data.model_dump()
        values["job_type"] = data.job_type.value
        if data.deadline is not None:
            values["deadline"] = to_naive_utc(data.deadline)

        for attempt in range(2):
            async with self.session_factory() as session:
                result = await session.execute(
                    select(Job).where(
                        Job.source_id == data.source_id,
                        Job.platform == data.platform,
                    )
                )
                job = result.scalar_one_or_none()

                if job is None:
                    job = Job(**values)
                    session.add(job)
                else:
                    for key, value in values.items():
                        setattr(job, key, value)

                try:
                    await session.commit()
                except IntegrityError:
                    await session.rollback()
                    logger.info(
                        f"Job {data.platform}/{data.source_id} inserted concurrently, "
                        f"retrying as update (attempt {attempt + 1})"
                    )
                    continue

                await session.refresh(job)
                logger.debug(f"Upserted job {job.id} ({data.platform}/{data.source_id})")
                return job

        raise ConflictError(
            f"Could not store job {data.platform}/{data.source_id}"
        )


job_catalog = JobCatalog()


async def get_job_catalog() -> JobCatalog:
    """Dependency to get the job catalog."""
    return job_catalog
