"""Tests for JobCatalog."""

from datetime import datetime, timezone

import pytest

from jobtrack.core.exceptions import NotFoundError
from jobtrack.models import JobType
from jobtrack.schemas.jobs import JobUpsert


class TestJobCatalog:
    """Tests for job reads and upserts."""

    @pytest.mark.asyncio
    async def test_upsert_inserts(self, catalog, job):
        """Test that a new posting is stored."""
        stored = await catalog.get(job.id)

        assert stored.title == "Python Developer"
        assert stored.job_type == JobType.N_A.value
        assert await catalog.exists(job.id) is True

    @pytest.mark.asyncio
    async def test_upsert_updates_same_posting(self, catalog, job, job_data):
        """Test that (source_id, platform) identifies a posting."""
        updated = await catalog.upsert(
            job_data.model_copy(
                update={"title": "Senior Python Developer", "job_type": JobType.CONTRACT}
            )
        )

        assert updated.id == job.id
        assert updated.title == "Senior Python Developer"
        assert updated.job_type == "contract"

    @pytest.mark.asyncio
    async def test_same_source_id_other_platform_is_new(self, catalog, job, job_data):
        """Test that platforms keep separate postings."""
        other = await catalog.upsert(job_data.model_copy(update={"platform": "indeed"}))

        assert other.id != job.id

    @pytest.mark.asyncio
    async def test_deadline_normalized(self, catalog):
        """Test that aware deadlines are stored as naive UTC."""
        stored = await catalog.upsert(
            JobUpsert(
                title="QA Engineer",
                company="Acme",
                location="Madrid",
                platform="linkedin",
                source_id="qa-1",
                deadline=datetime(2026, 6, 1, 12, 0, tzinfo=timezone.utc),
            )
        )

        assert stored.deadline == datetime(2026, 6, 1, 12, 0)

    @pytest.mark.asyncio
    async def test_get_missing(self, catalog):
        """Test reading an unknown job."""
        with pytest.raises(NotFoundError):
            await catalog.get(404)

        assert await catalog.exists(404) is False
