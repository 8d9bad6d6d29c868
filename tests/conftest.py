"""Pytest configuration and fixtures."""

import os
import sys

import pytest

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

# Set test environment variables before importing jobtrack modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["REMINDER_SWEEP_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from jobtrack.core.storage import init_models  # noqa: E402
from jobtrack.schemas.jobs import JobUpsert  # noqa: E402
from jobtrack.services.job_catalog import JobCatalog  # noqa: E402
from jobtrack.services.tracking_service import TrackingService  # noqa: E402


@pytest.fixture
async def engine(tmp_path):
    """Fresh file-backed SQLite database per test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'jobtrack.db'}",
        poolclass=NullPool,
    )
    await init_models(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    """Session factory bound to the test database."""
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def catalog(session_factory):
    """Job catalog on the test database."""
    return JobCatalog(session_factory)


@pytest.fixture
def service(session_factory, catalog):
    """Tracking service on the test database."""
    return TrackingService(session_factory, catalog=catalog)


@pytest.fixture
def job_data():
    """Sample job posting."""
    return JobUpsert(
        title="Python Developer",
        company="Test Company",
        location="Berlin",
        platform="linkedin",
        source_id="job-1",
        source_url="https://example.com/jobs/1",
    )


@pytest.fixture
async def job(catalog, job_data):
    """A stored job."""
    return await catalog.upsert(job_data)


@pytest.fixture
async def other_job(catalog):
    """A second stored job."""
    return await catalog.upsert(
        JobUpsert(
            title="Data Engineer",
            company="Data Corp",
            location="Remote",
            platform="indeed",
            source_id="job-2",
        )
    )


@pytest.fixture
def api_application():
    """Tracked application as returned by the API."""
    return {
        "id": 10,
        "user_id": "user-1",
        "job_id": 1,
        "status": "pending",
        "is_favorite": False,
        "custom_tags": [],
        "notes": None,
        "next_steps": [],
        "interview_dates": [],
        "reminder_date": None,
        "created_at": "2026-01-01T10:00:00",
        "updated_at": "2026-01-01T10:00:00",
        "job": {
            "id": 1,
            "title": "Python Developer",
            "company": "Test Company",
            "location": "Berlin",
            "job_type": "n-a",
            "platform": "linkedin",
            "source_url": None,
        },
    }
