"""Tracking service: status transitions, history and aggregation."""

import logging
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload

from jobtrack.core.exceptions import (
    ConflictError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from jobtrack.core.storage import async_session
from jobtrack.models._time import utc_now
from jobtrack.models.job import Job
from jobtrack.models.status_history import StatusHistoryEntry
from jobtrack.models.tracked_application import ApplicationStatus, TrackedApplication
from jobtrack.services.job_catalog import JobCatalog
from jobtrack.utils.filters import TrackedApplicationFilter
from jobtrack.utils.validators import (
    parse_status,
    to_naive_utc,
    validate_application_update,
)

logger = logging.getLogger(__name__)

INITIAL_STATUS_NOTE = "initial status"

# Upper bound on compare-and-set retries for one status change
MAX_TRANSITION_ATTEMPTS = 10

EDITABLE_FIELDS = frozenset(
    {
        "next_steps",
        "interview_dates",
        "custom_tags",
        "notes",
        "is_favorite",
        "reminder_date",
    }
)


@dataclass
class ApplicationPage:
    """One page of a user's tracked applications."""

    items: list[TrackedApplication]
    total: int
    page: int
    limit: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.limit))


class TrackingService:
    """Service owning every write to tracked applications.

    Status changes go through ``set_status`` only; it is the single place
    that appends to the status history.
    """

    def __init__(
        self, session_factory=async_session, catalog: JobCatalog | None = None
    ):
        self.session_factory = session_factory
        self.catalog = catalog or JobCatalog(session_factory)

    async def set_status(
        self,
        user_id: str,
        job_id: int,
        new_status: ApplicationStatus | str,
        note: str | None = None,
    ) -> TrackedApplication:
        """Set the status of the user's application for a job.

        Creates the tracked application on first touch. Repeating the current
        status changes nothing and is not recorded in the history. The status
        write and its history entry are committed together.
        """
        status = parse_status(new_status)
        await self._require_job(job_id)

        record, created = await self._get_or_create(
            user_id, job_id, status, note or INITIAL_STATUS_NOTE
        )

        if created:
            logger.info(
                f"Started tracking job {job_id} for user {user_id} "
                f"with status '{status.value}'"
            )
            return await self._load(record.id)

        previous = await self._transition(record.id, status, note or "", user_id)
        if previous is None:
            logger.debug(
                f"Status of application {record.id} already '{status.value}', "
                f"nothing to record"
            )
        else:
            logger.info(
                f"Application {record.id} moved '{previous}' -> '{status.value}' "
                f"by user {user_id}"
            )

        return await self._load(record.id)

    async def create(
        self,
        user_id: str,
        job_id: int,
        status: ApplicationStatus | str = ApplicationStatus.NEW,
        notes: str | None = None,
        is_favorite: bool = False,
    ) -> tuple[TrackedApplication, bool]:
        """Start tracking a job explicitly.

        Returns the record and whether it was created; an existing record is
        returned unchanged.
        """
        status = parse_status(status)
        await self._require_job(job_id)

        record, created = await self._get_or_create(
            user_id,
            job_id,
            status,
            notes or INITIAL_STATUS_NOTE,
            is_favorite=is_favorite,
        )
        if created:
            logger.info(f"User {user_id} added job {job_id} to tracking")
        return await self._load(record.id), created

    async def get(self, user_id: str, application_id: int) -> TrackedApplication:
        """Return one of the user's tracked applications with its job."""
        record = await self._load(application_id)
        self._check_owner(record, user_id)
        return record

    async def update_fields(
        self, user_id: str, application_id: int, changes: dict[str, Any]
    ) -> TrackedApplication:
        """Replace editable fields wholesale; no history is written."""
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(
                f"Fields cannot be edited here: {', '.join(sorted(unknown))}"
            )

        validation = validate_application_update(changes)
        if not validation.is_valid:
            raise ValidationError(validation.error, field=validation.field_name)
        for warning in validation.warnings:
            logger.warning(f"Application {application_id} update: {warning}")

        values = dict(changes)
        if values.get("interview_dates") is not None:
            values["interview_dates"] = [
                to_naive_utc(d).isoformat() for d in values["interview_dates"]
            ]
        if values.get("reminder_date") is not None:
            values["reminder_date"] = to_naive_utc(values["reminder_date"])
        for list_field in ("next_steps", "custom_tags", "interview_dates"):
            if list_field in values and values[list_field] is None:
                values[list_field] = []
        if "is_favorite" in values and values["is_favorite"] is None:
            del values["is_favorite"]

        async with self.session_factory() as session:
            record = await session.get(TrackedApplication, application_id)
            if record is None:
                raise NotFoundError("Tracked application", application_id)
            self._check_owner(record, user_id)

            for key, value in values.items():
                setattr(record, key, value)
            await session.commit()

        logger.info(
            f"Updated {', '.join(sorted(values))} on application {application_id}"
        )
        return await self._load(application_id)

    async def delete(self, user_id: str, application_id: int) -> None:
        """Stop tracking; the status history is deleted with the record."""
        async with self.session_factory() as session:
            record = await session.get(TrackedApplication, application_id)
            if record is None:
                raise NotFoundError("Tracked application", application_id)
            self._check_owner(record, user_id)

            await session.delete(record)
            await session.commit()

        logger.info(f"User {user_id} deleted application {application_id}")

    async def history(
        self, user_id: str, application_id: int
    ) -> list[StatusHistoryEntry]:
        """Status history of an application, oldest first."""
        async with self.session_factory() as session:
            record = await session.get(TrackedApplication, application_id)
            if record is None:
                raise NotFoundError("Tracked application", application_id)
            self._check_owner(record, user_id)

            result = await session.execute(
                select(StatusHistoryEntry)
                .where(StatusHistoryEntry.tracked_application_id == application_id)
                .order_by(StatusHistoryEntry.created_at, StatusHistoryEntry.id)
            )
            return list(result.scalars().all())

    async def list_applications(
        self,
        user_id: str,
        status: ApplicationStatus | str | None = None,
        search: str | None = None,
        favorite: bool | None = None,
        page: int = 1,
        limit: int = 10,
        sort: str = "-created_at",
    ) -> ApplicationPage:
        """Filtered, paginated listing joined with jobs."""
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive")

        filter_ = TrackedApplicationFilter(
            user_id=user_id,
            status=parse_status(status) if status else None,
            search=search,
            favorite=favorite,
            sort=sort,
        )

        query = select(TrackedApplication)
        if filter_.needs_job_join:
            query = query.join(Job, Job.id == TrackedApplication.job_id)
        query = query.where(*filter_.conditions())

        async with self.session_factory() as session:
            total = await session.scalar(
                select(func.count()).select_from(query.subquery())
            )
            result = await session.execute(
                query.options(selectinload(TrackedApplication.job))
                .order_by(*filter_.ordering())
                .offset((page - 1) * limit)
                .limit(limit)
            )
            items = list(result.scalars().all())

        return ApplicationPage(items=items, total=total or 0, page=page, limit=limit)

    async def status_counts(self, user_id: str) -> dict[str, int]:
        """Count the user's applications per status, zero-filled."""
        counts = {status.value: 0 for status in ApplicationStatus}

        async with self.session_factory() as session:
            result = await session.execute(
                select(TrackedApplication.status, func.count(TrackedApplication.id))
                .where(TrackedApplication.user_id == user_id)
                .group_by(TrackedApplication.status)
            )
            for status, count in result.all():
                if status in counts:
                    counts[status] = count
                else:
                    logger.warning(
                        f"User {user_id} has {count} application(s) with "
                        f"unknown status '{status}'"
                    )

        return counts

    async def due_reminders(
        self, user_id: str | None = None, now: datetime | None = None
    ) -> list[TrackedApplication]:
        """Applications whose reminder date has passed."""
        cutoff = to_naive_utc(now) if now else utc_now()
        query = (
            select(TrackedApplication)
            .options(selectinload(TrackedApplication.job))
            .where(
                TrackedApplication.reminder_date.is_not(None),
                TrackedApplication.reminder_date <= cutoff,
            )
            .order_by(TrackedApplication.reminder_date, TrackedApplication.id)
        )
        if user_id is not None:
            query = query.where(TrackedApplication.user_id == user_id)

        async with self.session_factory() as session:
            result = await session.execute(query)
            return list(result.scalars().all())

    async def _require_job(self, job_id: int) -> None:
        if not await self.catalog.exists(job_id):
            raise NotFoundError("Job", job_id)

    async def _find(
        self, session, user_id: str, job_id: int
    ) -> TrackedApplication | None:
        result = await session.execute(
            select(TrackedApplication).where(
                TrackedApplication.user_id == user_id,
                TrackedApplication.job_id == job_id,
            )
        )
        return result.scalar_one_or_none()

    async def _get_or_create(
        self,
        user_id: str,
        job_id: int,
        status: ApplicationStatus,
        note: str,
        is_favorite: bool = False,
    ) -> tuple[TrackedApplication, bool]:
        """Find the (user, job) record or insert it with its initial history.

        The unique constraint on (user_id, job_id) decides concurrent first
        touches: the loser rolls back and continues with the winner's row.
        """
        async with self.session_factory() as session:
            record = await self._find(session, user_id, job_id)
            if record is not None:
                return record, False

            record = TrackedApplication(
                user_id=user_id,
                job_id=job_id,
                status=status.value,
                is_favorite=is_favorite,
                custom_tags=[],
                next_steps=[],
                interview_dates=[],
            )
            session.add(record)
            try:
                await session.flush()
                await self._record_history(
                    session, record.id, "", status.value, note, user_id
                )
                await session.commit()
                return record, True
            except IntegrityError:
                await session.rollback()
                logger.info(
                    f"Application for user {user_id} and job {job_id} was created "
                    f"concurrently, continuing as update"
                )

        async with self.session_factory() as session:
            record = await self._find(session, user_id, job_id)
            if record is None:
                raise ConflictError(
                    f"Could not create application for job {job_id}"
                )
            return record, False

    async def _transition(
        self,
        application_id: int,
        status: ApplicationStatus,
        note: str,
        updated_by: str,
    ) -> str | None:
        """Compare-and-set the status and record the transition.

        Returns the previous status, or None for a no-op. The update only
        applies while the status still holds the value that was read; a
        concurrent writer makes it match nothing and the read is retried.
        """
        for attempt in range(MAX_TRANSITION_ATTEMPTS):
            async with self.session_factory() as session:
                previous = await session.scalar(
                    select(TrackedApplication.status).where(
                        TrackedApplication.id == application_id
                    )
                )
                if previous is None:
                    raise NotFoundError("Tracked application", application_id)
                if previous == status.value:
                    return None

                result = await session.execute(
                    update(TrackedApplication)
                    .where(
                        TrackedApplication.id == application_id,
                        TrackedApplication.status == previous,
                    )
                    .values(status=status.value)
                    .execution_options(synchronize_session=False)
                )
                if result.rowcount == 0:
                    await session.rollback()
                    logger.debug(
                        f"Status of application {application_id} changed "
                        f"concurrently, retrying (attempt {attempt + 1})"
                    )
                    continue

                await self._record_history(
                    session, application_id, previous, status.value, note, updated_by
                )
                await session.commit()
                return previous

        raise ConflictError(
            f"Could not update status of application {application_id}: "
            f"too many concurrent changes"
        )

    async def _record_history(
        self,
        session,
        application_id: int,
        previous_status: str,
        new_status: str,
        notes: str,
        updated_by: str,
    ) -> None:
        """Add a history entry inside a savepoint of the status transaction.

        A failed entry is logged and rolled back on its own; the status
        change it describes is kept.
        """
        try:
            async with session.begin_nested():
                session.add(
                    StatusHistoryEntry(
                        tracked_application_id=application_id,
                        previous_status=previous_status,
                        new_status=new_status,
                        notes=notes,
                        updated_by=updated_by,
                    )
                )
        except SQLAlchemyError:
            logger.exception(
                f"Failed to record history for application {application_id} "
                f"('{previous_status}' -> '{new_status}'); status change kept"
            )

    async def _load(self, application_id: int) -> TrackedApplication:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TrackedApplication)
                .options(selectinload(TrackedApplication.job))
                .where(TrackedApplication.id == application_id)
            )
            record = result.scalar_one_or_none()
            if record is None:
                raise NotFoundError("Tracked application", application_id)
            return record

    @staticmethod
    def _check_owner(record: TrackedApplication, user_id: str) -> None:
        if record.user_id != user_id:
            raise ForbiddenError(
                f"Tracked application {record.id} belongs to another user"
            )


tracking_service = TrackingService()


async def get_tracking_service() -> TrackingService:
    """Dependency to get tracking service."""
    return tracking_service
