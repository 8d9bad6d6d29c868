"""Periodic sweep over due application reminders."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlalchemy.exc import SQLAlchemyError

from jobtrack.core.config import settings
from jobtrack.services.tracking_service import TrackingService, tracking_service

logger = logging.getLogger(__name__)

SWEEP_JOB_ID = "reminder_sweep"


class ReminderService:
    """Runs the reminder sweep on an interval."""

    def __init__(self, service: TrackingService = tracking_service):
        self.service = service
        self._scheduler: AsyncIOScheduler | None = None
        self._last_due_count = 0

    @property
    def running(self) -> bool:
        return self._scheduler is not None and self._scheduler.running

    async def start(self, interval_minutes: int | None = None):
        """Start the scheduler."""
        if self.running:
            logger.info("Reminder sweep already running")
            return

        minutes = interval_minutes or settings.reminder_sweep_minutes
        self._scheduler = AsyncIOScheduler(timezone="UTC")
        self._scheduler.add_job(
            self.sweep,
            trigger=IntervalTrigger(minutes=minutes),
            id=SWEEP_JOB_ID,
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self._scheduler.start()
        logger.info(f"Reminder sweep scheduled every {minutes} minute(s)")

    async def stop(self):
        """Stop the scheduler."""
        if self._scheduler is not None:
            self._scheduler.shutdown(wait=False)
            self._scheduler = None
            logger.info("Reminder sweep stopped")

    async def sweep(self) -> int:
        """Log every application whose reminder is due; return how many.

        The INFO record per due application is the delivery channel for
        reminders. Nothing is sent by email or push, and reminders are not
        marked as delivered, so a due reminder is logged on every sweep until
        its date is cleared or moved.
        """
        try:
            due = await self.service.due_reminders()
        except SQLAlchemyError as e:
            logger.error(f"Reminder sweep failed: {e}")
            return 0

        for record in due:
            logger.info(
                f"Reminder due for user {record.user_id}: application {record.id} "
                f"({record.job.title} at {record.job.company}), "
                f"status '{record.status}', due {record.reminder_date:%Y-%m-%d %H:%M}"
            )
        self._last_due_count = len(due)
        return len(due)

    def get_status(self) -> dict:
        """Get scheduler status information."""
        next_run = None
        if self._scheduler is not None:
            job = self._scheduler.get_job(SWEEP_JOB_ID)
            next_run = job.next_run_time if job else None
        return {
            "running": self.running,
            "next_run": next_run.isoformat() if next_run else None,
            "last_due_count": self._last_due_count,
        }


reminder_service = ReminderService()
