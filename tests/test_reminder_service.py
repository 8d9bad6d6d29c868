"""Tests for the reminder sweep."""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import OperationalError

from jobtrack.models._time import utc_now
from jobtrack.services.reminder_service import SWEEP_JOB_ID, ReminderService


class TestReminderSweep:
    """Tests for ReminderService.sweep."""

    @pytest.mark.asyncio
    async def test_sweep_counts_due_reminders(self, service, job, caplog):
        """Test that due reminders are logged and counted."""
        record = await service.set_status("user-1", job.id, "applied")
        await service.update_fields(
            "user-1", record.id, {"reminder_date": utc_now() - timedelta(minutes=5)}
        )
        reminders = ReminderService(service)

        with caplog.at_level("INFO", logger="jobtrack.services.reminder_service"):
            count = await reminders.sweep()

        assert count == 1
        assert "Python Developer at Test Company" in caplog.text
        assert reminders.get_status()["last_due_count"] == 1

    @pytest.mark.asyncio
    async def test_due_reminder_logged_on_each_sweep(self, service, job, caplog):
        """Test that a due reminder is logged again until its date changes."""
        record = await service.set_status("user-1", job.id, "applied")
        await service.update_fields(
            "user-1", record.id, {"reminder_date": utc_now() - timedelta(minutes=5)}
        )
        reminders = ReminderService(service)

        with caplog.at_level("INFO", logger="jobtrack.services.reminder_service"):
            await reminders.sweep()
            await reminders.sweep()

        due_records = [
            r
            for r in caplog.records
            if r.name == "jobtrack.services.reminder_service"
            and r.getMessage().startswith("Reminder due for user user-1")
        ]
        assert len(due_records) == 2
        assert {r.levelname for r in due_records} == {"INFO"}

        await service.update_fields(
            "user-1", record.id, {"reminder_date": utc_now() + timedelta(days=1)}
        )
        assert await reminders.sweep() == 0

    @pytest.mark.asyncio
    async def test_sweep_without_reminders(self, service):
        """Test an empty sweep."""
        assert await ReminderService(service).sweep() == 0

    @pytest.mark.asyncio
    async def test_sweep_database_error(self):
        """Test that database errors do not escape the sweep."""
        broken = AsyncMock()
        broken.due_reminders.side_effect = OperationalError("SELECT", {}, None)

        assert await ReminderService(broken).sweep() == 0


class TestReminderScheduler:
    """Tests for starting and stopping the scheduler."""

    @pytest.mark.asyncio
    async def test_start_and_stop(self, service):
        """Test scheduler lifecycle."""
        reminders = ReminderService(service)
        assert reminders.get_status() == {
            "running": False,
            "next_run": None,
            "last_due_count": 0,
        }

        await reminders.start(interval_minutes=30)
        try:
            status = reminders.get_status()
            assert status["running"] is True
            assert status["next_run"] is not None
            assert reminders._scheduler.get_job(SWEEP_JOB_ID) is not None
        finally:
            await reminders.stop()

        assert reminders.running is False

    @pytest.mark.asyncio
    async def test_start_twice_keeps_one_scheduler(self, service):
        """Test that a second start is ignored."""
        reminders = ReminderService(service)
        await reminders.start()
        scheduler = reminders._scheduler
        try:
            await reminders.start()
            assert reminders._scheduler is scheduler
        finally:
            await reminders.stop()
