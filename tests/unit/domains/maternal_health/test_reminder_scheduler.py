"""Tests for ReminderJobs and ReminderScheduler."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from apscheduler.triggers.cron import CronTrigger

from maternal_care.config.settings import Settings
from maternal_care.core.domain.exceptions import InvalidOperationException
from maternal_care.domains.maternal_health.application.dto import DailyTipResult, DispatchResult, SweepResult
from maternal_care.domains.maternal_health.domain.value_objects import ScheduleTrack
from maternal_care.domains.maternal_health.infrastructure.scheduler import (
    Cadence,
    ReminderJobs,
    ReminderScheduler,
    get_reminder_scheduler,
    shutdown_scheduler,
)


@pytest.fixture
def sweep():
    use_case = MagicMock()
    use_case.execute = AsyncMock(side_effect=lambda track: SweepResult(track=track, enqueued=2))
    return use_case


@pytest.fixture
def dispatcher():
    service = MagicMock()
    service.process_pending = AsyncMock(return_value=DispatchResult(processed=3, sent=3))
    return service


@pytest.fixture
def daily_tips():
    use_case = MagicMock()
    use_case.execute = AsyncMock(return_value=DailyTipResult(sent=1))
    return use_case


@pytest.fixture
def jobs(sweep, dispatcher, daily_tips) -> ReminderJobs:
    return ReminderJobs(sweep, dispatcher, daily_tips, batch_size=25)


# ============================================================================
# ReminderJobs
# ============================================================================


@pytest.mark.unit
class TestReminderJobs:
    @pytest.mark.parametrize(
        ("cadence", "track"),
        [
            (Cadence.ANTENATAL_DAILY, ScheduleTrack.ANTENATAL),
            (Cadence.VACCINATION_DAILY, ScheduleTrack.VACCINATION),
            (Cadence.MILESTONE_WEEKLY, ScheduleTrack.MILESTONE),
        ],
    )
    async def test_sweep_cadences(self, jobs, sweep, cadence, track):
        result = await jobs.run(cadence)

        sweep.execute.assert_awaited_once_with(track)
        assert result["track"] == track.value
        assert result["enqueued"] == 2

    async def test_dispatch_uses_batch_size(self, jobs, dispatcher):
        result = await jobs.run(Cadence.DISPATCH_FREQUENT)

        dispatcher.process_pending.assert_awaited_once_with(batch_size=25)
        assert result["sent"] == 3

    async def test_daily_tips(self, jobs, daily_tips):
        result = await jobs.run(Cadence.DAILY_TIPS)

        daily_tips.execute.assert_awaited_once()
        assert result["sent"] == 1

    async def test_daily_tips_disabled(self, sweep, dispatcher):
        jobs = ReminderJobs(sweep, dispatcher, daily_tips=None)

        with pytest.raises(InvalidOperationException):
            await jobs.run(Cadence.DAILY_TIPS)

    def test_cadence_tracks(self):
        assert Cadence.DISPATCH_FREQUENT.track is None
        assert Cadence.DAILY_TIPS.track is None
        assert Cadence.MILESTONE_WEEKLY.display_name == "Milestone Weekly"


# ============================================================================
# ReminderScheduler
# ============================================================================


@pytest.mark.unit
class TestReminderScheduler:
    @pytest.fixture
    def scheduler(self, jobs) -> ReminderScheduler:
        return ReminderScheduler(jobs, timezone_name="Africa/Kigali", dispatch_interval_minutes=10)

    def test_build_triggers(self, scheduler):
        triggers = scheduler.build_triggers()

        assert set(triggers) == {
            Cadence.ANTENATAL_DAILY,
            Cadence.VACCINATION_DAILY,
            Cadence.MILESTONE_WEEKLY,
            Cadence.DISPATCH_FREQUENT,
        }
        assert all(isinstance(trigger, CronTrigger) for trigger in triggers.values())
        assert "*/10" in str(triggers[Cadence.DISPATCH_FREQUENT])
        assert "day_of_week='mon'" in str(triggers[Cadence.MILESTONE_WEEKLY])

    def test_daily_tips_trigger_when_enabled(self, jobs):
        scheduler = ReminderScheduler(jobs, daily_tips_enabled=True, daily_tips_hour=11)

        triggers = scheduler.build_triggers()

        assert "hour='11'" in str(triggers[Cadence.DAILY_TIPS])

    def test_from_settings(self, jobs):
        settings = Settings(ANTENATAL_SWEEP_HOUR=6, DISPATCH_INTERVAL_MINUTES=5, REMINDER_TIMEZONE="UTC")

        scheduler = ReminderScheduler.from_settings(jobs, settings)

        assert scheduler.antenatal_hour == 6
        assert scheduler.dispatch_interval_minutes == 5
        assert str(scheduler.tz) == "UTC"

    async def test_start_registers_jobs(self, scheduler):
        await scheduler.start()
        try:
            info = {job["id"]: job for job in scheduler.get_jobs_info()}

            assert scheduler.is_running
            assert set(info) == {"antenatal_daily", "vaccination_daily", "milestone_weekly", "dispatch_frequent"}
            assert info["antenatal_daily"]["name"] == "Antenatal Daily"
            assert info["antenatal_daily"]["next_run"] is not None
        finally:
            await scheduler.stop()

        assert not scheduler.is_running

    async def test_disabled_scheduler_does_not_start(self, jobs):
        scheduler = ReminderScheduler(jobs, enabled=False)

        await scheduler.start()

        assert not scheduler.is_running
        assert scheduler.get_jobs_info() == []

    async def test_failing_job_is_contained(self, scheduler, sweep):
        sweep.execute.side_effect = RuntimeError("database unavailable")

        await scheduler._run_job(Cadence.ANTENATAL_DAILY)

        sweep.execute.assert_awaited_once()


@pytest.mark.unit
class TestSchedulerSingleton:
    async def test_requires_initialization(self):
        await shutdown_scheduler()

        with pytest.raises(RuntimeError):
            get_reminder_scheduler()

    async def test_returns_same_instance(self, jobs):
        settings = Settings(REMINDER_SCHEDULER_ENABLED=False)
        try:
            first = get_reminder_scheduler(jobs, settings)
            assert get_reminder_scheduler() is first
        finally:
            await shutdown_scheduler()
