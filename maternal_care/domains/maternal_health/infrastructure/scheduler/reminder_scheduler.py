"""Reminder Scheduler for Maternal Health.

APScheduler-based async scheduler driving the reminder pipeline:
- Daily antenatal and vaccination sweeps
- Weekly milestone sweep
- Frequent delivery dispatch
- Optional daily tips
"""

import logging
from typing import Any

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from pytz import timezone

from maternal_care.config.settings import Settings

from .reminder_jobs import Cadence, ReminderJobs

logger = logging.getLogger(__name__)


class ReminderScheduler:
    """Scheduler of maternal health reminders.

    Jobs run with max_instances=1 and coalesce=True, so a slow tick is never
    overlapped by the next one and missed ticks collapse into a single run.
    """

    def __init__(
        self,
        jobs: ReminderJobs,
        timezone_name: str = "Africa/Kigali",
        enabled: bool = True,
        antenatal_hour: int = 8,
        vaccination_hour: int = 9,
        milestone_day: str = "mon",
        milestone_hour: int = 7,
        dispatch_interval_minutes: int = 15,
        daily_tips_enabled: bool = False,
        daily_tips_hour: int = 10,
    ):
        """Initialize scheduler.

        Args:
            jobs: Work executed on every tick.
            timezone_name: Timezone for scheduling jobs.
            enabled: Whether scheduler is enabled.
            antenatal_hour: Hour of the daily antenatal sweep.
            vaccination_hour: Hour of the daily vaccination sweep.
            milestone_day: Day of week of the milestone sweep.
            milestone_hour: Hour of the milestone sweep.
            dispatch_interval_minutes: Minutes between dispatcher runs.
            daily_tips_enabled: Whether the daily tips job is registered.
            daily_tips_hour: Hour of the daily tips run.
        """
        self.jobs = jobs
        self.tz = timezone(timezone_name)
        self.enabled = enabled
        self.antenatal_hour = antenatal_hour
        self.vaccination_hour = vaccination_hour
        self.milestone_day = milestone_day
        self.milestone_hour = milestone_hour
        self.dispatch_interval_minutes = dispatch_interval_minutes
        self.daily_tips_enabled = daily_tips_enabled
        self.daily_tips_hour = daily_tips_hour

        self._scheduler: AsyncIOScheduler | None = None
        self._is_running = False

    @classmethod
    def from_settings(cls, jobs: ReminderJobs, settings: Settings) -> "ReminderScheduler":
        return cls(
            jobs=jobs,
            timezone_name=settings.REMINDER_TIMEZONE,
            enabled=settings.REMINDER_SCHEDULER_ENABLED,
            antenatal_hour=settings.ANTENATAL_SWEEP_HOUR,
            vaccination_hour=settings.VACCINATION_SWEEP_HOUR,
            milestone_day=settings.MILESTONE_SWEEP_DAY,
            milestone_hour=settings.MILESTONE_SWEEP_HOUR,
            dispatch_interval_minutes=settings.DISPATCH_INTERVAL_MINUTES,
            daily_tips_enabled=settings.DAILY_TIPS_ENABLED,
            daily_tips_hour=settings.DAILY_TIPS_HOUR,
        )

    def build_triggers(self) -> dict[Cadence, CronTrigger]:
        """Cron trigger per registered cadence."""
        triggers = {
            Cadence.ANTENATAL_DAILY: CronTrigger(hour=self.antenatal_hour, minute=0, timezone=self.tz),
            Cadence.VACCINATION_DAILY: CronTrigger(hour=self.vaccination_hour, minute=0, timezone=self.tz),
            Cadence.MILESTONE_WEEKLY: CronTrigger(
                day_of_week=self.milestone_day, hour=self.milestone_hour, minute=0, timezone=self.tz
            ),
            Cadence.DISPATCH_FREQUENT: CronTrigger(minute=f"*/{self.dispatch_interval_minutes}", timezone=self.tz),
        }
        if self.daily_tips_enabled:
            triggers[Cadence.DAILY_TIPS] = CronTrigger(hour=self.daily_tips_hour, minute=0, timezone=self.tz)
        return triggers

    async def start(self) -> None:
        """Start the scheduler."""
        if not self.enabled:
            logger.info("ReminderScheduler is disabled, skipping start")
            return

        if self._is_running:
            logger.warning("ReminderScheduler already running")
            return

        scheduler = AsyncIOScheduler(timezone=self.tz)
        self._scheduler = scheduler

        for cadence, trigger in self.build_triggers().items():
            scheduler.add_job(
                self._run_job,
                trigger,
                args=[cadence],
                id=cadence.value,
                replace_existing=True,
                name=cadence.display_name,
                max_instances=1,
                coalesce=True,
            )

        scheduler.start()
        self._is_running = True
        logger.info(
            f"ReminderScheduler started with timezone {self.tz} "
            f"(antenatal={self.antenatal_hour}:00, vaccination={self.vaccination_hour}:00, "
            f"milestones={self.milestone_day} {self.milestone_hour}:00, "
            f"dispatch every {self.dispatch_interval_minutes} min)"
        )

    async def stop(self) -> None:
        """Stop the scheduler gracefully."""
        if self._scheduler and self._is_running:
            self._scheduler.shutdown(wait=False)
            self._is_running = False
            logger.info("ReminderScheduler stopped")

    async def _run_job(self, cadence: Cadence) -> None:
        """Scheduled entry point; a failing tick never stops the scheduler."""
        try:
            result = await self.jobs.run(cadence)
            logger.info(f"Job {cadence.value} completed: {result}")
        except Exception as e:
            logger.error(f"Error running {cadence.value} job: {e}", exc_info=True)

    @property
    def is_running(self) -> bool:
        return self._is_running

    def get_jobs_info(self) -> list[dict[str, Any]]:
        """Get information about scheduled jobs."""
        if not self._scheduler:
            return []

        jobs = []
        for job in self._scheduler.get_jobs():
            jobs.append(
                {
                    "id": job.id,
                    "name": job.name,
                    "next_run": job.next_run_time.isoformat() if job.next_run_time else None,
                }
            )
        return jobs


# Singleton instance
_scheduler_instance: ReminderScheduler | None = None


def get_reminder_scheduler(jobs: ReminderJobs | None = None, settings: Settings | None = None) -> ReminderScheduler:
    """Get or create the singleton scheduler instance.

    Args:
        jobs: Work executed on every tick, required on first call.
        settings: Settings used on first call.

    Returns:
        ReminderScheduler singleton instance.
    """
    global _scheduler_instance

    if _scheduler_instance is None:
        if jobs is None or settings is None:
            raise RuntimeError("ReminderScheduler is not initialized")
        _scheduler_instance = ReminderScheduler.from_settings(jobs, settings)

    return _scheduler_instance


async def shutdown_scheduler() -> None:
    """Shutdown the scheduler singleton."""
    global _scheduler_instance

    if _scheduler_instance:
        await _scheduler_instance.stop()
        _scheduler_instance = None
