"""Reminder Jobs.

The work done on each scheduler tick, keyed by cadence. `run` executes one
tick directly, which is how the admin endpoint and the tests drive it.
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from maternal_care.core.domain.exceptions import InvalidOperationException

from ...domain.value_objects.schedule_track import ScheduleTrack

if TYPE_CHECKING:
    from ...application.services.delivery_dispatcher import DeliveryDispatcher
    from ...application.use_cases import RunReminderSweepUseCase, SendDailyTipsUseCase

logger = logging.getLogger(__name__)


class Cadence(str, Enum):
    """Named scheduler cadences."""

    ANTENATAL_DAILY = "antenatal_daily"
    VACCINATION_DAILY = "vaccination_daily"
    MILESTONE_WEEKLY = "milestone_weekly"
    DISPATCH_FREQUENT = "dispatch_frequent"
    DAILY_TIPS = "daily_tips"

    @property
    def track(self) -> ScheduleTrack | None:
        """Schedule track swept by this cadence, None for non-sweep cadences."""
        tracks = {
            "antenatal_daily": ScheduleTrack.ANTENATAL,
            "vaccination_daily": ScheduleTrack.VACCINATION,
            "milestone_weekly": ScheduleTrack.MILESTONE,
        }
        return tracks.get(self.value)

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


class ReminderJobs:
    """Runs the use case behind each cadence."""

    def __init__(
        self,
        sweep: "RunReminderSweepUseCase",
        dispatcher: "DeliveryDispatcher",
        daily_tips: "SendDailyTipsUseCase | None" = None,
        batch_size: int = 50,
    ):
        self._sweep = sweep
        self._dispatcher = dispatcher
        self._daily_tips = daily_tips
        self._batch_size = batch_size

    async def run(self, cadence: Cadence) -> dict[str, Any]:
        """Run one tick of a cadence.

        Returns:
            The counters of the run, as a dictionary.

        Raises:
            InvalidOperationException: If daily tips are requested but not configured.
        """
        logger.info(f"Running {cadence.value} job")

        track = cadence.track
        if track is not None:
            result = await self._sweep.execute(track)
            return result.to_dict()

        if cadence is Cadence.DISPATCH_FREQUENT:
            dispatch = await self._dispatcher.process_pending(batch_size=self._batch_size)
            return dispatch.to_dict()

        if self._daily_tips is None:
            raise InvalidOperationException("run_daily_tips", "disabled", "Daily tips are not enabled")
        tips = await self._daily_tips.execute()
        return tips.to_dict()
