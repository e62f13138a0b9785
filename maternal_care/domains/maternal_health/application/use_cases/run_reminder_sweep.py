# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Use case evaluating the subject population for due reminders.
# ============================================================================
"""Run Reminder Sweep Use Case.

One scheduler tick for a track: evaluate each subject's age, match the due
rules, and queue whatever the deduplicator lets through. Holds no state
between ticks; the persisted reminder history is the only memory.
"""

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from pytz import timezone

from ...domain.services.gestational_calculator import age_since, calculate
from ...domain.services.reminder_matcher import ReminderMatcher
from ...domain.value_objects.age import AgeInWeeks
from ...domain.value_objects.pregnancy_status import PregnancyStatus
from ...domain.value_objects.schedule_track import ScheduleTrack
from ..dto.reminder_dtos import SweepResult

if TYPE_CHECKING:
    from ...domain.entities.subject import Subject
    from ..ports import ISubjectRepository
    from ..services.reminder_queue import ReminderQueue

logger = logging.getLogger(__name__)


class RunReminderSweepUseCase:
    """Queue due reminders of one track for every eligible subject."""

    def __init__(
        self,
        subject_repository: "ISubjectRepository",
        reminder_queue: "ReminderQueue",
        matcher: ReminderMatcher | None = None,
        clock: Callable[[], datetime] | None = None,
        timezone_name: str = "UTC",
    ) -> None:
        """Initialize use case.

        Args:
            subject_repository: Source of subjects (DIP).
            reminder_queue: Queue with dedup-aware enqueue.
            matcher: Rule matcher over the medical schedule.
            clock: Source of the current time.
            timezone_name: Timezone whose calendar date the sweep evaluates.
        """
        self._subjects = subject_repository
        self._queue = reminder_queue
        self._matcher = matcher or ReminderMatcher()
        self._clock = clock or (lambda: datetime.now(UTC))
        self._tz = timezone(timezone_name)

    async def execute(self, track: ScheduleTrack, as_of: date | None = None) -> SweepResult:
        """Run the sweep.

        Args:
            track: Track to evaluate.
            as_of: Reference date, today in the configured timezone when omitted.

        Returns:
            SweepResult with counters for the run.
        """
        as_of = as_of or self._clock().astimezone(self._tz).date()
        result = SweepResult(track=track)

        subjects = await self._subjects.list_by_status(PregnancyStatus.statuses_for_track(track))
        logger.info(f"Starting {track.value} sweep for {len(subjects)} subjects as of {as_of.isoformat()}")

        for subject in subjects:
            result.subjects_evaluated += 1
            try:
                await self._evaluate(subject, track, as_of, result)
            except Exception as e:
                result.errors += 1
                logger.error(f"Error evaluating subject {subject.id} for {track.value}: {e}", exc_info=True)

        logger.info(
            f"{track.display_name} sweep completed: {result.enqueued} queued, "
            f"{result.duplicates_skipped} duplicates, {result.skipped_no_contact} without contact, "
            f"{result.errors} errors"
        )
        return result

    async def _evaluate(self, subject: "Subject", track: ScheduleTrack, as_of: date, result: SweepResult) -> None:
        if subject.id is None:
            return
        if not subject.has_contact():
            result.skipped_no_contact += 1
            logger.debug(f"Subject {subject.id} has no contact, skipping {track.value}")
            return

        age = self._age_for(subject, track, as_of)
        if age is None:
            return

        for rule in self._matcher.find_due_rules(age, track):
            result.rules_matched += 1
            message = rule.render(subject.language, subject.greeting_name, age.weeks)
            reminder = await self._queue.enqueue(
                subject_id=subject.id,
                rule=rule,
                rendered_message=message,
                current_week=age.weeks,
                current_day=age.days,
            )
            if reminder is None:
                result.duplicates_skipped += 1
            else:
                result.enqueued += 1

    @staticmethod
    def _age_for(subject: "Subject", track: ScheduleTrack, as_of: date) -> AgeInWeeks | None:
        if track.is_postnatal:
            reference = subject.postnatal_reference_date
            if reference is None or reference > as_of:
                logger.debug(f"Subject {subject.id} has no usable delivery date")
                return None
            return age_since(reference, as_of)

        if subject.last_menstrual_period is None:
            logger.debug(f"Subject {subject.id} has no last menstrual period")
            return None
        state = calculate(subject.last_menstrual_period, as_of, subject.pregnancy_status)
        if not state.is_valid:
            logger.warning(f"Subject {subject.id} has an invalid pregnancy state: {state.invalid_reason}")
            return None
        return state.gestational_age
