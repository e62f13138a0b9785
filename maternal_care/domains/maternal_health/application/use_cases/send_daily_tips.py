# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Use case sending one generated tip per pregnant subject.
# ============================================================================
"""Send Daily Tips Use Case.

Tips are best effort: they are not queued and not retried, but every
attempt is written to the notification log.
"""

import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING

from pytz import timezone

from ...domain.services.gestational_calculator import calculate
from ...domain.value_objects.pregnancy_status import PregnancyStatus
from ...domain.value_objects.schedule_track import ScheduleTrack
from ..dto.reminder_dtos import KIND_DAILY_TIP, LOG_STATUS_FAILED, LOG_STATUS_SENT, DailyTipResult, NotificationLogEntry

if TYPE_CHECKING:
    from ...domain.entities.subject import Subject
    from ..ports import INotificationLog, ISubjectRepository
    from ..services.content_service import ContentService
    from ..services.fallback_notifier import FallbackNotifier

logger = logging.getLogger(__name__)


class SendDailyTipsUseCase:
    """Generate and send a daily tip to each pregnant subject with a contact."""

    def __init__(
        self,
        subject_repository: "ISubjectRepository",
        content_service: "ContentService",
        channels: "FallbackNotifier",
        notification_log: "INotificationLog | None" = None,
        clock: Callable[[], datetime] | None = None,
        timezone_name: str = "UTC",
    ) -> None:
        self._subjects = subject_repository
        self._content = content_service
        self._channels = channels
        self._notification_log = notification_log
        self._clock = clock or (lambda: datetime.now(UTC))
        self._tz = timezone(timezone_name)

    async def execute(self, as_of: date | None = None) -> DailyTipResult:
        as_of = as_of or self._clock().astimezone(self._tz).date()
        result = DailyTipResult()
        subjects = await self._subjects.list_by_status(PregnancyStatus.statuses_for_track(ScheduleTrack.MILESTONE))

        for subject in subjects:
            try:
                await self._send_tip(subject, as_of, result)
            except Exception as e:
                result.failed += 1
                logger.error(f"Error sending daily tip to subject {subject.id}: {e}", exc_info=True)

        logger.info(
            f"Daily tips completed: {result.sent} sent, {result.failed} failed, "
            f"{result.fallback_used} fallback, {result.skipped} skipped"
        )
        return result

    async def _send_tip(self, subject: "Subject", as_of: date, result: DailyTipResult) -> None:
        if subject.id is None or not subject.has_contact() or subject.last_menstrual_period is None:
            result.skipped += 1
            return

        state = calculate(subject.last_menstrual_period, as_of, subject.pregnancy_status)
        if not state.is_valid:
            result.skipped += 1
            return

        content = await self._content.daily_tip(state, subject.language)
        if content.is_fallback:
            result.fallback_used += 1

        report = await self._channels.deliver(subject.phone_number or "", content.text)
        now = self._clock()
        if self._notification_log is not None:
            for attempt in report.attempts:
                await self._notification_log.record(
                    NotificationLogEntry(
                        subject_id=subject.id,
                        kind=KIND_DAILY_TIP,
                        channel=attempt.channel,
                        status=LOG_STATUS_SENT if attempt.success else LOG_STATUS_FAILED,
                        content=content.text,
                        gestational_week=state.gestational_weeks,
                        error_message=attempt.error,
                        sent_at=now if attempt.success else None,
                        created_at=now,
                    )
                )

        if report.delivered:
            result.sent += 1
        else:
            result.failed += 1
