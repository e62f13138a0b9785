# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Use case sending a sample reminder to check a subject's channels.
# ============================================================================
"""Send Test Reminder Use Case."""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from maternal_care.core.domain.exceptions import EntityNotFoundException

from ...domain.value_objects.language import Language
from ...domain.value_objects.reminder_type import ReminderType
from ..dto.reminder_dtos import KIND_TEST, LOG_STATUS_FAILED, LOG_STATUS_SENT, NotificationLogEntry

if TYPE_CHECKING:
    from ..ports import INotificationLog, ISubjectRepository
    from ..services.fallback_notifier import FallbackNotifier

logger = logging.getLogger(__name__)

TEST_MESSAGES = {
    Language.EN: "🧪 Test reminder from Pregnancy Tracker! This is a sample {type} reminder. "
    "Your notifications are working perfectly! 👍",
    Language.FR: "🧪 Rappel de test du Suivi de Grossesse! Ceci est un rappel {type} d'exemple. "
    "Vos notifications fonctionnent parfaitement! 👍",
    Language.RW: "🧪 Gerageza kwibutsa kwa Pregnancy Tracker! Iki ni urugero rw'ibibutso bya {type}. "
    "Amakuru yawe akora neza! 👍",
}


class SendTestReminderUseCase:
    """Send a localized test message through the channel chain."""

    def __init__(
        self,
        subject_repository: "ISubjectRepository",
        channels: "FallbackNotifier",
        notification_log: "INotificationLog | None" = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._subjects = subject_repository
        self._channels = channels
        self._notification_log = notification_log
        self._clock = clock or (lambda: datetime.now(UTC))

    async def execute(self, subject_id: int, reminder_type: ReminderType) -> bool:
        """Send the test message.

        Returns:
            True if any channel delivered it, False if the subject has no
            contact or every channel failed.

        Raises:
            EntityNotFoundException: If the subject does not exist.
        """
        subject = await self._subjects.get(subject_id)
        if subject is None:
            raise EntityNotFoundException("Subject", subject_id)
        if not subject.has_contact():
            logger.warning(f"Subject {subject_id} has no contact, test reminder not sent")
            return False

        message = TEST_MESSAGES.get(subject.language, TEST_MESSAGES[Language.EN]).replace(
            "{type}", reminder_type.value
        )
        report = await self._channels.deliver(subject.phone_number or "", message)

        if self._notification_log is not None:
            now = self._clock()
            for attempt in report.attempts:
                await self._notification_log.record(
                    NotificationLogEntry(
                        subject_id=subject_id,
                        kind=KIND_TEST,
                        channel=attempt.channel,
                        status=LOG_STATUS_SENT if attempt.success else LOG_STATUS_FAILED,
                        content=message,
                        error_message=attempt.error,
                        sent_at=now if attempt.success else None,
                        created_at=now,
                    )
                )

        logger.info(f"Test reminder for subject {subject_id}: {'sent' if report.delivered else 'failed'}")
        return report.delivered
