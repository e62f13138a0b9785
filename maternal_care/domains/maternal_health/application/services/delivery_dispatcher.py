# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Delivers pending reminders with channel fallback and retries.
# ============================================================================
"""Delivery Dispatcher.

Pulls a bounded batch of due reminders, delivers them through the channel
chain and applies the retry policy:

- no contact: failed immediately, no retry
- otherwise the reminder is claimed (version-checked, not due again until
  the backoff elapses) before anything is sent; a run that loses the claim
  skips it
- delivered: sent
- all channels failed: retry_count + 1, back to pending after the backoff,
  failed once the attempt cap is reached
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from maternal_care.core.domain.exceptions import ConcurrencyException

from ...domain.entities.user_reminder import NO_CONTACT_ERROR, UserReminder
from ..dto.reminder_dtos import (
    LOG_STATUS_FAILED,
    LOG_STATUS_SENT,
    DeliveryReport,
    DispatchResult,
    NotificationLogEntry,
)
from .reminder_queue import ReminderQueue

if TYPE_CHECKING:
    from ...domain.entities.subject import Subject
    from ..ports import INotificationLog, IReminderHistoryStore, ISubjectRepository
    from .fallback_notifier import FallbackNotifier

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 50
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_RETRY_BACKOFF = timedelta(minutes=30)


class DeliveryDispatcher:
    """Processes the pending reminder queue."""

    def __init__(
        self,
        store: "IReminderHistoryStore",
        subject_repository: "ISubjectRepository",
        channels: "FallbackNotifier",
        notification_log: "INotificationLog | None" = None,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        retry_backoff: timedelta = DEFAULT_RETRY_BACKOFF,
        clock: Callable[[], datetime] | None = None,
    ):
        """Initialize dispatcher.

        Args:
            store: Reminder history store.
            subject_repository: Lookup of contact details.
            channels: Ordered channel chain.
            notification_log: Audit trail for every attempt.
            max_attempts: Failed attempts before a reminder is terminal.
            retry_backoff: Delay before a failed reminder is retried.
            clock: Source of the current time.
        """
        self._store = store
        self._subjects = subject_repository
        self._channels = channels
        self._notification_log = notification_log
        self._max_attempts = max_attempts
        self._retry_backoff = retry_backoff
        self._clock = clock or (lambda: datetime.now(UTC))
        self._queue = ReminderQueue(store, clock=self._clock)

    async def process_pending(self, batch_size: int = DEFAULT_BATCH_SIZE) -> DispatchResult:
        """Deliver one batch of due reminders.

        Args:
            batch_size: Maximum reminders handled in this run.

        Returns:
            DispatchResult with per-outcome counts.
        """
        result = DispatchResult()
        pending = await self._queue.list_pending(limit=batch_size)
        if not pending:
            logger.debug("No pending reminders to dispatch")
            return result

        logger.info(f"Dispatching {len(pending)} pending reminders")
        subjects = await self._subjects.get_many({reminder.subject_id for reminder in pending})

        for reminder in pending:
            result.processed += 1
            try:
                outcome = await self._dispatch(reminder, subjects.get(reminder.subject_id))
            except ConcurrencyException as e:
                logger.info(f"Reminder {reminder.id} changed during dispatch, skipping: {e.message}")
                result.skipped += 1
                continue
            except Exception as e:
                logger.error(f"Error dispatching reminder {reminder.id}: {e}", exc_info=True)
                result.errors += 1
                continue

            if outcome == "sent":
                result.sent += 1
            elif outcome == "retried":
                result.retried += 1
            elif outcome == "failed":
                result.failed += 1
            else:
                result.skipped += 1

        logger.info(
            f"Dispatch completed: {result.sent} sent, {result.retried} retried, "
            f"{result.failed} failed, {result.skipped} skipped, {result.errors} errors"
        )
        return result

    async def _dispatch(self, queued: UserReminder, subject: "Subject | None") -> str:
        now = self._clock()
        # Re-read so reminders dismissed or claimed after listing are not delivered
        reminder = await self._store.get(queued.id) if queued.id is not None else None
        if reminder is None or not reminder.is_due(now):
            logger.debug(f"Reminder {queued.id} is no longer due, skipping")
            return "skipped"

        if subject is None or not subject.has_contact():
            reminder.mark_undeliverable(NO_CONTACT_ERROR, now)
            await self._store.update(reminder)
            await self._log(reminder, channel=None, status=LOG_STATUS_FAILED, error=NO_CONTACT_ERROR, now=now)
            logger.warning(f"Reminder {reminder.id} failed: subject {reminder.subject_id} has no contact")
            return "failed"

        due_at = reminder.scheduled_for
        reminder.claim(now + self._retry_backoff, now)
        # Raises ConcurrencyException when another run claimed it first
        await self._store.update(reminder)

        report = await self._channels.deliver(subject.phone_number or "", reminder.message)
        await self._log_report(reminder, report, now)

        if report.delivered:
            reminder.scheduled_for = due_at
            reminder.mark_sent(now)
            outcome = "sent"
            logger.info(f"Reminder {reminder.id} sent to subject {reminder.subject_id} via {report.channel}")
        else:
            terminal = reminder.record_delivery_failure(
                report.error_summary,
                max_attempts=self._max_attempts,
                backoff=self._retry_backoff,
                now=now,
            )
            outcome = "failed" if terminal else "retried"
            logger.warning(
                f"Reminder {reminder.id} delivery failed (attempt {reminder.retry_count}/{self._max_attempts}), "
                f"{'giving up' if terminal else 'retry scheduled for ' + reminder.scheduled_for.isoformat()}"
            )

        await self._store.update(reminder)
        return outcome

    async def _log_report(self, reminder: UserReminder, report: DeliveryReport, now: datetime) -> None:
        for attempt in report.attempts:
            await self._log(
                reminder,
                channel=attempt.channel,
                status=LOG_STATUS_SENT if attempt.success else LOG_STATUS_FAILED,
                error=attempt.error,
                now=now,
            )

    async def _log(
        self,
        reminder: UserReminder,
        channel: str | None,
        status: str,
        error: str | None,
        now: datetime,
    ) -> None:
        if self._notification_log is None:
            return
        entry = NotificationLogEntry(
            subject_id=reminder.subject_id,
            reminder_id=reminder.id,
            kind=reminder.type.value,
            channel=channel,
            status=status,
            content=reminder.message,
            gestational_week=reminder.current_week,
            error_message=error,
            sent_at=now if status == LOG_STATUS_SENT else None,
            created_at=now,
        )
        try:
            await self._notification_log.record(entry)
        except Exception as e:
            logger.error(f"Failed to write notification log for reminder {reminder.id}: {e}", exc_info=True)
