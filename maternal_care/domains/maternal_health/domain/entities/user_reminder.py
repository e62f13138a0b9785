"""User Reminder Entity - Aggregate Root.

One firing of a schedule rule for a subject, from queueing to delivery.
Rows are never deleted so they double as the reminder history.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from maternal_care.core.domain.entities import AggregateRoot
from maternal_care.core.domain.exceptions import InvalidOperationException

from ..value_objects.reminder_priority import ReminderPriority
from ..value_objects.reminder_status import ReminderStatus
from ..value_objects.reminder_type import ReminderType

if TYPE_CHECKING:
    from ..schedule.medical_schedule import ReminderRule

NO_CONTACT_ERROR = "no contact"


@dataclass
class UserReminder(AggregateRoot[int]):
    """Queued reminder with its delivery lifecycle.

    State transitions are validated by ReminderStatus.can_transition_to and
    every mutation refreshes updated_at.
    """

    subject_id: int = 0
    type: ReminderType = ReminderType.ANC
    priority: ReminderPriority = ReminderPriority.MEDIUM
    rule_key: str | None = None
    scheduled_for: datetime = field(default_factory=lambda: datetime.now(UTC))
    status: ReminderStatus = ReminderStatus.PENDING

    # Snapshot of the subject's age when the reminder was queued
    current_week: int = 0
    current_day: int = 0

    message: str = ""
    sent_at: datetime | None = None
    retry_count: int = 0
    error_message: str | None = None

    @classmethod
    def from_rule(
        cls,
        subject_id: int,
        rule: "ReminderRule",
        message: str,
        current_week: int,
        current_day: int = 0,
        now: datetime | None = None,
    ) -> "UserReminder":
        """Build a pending reminder for a due rule."""
        now = now or datetime.now(UTC)
        return cls(
            subject_id=subject_id,
            type=rule.type,
            priority=rule.priority,
            rule_key=rule.key,
            scheduled_for=now,
            current_week=current_week,
            current_day=current_day,
            message=message,
            created_at=now,
            updated_at=now,
        )

    def is_due(self, now: datetime) -> bool:
        return self.status is ReminderStatus.PENDING and self.scheduled_for <= now

    def claim(self, lease_until: datetime, now: datetime | None = None) -> None:
        """Reserve the reminder for one delivery attempt.

        The reminder stays pending but is not due again before ``lease_until``,
        so a dispatcher that stops mid-delivery only delays it.

        Raises:
            InvalidOperationException: If the reminder is not pending.
        """
        self._transition("claim", ReminderStatus.PENDING)
        self.scheduled_for = lease_until
        self.touch(now)

    def mark_sent(self, now: datetime | None = None) -> None:
        """Record a successful delivery.

        Raises:
            InvalidOperationException: If the reminder is not pending.
        """
        now = now or datetime.now(UTC)
        self._transition("mark_sent", ReminderStatus.SENT)
        self.sent_at = now
        self.error_message = None
        self.touch(now)

    def record_delivery_failure(
        self,
        error: str,
        max_attempts: int,
        backoff: timedelta,
        now: datetime | None = None,
    ) -> bool:
        """Count a failed delivery attempt and schedule a retry if allowed.

        Args:
            error: Reason reported by the channels.
            max_attempts: Attempts allowed before the reminder fails for good.
            backoff: Delay before the next attempt.
            now: Reference time.

        Returns:
            True when the failure is terminal.

        Raises:
            InvalidOperationException: If the reminder is not pending.
        """
        now = now or datetime.now(UTC)
        if self.status is not ReminderStatus.PENDING:
            raise InvalidOperationException("record_delivery_failure", self.status.value)

        self.retry_count += 1
        self.error_message = error
        if self.retry_count < max_attempts:
            self._transition("retry", ReminderStatus.PENDING)
            self.scheduled_for = now + backoff
        else:
            self._transition("fail", ReminderStatus.FAILED)
        self.touch(now)
        return self.status is ReminderStatus.FAILED

    def mark_undeliverable(self, reason: str = NO_CONTACT_ERROR, now: datetime | None = None) -> None:
        """Fail immediately, without retries (e.g. the subject has no contact)."""
        self._transition("mark_undeliverable", ReminderStatus.FAILED)
        self.error_message = reason
        self.touch(now)

    def dismiss(self, now: datetime | None = None) -> None:
        """Withdraw the reminder before it is delivered.

        Raises:
            InvalidOperationException: If the reminder is not pending.
        """
        self._transition("dismiss", ReminderStatus.DISMISSED)
        self._record_event({"event": "reminder_dismissed", "reminder_id": self.id})
        self.touch(now)

    def _transition(self, operation: str, new_status: ReminderStatus) -> None:
        if not self.status.can_transition_to(new_status):
            raise InvalidOperationException(
                operation,
                self.status.value,
                f"Cannot {operation.replace('_', ' ')} a reminder in state {self.status.display_name}",
            )
        self.status = new_status
