# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Durable queue of reminders awaiting delivery.
# ============================================================================
"""Reminder Queue.

Enqueueing combines the deduplicator check with the store's atomic
insert-if-absent. The storage level unique index stays the final guard when
two sweeps race past the check at the same time.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from ...domain.entities.user_reminder import UserReminder
from .reminder_deduplicator import ReminderDeduplicator

if TYPE_CHECKING:
    from ...domain.schedule.medical_schedule import ReminderRule
    from ..ports import IReminderHistoryStore

logger = logging.getLogger(__name__)


class ReminderQueue:
    """Queue facade over the reminder history store."""

    def __init__(
        self,
        store: "IReminderHistoryStore",
        deduplicator: ReminderDeduplicator | None = None,
        clock: Callable[[], datetime] | None = None,
    ):
        self._store = store
        self._deduplicator = deduplicator or ReminderDeduplicator(store)
        self._clock = clock or (lambda: datetime.now(UTC))

    async def enqueue(
        self,
        subject_id: int,
        rule: "ReminderRule",
        rendered_message: str,
        current_week: int,
        current_day: int = 0,
    ) -> UserReminder | None:
        """Queue a pending reminder for a due rule.

        Args:
            subject_id: Subject to notify.
            rule: Due schedule rule.
            rendered_message: Message already rendered in the subject's language.
            current_week: Week snapshot, part of the dedup key.
            current_day: Remainder days snapshot.

        Returns:
            The pending reminder, or None when one already exists for the key.
        """
        if not await self._deduplicator.should_fire(subject_id, rule.type, current_week):
            return None

        reminder = UserReminder.from_rule(
            subject_id=subject_id,
            rule=rule,
            message=rendered_message,
            current_week=current_week,
            current_day=current_day,
            now=self._clock(),
        )
        stored = await self._store.insert_if_absent(reminder)
        if stored is None:
            logger.info(f"Concurrent enqueue won for subject {subject_id} {rule.type.value} week {current_week}")
            return None

        logger.info(f"Reminder queued for subject {subject_id} - week {current_week} - {rule.key}")
        return stored

    async def list_pending(self, limit: int) -> list[UserReminder]:
        """Due pending reminders, highest priority first, then oldest schedule."""
        return await self._store.list_pending(limit=limit, now=self._clock())
