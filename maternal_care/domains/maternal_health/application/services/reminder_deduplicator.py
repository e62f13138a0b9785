# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Idempotency gate in front of the reminder queue.
# ============================================================================
"""Reminder Deduplicator.

Keeps the periodic sweeps from notifying a subject again while they stay
inside a matching week range. The dedup key is (subject, type, week).
"""

import logging
from typing import TYPE_CHECKING

from ...domain.value_objects.reminder_status import ReminderStatus
from ...domain.value_objects.reminder_type import ReminderType

if TYPE_CHECKING:
    from ..ports import IReminderHistoryStore

logger = logging.getLogger(__name__)


class ReminderDeduplicator:
    """Decides whether a rule may fire for a subject this week.

    A reminder already pending, sent or dismissed for the same key blocks
    a new one. Failed reminders do not block, so a later sweep may queue the
    event again once retries were exhausted.
    """

    def __init__(self, store: "IReminderHistoryStore"):
        self._store = store

    async def should_fire(self, subject_id: int, reminder_type: ReminderType, current_week: int) -> bool:
        already_queued = await self._store.exists(
            subject_id,
            reminder_type,
            current_week,
            ReminderStatus.blocking_statuses(),
        )
        if already_queued:
            logger.debug(
                f"Reminder {reminder_type.value} week {current_week} already queued for subject {subject_id}"
            )
        return not already_queued
