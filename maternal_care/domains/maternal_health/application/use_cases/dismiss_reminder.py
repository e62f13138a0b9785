# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Use case withdrawing a pending reminder.
# ============================================================================
"""Dismiss Reminder Use Case."""

import logging
from typing import TYPE_CHECKING

from maternal_care.core.domain.exceptions import EntityNotFoundException

from ...domain.entities.user_reminder import UserReminder

if TYPE_CHECKING:
    from ..ports import IReminderHistoryStore

logger = logging.getLogger(__name__)


class DismissReminderUseCase:
    """Mark a pending reminder as dismissed so the dispatcher skips it."""

    def __init__(self, store: "IReminderHistoryStore") -> None:
        self._store = store

    async def execute(self, reminder_id: int) -> UserReminder:
        """Dismiss the reminder.

        Raises:
            EntityNotFoundException: If the reminder does not exist.
            InvalidOperationException: If the reminder is no longer pending.
            ConcurrencyException: If it changed while being dismissed.
        """
        reminder = await self._store.get(reminder_id)
        if reminder is None:
            raise EntityNotFoundException("UserReminder", reminder_id)

        reminder.dismiss()
        updated = await self._store.update(reminder)
        logger.info(f"Reminder {reminder_id} dismissed for subject {reminder.subject_id}")
        return updated
