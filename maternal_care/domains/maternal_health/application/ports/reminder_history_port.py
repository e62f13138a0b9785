# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Reminder history store port (DIP compliant).
# ============================================================================
"""Reminder History Store Port.

Durable record of every queued reminder. It is the single source of truth
for deduplication, so it must offer an atomic check-and-insert.
"""

from collections.abc import Sequence
from datetime import datetime
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ...domain.entities.user_reminder import UserReminder
    from ...domain.value_objects.reminder_status import ReminderStatus
    from ...domain.value_objects.reminder_type import ReminderType


@runtime_checkable
class IReminderHistoryStore(Protocol):
    """Interface for reminder persistence.

    Implementations: SqlAlchemyReminderHistoryStore
    """

    async def exists(
        self,
        subject_id: int,
        reminder_type: "ReminderType",
        week: int,
        statuses: Sequence["ReminderStatus"],
    ) -> bool:
        """Whether a reminder exists for the key in any of the given statuses."""
        ...

    async def insert_if_absent(self, reminder: "UserReminder") -> "UserReminder | None":
        """Insert the reminder unless a blocking row already holds its key.

        Returns:
            The stored reminder with its ID, or None when another row won.
        """
        ...

    async def get(self, reminder_id: int) -> "UserReminder | None":
        ...

    async def list_pending(self, limit: int, now: datetime) -> list["UserReminder"]:
        """Due pending reminders by priority rank, then scheduled time."""
        ...

    async def update(self, reminder: "UserReminder") -> "UserReminder":
        """Persist a mutated reminder.

        Raises:
            ConcurrencyException: If the stored version no longer matches.
        """
        ...

    async def list_upcoming(self, subject_id: int, limit: int = 10) -> list["UserReminder"]:
        ...

    async def list_history(self, subject_id: int, limit: int = 20) -> list["UserReminder"]:
        ...

    async def count_by_status(self, subject_id: int) -> dict["ReminderStatus", int]:
        ...
