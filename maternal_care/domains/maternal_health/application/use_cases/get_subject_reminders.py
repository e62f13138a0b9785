# ============================================================================
# SCOPE: APPLICATION LAYER (Maternal Health)
# Description: Read-side use cases over a subject's reminders.
# ============================================================================
"""Subject Reminder Queries.

Upcoming reminders, reminder history and per-status statistics.
"""

import logging
from typing import TYPE_CHECKING

from maternal_care.core.domain.exceptions import EntityNotFoundException

from ...domain.entities.user_reminder import UserReminder
from ...domain.value_objects.reminder_status import ReminderStatus
from ..dto.reminder_dtos import ReminderStats

if TYPE_CHECKING:
    from ..ports import IReminderHistoryStore, ISubjectRepository

logger = logging.getLogger(__name__)

UPCOMING_LIMIT = 10
HISTORY_LIMIT = 20


class _SubjectReminderQuery:
    def __init__(self, store: "IReminderHistoryStore", subject_repository: "ISubjectRepository") -> None:
        self._store = store
        self._subjects = subject_repository

    async def _ensure_subject(self, subject_id: int) -> None:
        if await self._subjects.get(subject_id) is None:
            raise EntityNotFoundException("Subject", subject_id)


class GetUpcomingRemindersUseCase(_SubjectReminderQuery):
    """Pending reminders of a subject, soonest first."""

    async def execute(self, subject_id: int, limit: int = UPCOMING_LIMIT) -> list[UserReminder]:
        await self._ensure_subject(subject_id)
        return await self._store.list_upcoming(subject_id, limit=limit)


class GetReminderHistoryUseCase(_SubjectReminderQuery):
    """All reminders of a subject, newest first."""

    async def execute(self, subject_id: int, limit: int = HISTORY_LIMIT) -> list[UserReminder]:
        await self._ensure_subject(subject_id)
        return await self._store.list_history(subject_id, limit=limit)


class GetReminderStatsUseCase(_SubjectReminderQuery):
    """Reminder counts per status."""

    async def execute(self, subject_id: int) -> ReminderStats:
        await self._ensure_subject(subject_id)
        counts = await self._store.count_by_status(subject_id)
        return ReminderStats(
            subject_id=subject_id,
            counts={status: counts.get(status, 0) for status in ReminderStatus},
        )
