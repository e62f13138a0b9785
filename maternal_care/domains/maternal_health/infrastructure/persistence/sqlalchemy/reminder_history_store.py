"""
Reminder History Store

SQLAlchemy implementation of IReminderHistoryStore. Each operation runs in
its own session so the store can be shared by scheduler jobs and requests.
"""

import logging
from collections.abc import Sequence
from datetime import datetime

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from maternal_care.core.domain.exceptions import ConcurrencyException
from maternal_care.domains.maternal_health.domain.entities import UserReminder
from maternal_care.domains.maternal_health.domain.value_objects import ReminderStatus, ReminderType

from .mappers import UserReminderMapper
from .models import UserReminderModel

logger = logging.getLogger(__name__)


class SqlAlchemyReminderHistoryStore:
    """
    SQLAlchemy implementation of the reminder history store.

    The partial unique index on user_reminders is the authoritative
    deduplication guard; `exists` is only a fast pre-check.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        """
        Initialize store.

        Args:
            session_factory: Factory opening one async session per operation
        """
        self._session_factory = session_factory

    async def exists(
        self,
        subject_id: int,
        reminder_type: ReminderType,
        week: int,
        statuses: Sequence[ReminderStatus],
    ) -> bool:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserReminderModel.id)
                .where(
                    UserReminderModel.subject_id == subject_id,
                    UserReminderModel.type == reminder_type,
                    UserReminderModel.current_week == week,
                    UserReminderModel.status.in_(list(statuses)),
                )
                .limit(1)
            )
            return result.scalar_one_or_none() is not None

    async def insert_if_absent(self, reminder: UserReminder) -> UserReminder | None:
        """Insert the reminder, returning None when its key is already taken."""
        async with self._session_factory() as session:
            model = UserReminderMapper.to_model(reminder)
            session.add(model)
            try:
                await session.commit()
            except IntegrityError as e:
                await session.rollback()
                if await self.exists(
                    reminder.subject_id,
                    reminder.type,
                    reminder.current_week,
                    ReminderStatus.blocking_statuses(),
                ):
                    logger.info(
                        f"Reminder {reminder.type.value} week {reminder.current_week} "
                        f"already queued for subject {reminder.subject_id}"
                    )
                    return None
                logger.error(f"Integrity error inserting reminder for subject {reminder.subject_id}: {e}")
                raise
            await session.refresh(model)
            return UserReminderMapper.to_entity(model)

    async def get(self, reminder_id: int) -> UserReminder | None:
        async with self._session_factory() as session:
            model = await session.get(UserReminderModel, reminder_id)
            return UserReminderMapper.to_entity(model) if model else None

    async def list_pending(self, limit: int, now: datetime) -> list[UserReminder]:
        """Due pending reminders, high priority first, then oldest schedule."""
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserReminderModel)
                .where(
                    UserReminderModel.status == ReminderStatus.PENDING,
                    UserReminderModel.scheduled_for <= now,
                )
                .order_by(
                    UserReminderModel.priority_rank,
                    UserReminderModel.scheduled_for,
                    UserReminderModel.id,
                )
                .limit(limit)
            )
            return [UserReminderMapper.to_entity(m) for m in result.scalars().all()]

    async def update(self, reminder: UserReminder) -> UserReminder:
        """Persist the reminder if nobody changed it since it was read.

        Raises:
            ConcurrencyException: If the stored version differs.
        """
        async with self._session_factory() as session:
            result = await session.execute(
                update(UserReminderModel)
                .where(
                    UserReminderModel.id == reminder.id,
                    UserReminderModel.version == reminder.version,
                )
                .values(
                    **UserReminderMapper.mutable_values(reminder),
                    version=reminder.version + 1,
                )
            )
            if result.rowcount == 0:
                await session.rollback()
                raise ConcurrencyException("UserReminder", reminder.id, reminder.version)
            await session.commit()

        reminder.increment_version()
        reminder.clear_domain_events()
        return reminder

    async def list_upcoming(self, subject_id: int, limit: int = 10) -> list[UserReminder]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserReminderModel)
                .where(
                    UserReminderModel.subject_id == subject_id,
                    UserReminderModel.status == ReminderStatus.PENDING,
                )
                .order_by(UserReminderModel.scheduled_for, UserReminderModel.id)
                .limit(limit)
            )
            return [UserReminderMapper.to_entity(m) for m in result.scalars().all()]

    async def list_history(self, subject_id: int, limit: int = 20) -> list[UserReminder]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserReminderModel)
                .where(UserReminderModel.subject_id == subject_id)
                .order_by(UserReminderModel.created_at.desc(), UserReminderModel.id.desc())
                .limit(limit)
            )
            return [UserReminderMapper.to_entity(m) for m in result.scalars().all()]

    async def count_by_status(self, subject_id: int) -> dict[ReminderStatus, int]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(UserReminderModel.status, func.count())
                .where(UserReminderModel.subject_id == subject_id)
                .group_by(UserReminderModel.status)
            )
            return {status: count for status, count in result.all()}
