"""
Notification Log

SQLAlchemy implementation of INotificationLog.
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from maternal_care.domains.maternal_health.application.dto.reminder_dtos import NotificationLogEntry

from .mappers import NotificationLogMapper
from .models import NotificationLogModel


class SqlAlchemyNotificationLog:
    """Append-only audit trail of notification attempts."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def record(self, entry: NotificationLogEntry) -> None:
        async with self._session_factory() as session:
            session.add(NotificationLogMapper.to_model(entry))
            await session.commit()

    async def list_for_subject(self, subject_id: int, limit: int = 50) -> list[NotificationLogEntry]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(NotificationLogModel)
                .where(NotificationLogModel.subject_id == subject_id)
                .order_by(NotificationLogModel.created_at.desc(), NotificationLogModel.id.desc())
                .limit(limit)
            )
            return [NotificationLogMapper.to_entry(m) for m in result.scalars().all()]
