"""
Subject Repository

SQLAlchemy implementation of ISubjectRepository.
"""

import logging
from collections.abc import Iterable, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from maternal_care.domains.maternal_health.domain.entities import Subject
from maternal_care.domains.maternal_health.domain.value_objects import PregnancyStatus

from .mappers import SubjectMapper
from .models import SubjectModel

logger = logging.getLogger(__name__)


class SqlAlchemySubjectRepository:
    """Read access to subjects, plus `save` for onboarding and fixtures."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def list_by_status(self, statuses: Sequence[PregnancyStatus]) -> list[Subject]:
        if not statuses:
            return []
        async with self._session_factory() as session:
            result = await session.execute(
                select(SubjectModel)
                .where(SubjectModel.pregnancy_status.in_(list(statuses)))
                .order_by(SubjectModel.id)
            )
            return [SubjectMapper.to_entity(m) for m in result.scalars().all()]

    async def get(self, subject_id: int) -> Subject | None:
        async with self._session_factory() as session:
            model = await session.get(SubjectModel, subject_id)
            return SubjectMapper.to_entity(model) if model else None

    async def get_many(self, subject_ids: Iterable[int]) -> dict[int, Subject]:
        ids = list(set(subject_ids))
        if not ids:
            return {}
        async with self._session_factory() as session:
            result = await session.execute(select(SubjectModel).where(SubjectModel.id.in_(ids)))
            return {m.id: SubjectMapper.to_entity(m) for m in result.scalars().all()}

    async def save(self, subject: Subject) -> Subject:
        """Insert or update a subject."""
        async with self._session_factory() as session:
            model = await session.merge(SubjectMapper.to_model(subject))
            await session.commit()
            await session.refresh(model)
            logger.debug(f"Subject {model.id} saved")
            return SubjectMapper.to_entity(model)
