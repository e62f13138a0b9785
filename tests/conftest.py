"""
Shared pytest fixtures for all tests.

This module provides the in-memory database, repositories backed by it,
and in-memory fakes for the application layer ports.
"""

import os
from collections.abc import AsyncGenerator
from datetime import UTC, datetime

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool

# Ensure test environment before any settings are read
os.environ["ENVIRONMENT"] = "test"
os.environ["REMINDER_SCHEDULER_ENABLED"] = "false"
os.environ["DAILY_TIPS_ENABLED"] = "false"

from maternal_care.database.base import Base  # noqa: E402
from maternal_care.domains.maternal_health.infrastructure.persistence.sqlalchemy import (  # noqa: E402
    SqlAlchemyNotificationLog,
    SqlAlchemyReminderHistoryStore,
    SqlAlchemySubjectRepository,
)
from tests.utils.fakes import (  # noqa: E402
    FakeClock,
    FakeNotifier,
    InMemoryNotificationLog,
    InMemoryReminderStore,
    InMemorySubjectRepository,
)

# ============================================================================
# DATABASE FIXTURES
# ============================================================================


@pytest_asyncio.fixture
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with the full schema."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory bound to the in-memory engine."""
    return async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def file_session_factory(tmp_path) -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """SQLite file database with one connection per session, for overlapping runs."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'reminders.db'}", poolclass=NullPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)
    await engine.dispose()


@pytest.fixture
def reminder_store(session_factory) -> SqlAlchemyReminderHistoryStore:
    return SqlAlchemyReminderHistoryStore(session_factory)


@pytest.fixture
def subject_repository(session_factory) -> SqlAlchemySubjectRepository:
    return SqlAlchemySubjectRepository(session_factory)


@pytest.fixture
def notification_log(session_factory) -> SqlAlchemyNotificationLog:
    return SqlAlchemyNotificationLog(session_factory)


# ============================================================================
# IN-MEMORY FAKES
# ============================================================================


@pytest.fixture
def clock() -> FakeClock:
    """Controllable clock starting on 2024-03-11 08:00 UTC."""
    return FakeClock(datetime(2024, 3, 11, 8, 0, tzinfo=UTC))


@pytest.fixture
def memory_store() -> InMemoryReminderStore:
    return InMemoryReminderStore()


@pytest.fixture
def memory_subjects() -> InMemorySubjectRepository:
    return InMemorySubjectRepository()


@pytest.fixture
def memory_log() -> InMemoryNotificationLog:
    return InMemoryNotificationLog()


@pytest.fixture
def whatsapp() -> FakeNotifier:
    return FakeNotifier("whatsapp")


@pytest.fixture
def sms() -> FakeNotifier:
    return FakeNotifier("sms")
