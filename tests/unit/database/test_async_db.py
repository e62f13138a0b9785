"""Tests for the async engine and session factory helpers."""

import pytest
from sqlalchemy.pool import NullPool

from maternal_care.config.settings import Settings
from maternal_care.database import async_db


@pytest.fixture(autouse=True)
async def reset_engine():
    yield
    await async_db.close_async_engine()


@pytest.mark.unit
class TestCreateEngine:
    async def test_sqlite_uses_null_pool(self):
        settings = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")

        engine = async_db.create_async_database_engine(settings)

        assert isinstance(engine.pool, NullPool)
        assert engine.url.drivername == "sqlite+aiosqlite"

    async def test_debug_uses_null_pool(self):
        settings = Settings(DEBUG=True, DB_PASSWORD="secret")

        engine = async_db.create_async_database_engine(settings)

        assert isinstance(engine.pool, NullPool)
        assert engine.url.drivername == "postgresql+asyncpg"


@pytest.mark.unit
class TestSessionFactory:
    async def test_session_factory_is_shared(self, monkeypatch):
        settings = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")
        monkeypatch.setattr(async_db, "get_settings", lambda: settings)

        factory = async_db.get_session_factory()

        assert async_db.get_session_factory() is factory
        assert async_db.get_async_engine() is async_db._engine

    async def test_close_resets_engine(self, monkeypatch):
        settings = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")
        monkeypatch.setattr(async_db, "get_settings", lambda: settings)
        async_db.get_async_engine()

        await async_db.close_async_engine()

        assert async_db._engine is None
        assert async_db._session_factory is None
