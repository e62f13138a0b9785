"""
Alembic migration environment.

Migrations run synchronously through psycopg2; the URL comes from the same
settings the application uses, so ``alembic upgrade head`` needs no extra
configuration.
"""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from maternal_care.config.settings import get_settings
from maternal_care.database.base import Base

# Importing the models registers their tables on Base.metadata
from maternal_care.domains.maternal_health.infrastructure.persistence.sqlalchemy import models  # noqa: F401

config = context.config
target_metadata = Base.metadata


def migration_url() -> str:
    """Synchronous URL: an explicit DATABASE_URL loses its async driver suffix."""
    settings = get_settings()
    if settings.DATABASE_URL:
        return settings.DATABASE_URL.replace("+asyncpg", "").replace("+aiosqlite", "")
    return settings.database_url


config.set_main_option("sqlalchemy.url", migration_url().replace("%", "%%"))

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

COMPARE_OPTIONS = {"compare_type": True, "compare_server_default": True}


def run_migrations_offline() -> None:
    """Emit the migration SQL to stdout without connecting."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **COMPARE_OPTIONS,
    )
    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )
    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            transaction_per_migration=True,
            **COMPARE_OPTIONS,
        )
        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
