from .async_db import (
    close_async_engine,
    create_async_database_engine,
    get_async_engine,
    get_session_factory,
)
from .base import Base, TimestampMixin

__all__ = [
    "Base",
    "TimestampMixin",
    "close_async_engine",
    "create_async_database_engine",
    "get_async_engine",
    "get_session_factory",
]
