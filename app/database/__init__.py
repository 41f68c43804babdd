"""
Database Package
Connection, session management and base models for stored credentials.
"""

from app.database.base import Base, TimestampMixin, UUIDMixin
from app.database.connection import (
    async_engine,
    async_session_factory,
    close_db,
    get_async_session,
)

__all__ = [
    "async_engine",
    "async_session_factory",
    "get_async_session",
    "close_db",
    "Base",
    "TimestampMixin",
    "UUIDMixin",
]
