"""
SQL persistence backend.

Stores each key as one row of the ``kv_store`` table using the async
SQLAlchemy session factory. Every call runs in its own transaction.
"""

import logging
from typing import Any

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from deckvault.db.operations import clear_values, delete_value, get_value, set_value
from deckvault.storage.port import PersistenceError

logger = logging.getLogger(__name__)


class SqlBackend:
    """Key-value backend on top of an async SQLAlchemy session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def get(self, key: str) -> Any | None:
        try:
            async with self._session_factory() as session:
                row = await get_value(session, key)
                return row.value if row else None
        except SQLAlchemyError as e:
            logger.error("Failed to read '%s': %s", key, e)
            raise PersistenceError(f"Failed to read '{key}': {e}", key) from e

    async def set(self, key: str, value: Any) -> None:
        try:
            async with self._session_factory() as session:
                await set_value(session, key, value)
                await session.commit()
        except SQLAlchemyError as e:
            logger.error("Failed to write '%s': %s", key, e)
            raise PersistenceError(f"Failed to write '{key}': {e}", key) from e

    async def delete(self, key: str) -> None:
        try:
            async with self._session_factory() as session:
                await delete_value(session, key)
                await session.commit()
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to delete '{key}': {e}", key) from e

    async def clear(self) -> None:
        try:
            async with self._session_factory() as session:
                count = await clear_values(session)
                await session.commit()
            logger.info("Cleared %d stored documents", count)
        except SQLAlchemyError as e:
            raise PersistenceError(f"Failed to clear storage: {e}") from e

    async def ping(self) -> bool:
        """Check database connectivity."""
        try:
            async with self._session_factory() as session:
                await session.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError:
            return False
