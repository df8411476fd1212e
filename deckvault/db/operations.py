"""
Database CRUD operations.

Provides async functions for reading, writing and deleting
key-value documents.
"""

from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from deckvault.models.db import KeyValueDB


async def get_value(session: AsyncSession, key: str) -> KeyValueDB | None:
    """
    Get a stored document by key.

    Returns None if nothing is stored under this key.
    """
    result = await session.execute(select(KeyValueDB).where(KeyValueDB.key == key))
    return result.scalar_one_or_none()


async def set_value(session: AsyncSession, key: str, value: Any) -> KeyValueDB:
    """
    Insert or replace the document stored under a key.

    The whole value is replaced; there are no partial updates.
    """
    existing = await get_value(session, key)

    if existing:
        existing.value = value
        await session.flush()
        return existing

    row = KeyValueDB(key=key, value=value)
    session.add(row)
    await session.flush()
    return row


async def delete_value(session: AsyncSession, key: str) -> bool:
    """
    Delete the document stored under a key.

    Returns True if deleted, False if not found.
    """
    row = await get_value(session, key)
    if not row:
        return False

    await session.delete(row)
    return True


async def clear_values(session: AsyncSession) -> int:
    """
    Delete every stored document.

    Returns the number of deleted records.
    """
    result = await session.execute(delete(KeyValueDB))
    # rowcount is available on DELETE results; type stubs incomplete for async
    return int(result.rowcount)  # type: ignore[attr-defined]


async def list_keys(session: AsyncSession) -> list[str]:
    """All keys currently stored, sorted."""
    result = await session.execute(select(KeyValueDB.key).order_by(KeyValueDB.key))
    return list(result.scalars().all())
