"""Tests for database CRUD operations."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from deckvault.db.operations import clear_values, delete_value, get_value, list_keys, set_value


@pytest.fixture
async def session(session_factory) -> AsyncSession:
    """Provide a database session for tests."""
    async with session_factory() as session:
        yield session


class TestKeyValueOperations:
    async def test_set_and_get(self, session: AsyncSession) -> None:
        """Can store and read back a JSON document."""
        await set_value(session, "decks", [{"id": "a", "cards": []}])
        await session.commit()

        row = await get_value(session, "decks")

        assert row is not None
        assert row.value == [{"id": "a", "cards": []}]

    async def test_get_missing_returns_none(self, session: AsyncSession) -> None:
        assert await get_value(session, "missing") is None

    async def test_set_replaces_whole_value(self, session: AsyncSession) -> None:
        """A second write replaces the document instead of merging."""
        await set_value(session, "collection", [{"scryfallId": "a"}, {"scryfallId": "b"}])
        await session.commit()
        await set_value(session, "collection", [{"scryfallId": "c"}])
        await session.commit()

        row = await get_value(session, "collection")

        assert row.value == [{"scryfallId": "c"}]

    async def test_delete(self, session: AsyncSession) -> None:
        await set_value(session, "decks", [])
        await session.commit()

        assert await delete_value(session, "decks") is True
        await session.commit()
        assert await get_value(session, "decks") is None

    async def test_delete_missing(self, session: AsyncSession) -> None:
        assert await delete_value(session, "missing") is False

    async def test_clear_and_list_keys(self, session: AsyncSession) -> None:
        await set_value(session, "decks", [])
        await set_value(session, "collection", [])
        await session.commit()

        assert await list_keys(session) == ["collection", "decks"]

        count = await clear_values(session)
        await session.commit()

        assert count == 2
        assert await list_keys(session) == []
