"""Tests for the persistence port and its backends."""

import logging

import pytest
from sqlalchemy.exc import OperationalError

from deckvault.models.db import Base
from deckvault.storage.port import MemoryBackend, PersistenceError, Storage
from deckvault.storage.sql import SqlBackend


class TestStorage:
    async def test_get_returns_default_when_missing(self, storage: Storage) -> None:
        assert await storage.get("decks", []) == []

    async def test_set_get_delete(self, storage: Storage) -> None:
        await storage.set("decks", [{"id": "a"}])
        assert await storage.get("decks", []) == [{"id": "a"}]

        await storage.delete("decks")
        assert await storage.get("decks", None) is None

    async def test_clear(self, storage: Storage, backend: MemoryBackend) -> None:
        await storage.set("decks", [])
        await storage.set("collection", [])

        await storage.clear()

        assert backend.snapshot() == {}

    async def test_ping_memory_backend(self, storage: Storage) -> None:
        assert storage.available
        assert await storage.ping()


class TestStorageWithoutBackend:
    def test_warns_once_on_creation(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING):
            Storage(None)

        assert "No persistence backend" in caplog.text

    async def test_degrades_to_noop(self) -> None:
        storage = Storage(None)

        await storage.set("decks", [{"id": "a"}])
        await storage.delete("decks")
        await storage.clear()

        assert await storage.get("decks", ["default"]) == ["default"]
        assert not storage.available
        assert not await storage.ping()


class TestMemoryBackend:
    async def test_values_are_copied(self, backend: MemoryBackend) -> None:
        value = [{"id": "a"}]
        await backend.set("decks", value)
        value.append({"id": "b"})

        assert await backend.get("decks") == [{"id": "a"}]

    async def test_rejects_non_json_values(self, backend: MemoryBackend) -> None:
        with pytest.raises(PersistenceError) as exc_info:
            await backend.set("decks", [object()])

        assert exc_info.value.key == "decks"


class TestSqlBackend:
    async def test_round_trip(self, session_factory) -> None:
        backend = SqlBackend(session_factory)

        await backend.set("collection", [{"scryfallId": "ring-id", "quantity": 1}])

        assert await backend.get("collection") == [{"scryfallId": "ring-id", "quantity": 1}]
        assert await backend.get("missing") is None

    async def test_delete_and_clear(self, session_factory) -> None:
        backend = SqlBackend(session_factory)
        await backend.set("collection", [])
        await backend.set("decks", [])

        await backend.delete("collection")
        assert await backend.get("collection") is None

        await backend.clear()
        assert await backend.get("decks") is None

    async def test_ping(self, session_factory) -> None:
        assert await SqlBackend(session_factory).ping()

    async def test_wraps_database_errors(self, async_engine, session_factory) -> None:
        """Database failures surface as PersistenceError with the key."""
        async with async_engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

        backend = SqlBackend(session_factory)

        with pytest.raises(PersistenceError) as exc_info:
            await backend.set("decks", [])

        assert exc_info.value.key == "decks"
        assert isinstance(exc_info.value.__cause__, OperationalError)
