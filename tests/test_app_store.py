"""Tests for the application store container."""

import pytest

from deckvault.config import Settings
from deckvault.models.deck import DeckEntry, Zone
from deckvault.storage.port import MemoryBackend, PersistenceError, Storage
from deckvault.store import app_store as app_store_module
from deckvault.store.app_store import AppStore, create_app_store


class TestAppStore:
    async def test_init_loads_both_stores(self, backend: MemoryBackend, clock) -> None:
        seed = AppStore(Storage(backend), clock=clock)
        seed.collection.add_to_collection("ring-id", "Sol Ring")
        seed.decks.create_deck("Aggro", "modern")
        await seed.flush()

        store = AppStore(Storage(backend), clock=clock)
        await store.init()

        assert store.initialized
        assert store.collection.is_in_collection("ring-id")
        assert store.decks.decks[0].name == "Aggro"

    async def test_init_is_idempotent(self, store: AppStore) -> None:
        store.collection.add_to_collection("ring-id", "Sol Ring")

        await store.init()

        assert store.collection.is_in_collection("ring-id")

    async def test_stores_are_isolated(self, store: AppStore, clock) -> None:
        other = AppStore(Storage(MemoryBackend()), clock=clock)
        await other.init()

        store.collection.add_to_collection("ring-id", "Sol Ring")

        assert not other.collection.is_in_collection("ring-id")
        await store.flush()

    async def test_backend_read_error_propagates(self, clock) -> None:
        class BrokenReads(MemoryBackend):
            async def get(self, key: str):
                raise PersistenceError("unreadable", key)

        store = AppStore(Storage(BrokenReads()), clock=clock)

        with pytest.raises(PersistenceError):
            await store.init()
        assert not store.initialized

    async def test_flush_reports_failures(self, failing_backend, clock) -> None:
        store = AppStore(Storage(failing_backend), clock=clock)
        store.collection.add_to_collection("ring-id", "Sol Ring")

        with pytest.raises(PersistenceError):
            await store.flush()


class TestDecksContaining:
    async def test_lists_deck_names(self, store: AppStore) -> None:
        first = store.decks.create_deck("Atraxa", "commander")
        second = store.decks.create_deck("Artifacts", "commander")
        store.decks.create_deck("Empty", "commander")
        ring = DeckEntry(scryfall_id="ring-id", name="Sol Ring", quantity=1)
        store.decks.add_card_to_deck(first.id, ring)
        store.decks.add_card_to_deck(second.id, ring)

        assert store.decks_containing("ring-id") == ["Atraxa", "Artifacts"]
        assert store.decks_containing("missing") == []
        await store.flush()

    async def test_index_follows_mutations(self, store: AppStore) -> None:
        deck = store.decks.create_deck("Atraxa", "commander")
        store.decks.add_card_to_deck(deck.id, DeckEntry(scryfall_id="ring-id", name="Sol Ring", quantity=1))
        assert store.decks_containing("ring-id") == ["Atraxa"]

        store.decks.remove_card_from_deck(deck.id, "ring-id", Zone.MAIN)

        assert store.decks_containing("ring-id") == []
        await store.flush()


class TestCreateAppStore:
    async def test_memory_only(self) -> None:
        store = await create_app_store(Settings(persistence_enabled=False))

        assert store.initialized
        assert not store.storage.available

    async def test_sql_backed(self, monkeypatch: pytest.MonkeyPatch, session_factory) -> None:
        async def fake_init_db() -> None:
            return None

        monkeypatch.setattr(app_store_module, "init_db", fake_init_db)
        monkeypatch.setattr(app_store_module, "async_session_factory", session_factory)

        store = await create_app_store(Settings(persistence_enabled=True))
        await store.collection.add_to_collection("ring-id", "Sol Ring")

        assert store.storage.available
        assert await store.storage.ping()
