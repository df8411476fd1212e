"""Tests for deck list import."""

import pytest

from deckvault.models.deck import Zone
from deckvault.services.deck_import import EmptyDeckListError, import_deck
from deckvault.storage.port import PersistenceError, Storage
from deckvault.store.app_store import AppStore

DECK_LIST = """Commander
1 Atraxa, Praetors' Voice

Deck
1 Sol Ring
1 Nonexistent Card
"""


class TestImportDeck:
    async def test_partial_resolution_keeps_going(self, store: AppStore, resolver) -> None:
        """An unresolvable name is reported and the rest of the list still imports."""
        result = await import_deck(store, resolver, "Atraxa", "commander", DECK_LIST)

        assert result.errors == ["Nonexistent Card"]
        assert [(c.name, c.zone) for c in result.deck.cards] == [
            ("Atraxa, Praetors' Voice", Zone.COMMANDER),
            ("Sol Ring", Zone.MAIN),
        ]
        assert len(result.imported) == 2
        assert result.total_lines == 3
        assert not result.complete

    async def test_resolves_sequentially_in_list_order(self, store: AppStore, resolver) -> None:
        await import_deck(store, resolver, "Atraxa", "commander", DECK_LIST)

        assert resolver.name_calls == ["Atraxa, Praetors' Voice", "Sol Ring", "Nonexistent Card"]

    async def test_resolver_errors_are_collected(self, store: AppStore, resolver) -> None:
        resolver.broken.add("Sol Ring")

        result = await import_deck(store, resolver, "Atraxa", "commander", DECK_LIST)

        assert result.errors == ["Sol Ring", "Nonexistent Card"]
        assert [c.name for c in result.deck.cards] == ["Atraxa, Praetors' Voice"]

    async def test_first_card_becomes_commander(self, store: AppStore, resolver) -> None:
        text = "1 Atraxa, Praetors' Voice\n1 Sol Ring"

        result = await import_deck(store, resolver, "Atraxa", "commander", text)

        assert result.deck.cards[0].zone == Zone.COMMANDER
        assert result.deck.cards[1].zone == Zone.MAIN

    async def test_entries_carry_card_attributes(self, store: AppStore, resolver) -> None:
        result = await import_deck(store, resolver, "Atraxa", "commander", DECK_LIST)

        atraxa = result.deck.find_entry("atraxa-id", Zone.COMMANDER)
        assert atraxa.mana_cost == "{G}{W}{U}{B}"
        assert atraxa.colors == ("B", "G", "U", "W")
        assert atraxa.image_uri == "https://cards.scryfall.io/normal/atraxa-id.jpg"

    async def test_deck_is_persisted(self, store: AppStore, resolver, backend) -> None:
        result = await import_deck(store, resolver, "Atraxa", "commander", DECK_LIST, "Imported")

        stored = backend.snapshot()["decks"]
        assert stored[0]["id"] == result.deck.id
        assert stored[0]["description"] == "Imported"
        assert len(stored[0]["cards"]) == 2

    async def test_repeated_lines_sum(self, store: AppStore, resolver) -> None:
        text = "Commander\n1 Atraxa, Praetors' Voice\nDeck\n1 Sol Ring\n2x Sol Ring"

        result = await import_deck(store, resolver, "Atraxa", "commander", text)

        assert result.deck.find_entry("sol-ring-id", Zone.MAIN).quantity == 3

    async def test_empty_list_rejected(self, store: AppStore, resolver) -> None:
        with pytest.raises(EmptyDeckListError):
            await import_deck(store, resolver, "Empty", "commander", "// nothing here\n")

        assert store.decks.decks == ()

    async def test_storage_failure_stops_import(self, failing_backend, resolver, clock) -> None:
        store = AppStore(Storage(failing_backend), clock=clock)

        with pytest.raises(PersistenceError):
            await import_deck(store, resolver, "Atraxa", "commander", DECK_LIST)

        assert len(store.decks.decks) == 1
        assert resolver.name_calls == []
