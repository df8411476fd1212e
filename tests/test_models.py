import pytest
from pydantic import ValidationError

from deckvault.models.card import MTGJSONDeck, ScryfallCard
from deckvault.models.collection import CollectionEntry, Condition
from deckvault.models.deck import Deck, DeckEntry, Zone
from deckvault.models.failure import DeckNotFoundError, FailureKind


class TestCollectionEntry:
    def test_persisted_shape_uses_camel_case(self) -> None:
        entry = CollectionEntry(
            scryfall_id="ring-id",
            name="Sol Ring",
            set_code="cmm",
            quantity=2,
            added_at="2024-01-01T00:00:00.000Z",
        )

        data = entry.model_dump(mode="json", by_alias=True)

        assert data["scryfallId"] == "ring-id"
        assert data["set"] == "cmm"
        assert data["addedAt"] == "2024-01-01T00:00:00.000Z"
        assert data["condition"] == "NM"
        assert data["foil"] is False

    def test_loads_persisted_shape(self) -> None:
        entry = CollectionEntry.model_validate(
            {
                "scryfallId": "ring-id",
                "name": "Sol Ring",
                "set": "cmm",
                "quantity": 1,
                "foil": True,
                "condition": "LP",
                "colors": [],
                "addedAt": "2024-01-01T00:00:00.000Z",
            }
        )

        assert entry.key == ("ring-id", True)
        assert entry.condition == Condition.LIGHTLY_PLAYED

    def test_immutable(self) -> None:
        entry = CollectionEntry(
            scryfall_id="ring-id", name="Sol Ring", set_code="cmm", quantity=1, added_at="t"
        )
        with pytest.raises(ValidationError):
            entry.quantity = 3  # type: ignore[misc]


class TestDeck:
    @pytest.fixture
    def deck(self) -> Deck:
        return Deck(
            id="deck-1",
            name="Atraxa",
            format="commander",
            created_at="t0",
            updated_at="t0",
            cards=(
                DeckEntry(scryfall_id="atraxa-id", name="Atraxa", quantity=1, zone=Zone.COMMANDER),
                DeckEntry(scryfall_id="ring-id", name="Sol Ring", quantity=1),
                DeckEntry(scryfall_id="ring-id", name="Sol Ring", quantity=2, zone=Zone.SIDEBOARD),
            ),
        )

    def test_zone_is_persisted_as_board(self, deck: Deck) -> None:
        data = deck.model_dump(mode="json", by_alias=True)

        assert data["createdAt"] == "t0"
        assert [c["board"] for c in data["cards"]] == ["commander", "main", "sideboard"]

    def test_find_entry_is_zone_exact(self, deck: Deck) -> None:
        assert deck.find_entry("ring-id", Zone.SIDEBOARD).quantity == 2
        assert deck.find_entry("ring-id", Zone.COMMANDER) is None

    def test_zone_cards_keep_order(self, deck: Deck) -> None:
        assert [e.scryfall_id for e in deck.zone_cards(Zone.MAIN)] == ["ring-id"]

    def test_unknown_zone_rejected(self) -> None:
        with pytest.raises(ValidationError):
            DeckEntry.model_validate({"scryfallId": "x", "name": "X", "quantity": 1, "board": "maybe"})


class TestRemoteRecords:
    def test_scryfall_card_ignores_unknown_fields(self, fixture_json) -> None:
        card = ScryfallCard.model_validate(fixture_json("scryfall_cards.json")[0])

        assert card.name == "Sol Ring"
        assert not hasattr(card, "object")

    def test_mtgjson_deck_boards(self, fixture_json) -> None:
        deck = MTGJSONDeck.model_validate(fixture_json("mtgjson_deck.json")["data"])

        assert [c.name for c in deck.commander] == ["Atraxa, Praetors' Voice"]
        assert deck.main_board[0].identifiers.scryfall_id == "sol-ring-id"


class TestFailure:
    def test_deck_not_found_detail(self) -> None:
        error = DeckNotFoundError("deck-1")

        detail = error.to_detail()

        assert error.status_code == 404
        assert detail.kind == FailureKind.NOT_FOUND
        assert "deck-1" in detail.detail
