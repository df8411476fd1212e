"""
Card resolver contract.

The services depend on this protocol rather than on ScryfallClient so any
lookup source (a cache, a fake in tests) can stand in. Converters turn a
resolved record into the display attributes stored on collection and
deck entries.
"""

from collections.abc import Iterable
from typing import Any, Protocol

from deckvault.clients.scryfall import card_colors, card_image_uri, card_mana_cost
from deckvault.models.card import ScryfallCard
from deckvault.models.deck import DeckEntry, Zone


class CardResolver(Protocol):
    async def get_card(self, card_id: str) -> ScryfallCard | None: ...

    async def get_cards_by_ids(self, card_ids: Iterable[str]) -> list[ScryfallCard]: ...

    async def get_card_by_name(self, name: str) -> ScryfallCard | None: ...


def collection_attrs(card: ScryfallCard) -> dict[str, Any]:
    """Keyword arguments for CollectionStore.add_to_collection."""
    return {
        "scryfall_id": card.id,
        "name": card.name,
        "set_code": card.set,
        "set_name": card.set_name,
        "image_uri": card_image_uri(card) or None,
        "mana_cost": card_mana_cost(card) or None,
        "type_line": card.type_line,
        "colors": card_colors(card),
    }


def deck_entry(card: ScryfallCard, quantity: int, zone: Zone = Zone.MAIN) -> DeckEntry:
    """A deck entry carrying the card's display attributes."""
    return DeckEntry(
        scryfall_id=card.id,
        name=card.name,
        quantity=quantity,
        zone=zone,
        image_uri=card_image_uri(card) or None,
        mana_cost=card_mana_cost(card) or None,
        type_line=card.type_line or None,
        colors=tuple(card_colors(card)),
    )
