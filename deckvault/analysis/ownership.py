"""
Cross-store ownership views.

Joins collection entries and decks on the card ID. Nothing here is stored:
every answer is computed from the state passed in.
"""

from collections.abc import Iterable, Sequence

from deckvault.models.collection import CollectionEntry
from deckvault.models.deck import Deck


def is_owned(entries: Iterable[CollectionEntry], scryfall_id: str) -> bool:
    """True if any collection entry (foil or not) has this card ID."""
    return any(entry.scryfall_id == scryfall_id for entry in entries)


def find_owned(entries: Iterable[CollectionEntry], scryfall_id: str) -> CollectionEntry | None:
    """First collection entry for a card, or None."""
    for entry in entries:
        if entry.scryfall_id == scryfall_id:
            return entry
    return None


def owned_quantity(entries: Iterable[CollectionEntry], scryfall_id: str) -> int:
    """Total copies owned across foil and non-foil entries."""
    return sum(entry.quantity for entry in entries if entry.scryfall_id == scryfall_id)


def build_deck_membership(decks: Iterable[Deck]) -> dict[str, list[str]]:
    """
    Map each card ID to the names of decks containing it in any zone.

    Names are deduplicated per card and listed in deck order.
    """
    membership: dict[str, list[str]] = {}
    for deck in decks:
        for entry in deck.cards:
            names = membership.setdefault(entry.scryfall_id, [])
            if deck.name not in names:
                names.append(deck.name)
    return membership


class DeckMembershipIndex:
    """
    Memoized card -> deck names index.

    The index is rebuilt whenever it is asked about a deck list that is not
    the same object as last time. The deck store replaces its tuple on
    every mutation, so a changed list is always a new object.

    Usage:
        index = DeckMembershipIndex()
        names = index.decks_containing(store.decks, card_id)
    """

    def __init__(self) -> None:
        self._source: Sequence[Deck] | None = None
        self._index: dict[str, list[str]] = {}
        self.rebuilds = 0

    def get(self, decks: Sequence[Deck]) -> dict[str, list[str]]:
        if decks is not self._source:
            self._index = build_deck_membership(decks)
            self._source = decks
            self.rebuilds += 1
        return self._index

    def decks_containing(self, decks: Sequence[Deck], scryfall_id: str) -> list[str]:
        return list(self.get(decks).get(scryfall_id, []))
