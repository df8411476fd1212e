"""
Pure state transitions for the collection and deck stores.

Every function takes the current immutable state (a tuple of frozen
models) and returns the next state. Nothing here performs I/O, reads the
clock or generates IDs: timestamps and new records are passed in.

When a transition has nothing to change it returns the input tuple
itself, so callers can detect a no-op with an identity check.
"""

from collections.abc import Callable, Mapping
from typing import Any

from deckvault.models.collection import CollectionEntry
from deckvault.models.deck import Deck, DeckEntry, Zone

CollectionState = tuple[CollectionEntry, ...]
DeckState = tuple[Deck, ...]

# Deck metadata fields that may be merged by update_deck
MUTABLE_DECK_FIELDS = frozenset({"name", "format", "description"})

# Of those, the ones that may be cleared with None
NULLABLE_DECK_FIELDS = frozenset({"description"})


# --- Collection ---


def add_collection_entry(state: CollectionState, entry: CollectionEntry) -> CollectionState:
    """
    Add an entry, accumulating quantity on an existing (card, foil) key.

    Condition and display attributes of an existing entry are kept; only
    the quantity changes.
    """
    for index, existing in enumerate(state):
        if existing.key == entry.key:
            merged = existing.model_copy(update={"quantity": existing.quantity + entry.quantity})
            return state[:index] + (merged,) + state[index + 1 :]

    return state + (entry,)


def remove_collection_card(state: CollectionState, scryfall_id: str) -> CollectionState:
    """Remove every entry for a card, foil and non-foil alike."""
    remaining = tuple(entry for entry in state if entry.scryfall_id != scryfall_id)
    if len(remaining) == len(state):
        return state
    return remaining


def set_collection_quantity(
    state: CollectionState, scryfall_id: str, quantity: int
) -> CollectionState:
    """
    Set quantity on every entry for a card.

    A quantity of zero or less removes the card entirely.
    """
    if quantity <= 0:
        return remove_collection_card(state, scryfall_id)

    if not any(entry.scryfall_id == scryfall_id for entry in state):
        return state

    return tuple(
        entry.model_copy(update={"quantity": quantity}) if entry.scryfall_id == scryfall_id else entry
        for entry in state
    )


# --- Decks ---


def append_deck(state: DeckState, deck: Deck) -> DeckState:
    return state + (deck,)


def remove_deck(state: DeckState, deck_id: str) -> DeckState:
    remaining = tuple(deck for deck in state if deck.id != deck_id)
    if len(remaining) == len(state):
        return state
    return remaining


def update_deck_fields(
    state: DeckState, deck_id: str, fields: Mapping[str, Any], now: str
) -> DeckState:
    """
    Merge metadata fields into a deck and refresh its updated_at.

    Fields outside name/format/description are ignored, and so is None for
    name or format. The merged deck is validated like a loaded one.
    """
    changes = {
        k: v
        for k, v in fields.items()
        if k in MUTABLE_DECK_FIELDS and (v is not None or k in NULLABLE_DECK_FIELDS)
    }
    changes["updated_at"] = now
    return _replace_deck(
        state, deck_id, lambda deck: Deck.model_validate({**deck.model_dump(), **changes})
    )


def add_deck_entry(state: DeckState, deck_id: str, entry: DeckEntry, now: str) -> DeckState:
    """
    Add a card to a deck zone.

    An existing (card, zone) entry has the quantities summed and keeps its
    stored display attributes. Unknown deck IDs leave the state unchanged.
    """

    def apply(deck: Deck) -> Deck:
        cards = deck.cards
        for index, existing in enumerate(cards):
            if existing.key == entry.key:
                merged = existing.model_copy(
                    update={"quantity": existing.quantity + entry.quantity}
                )
                cards = cards[:index] + (merged,) + cards[index + 1 :]
                break
        else:
            cards = cards + (entry,)
        return deck.model_copy(update={"cards": cards, "updated_at": now})

    return _replace_deck(state, deck_id, apply)


def remove_deck_entry(
    state: DeckState, deck_id: str, scryfall_id: str, zone: Zone, now: str
) -> DeckState:
    """Remove exactly the (card, zone) entry from a deck."""

    def apply(deck: Deck) -> Deck:
        cards = tuple(c for c in deck.cards if not (c.scryfall_id == scryfall_id and c.zone == zone))
        return deck.model_copy(update={"cards": cards, "updated_at": now})

    return _replace_deck(state, deck_id, apply)


def set_deck_entry_quantity(
    state: DeckState, deck_id: str, scryfall_id: str, zone: Zone, quantity: int, now: str
) -> DeckState:
    """
    Set the quantity of a (card, zone) entry.

    A quantity of zero or less removes the entry; other zones holding the
    same card are untouched.
    """
    if quantity <= 0:
        return remove_deck_entry(state, deck_id, scryfall_id, zone, now)

    def apply(deck: Deck) -> Deck:
        cards = tuple(
            c.model_copy(update={"quantity": quantity})
            if c.scryfall_id == scryfall_id and c.zone == zone
            else c
            for c in deck.cards
        )
        return deck.model_copy(update={"cards": cards, "updated_at": now})

    return _replace_deck(state, deck_id, apply)


def _replace_deck(state: DeckState, deck_id: str, apply: Callable[[Deck], Deck]) -> DeckState:
    """Apply ``apply`` to the deck with ``deck_id``; other decks keep their identity."""
    for index, deck in enumerate(state):
        if deck.id == deck_id:
            return state[:index] + (apply(deck),) + state[index + 1 :]
    return state
