"""
Deck store.

Authoritative set of decks. Entries are keyed by (card ID, zone) within a
deck. Mutations against an unknown deck ID are silent no-ops; every
mutation that reaches a deck refreshes its updated_at and leaves the
other decks untouched.
"""

import uuid
from collections.abc import Callable
from typing import Any

from deckvault.config import DECKS_KEY
from deckvault.models.deck import Deck, DeckEntry, DeckUpdate, Zone
from deckvault.storage.port import Storage
from deckvault.storage.write_behind import PendingWrite
from deckvault.store import transitions
from deckvault.store.base import Clock, StateStore, utc_now_iso


def new_deck_id() -> str:
    return str(uuid.uuid4())


class DeckStore(StateStore[Deck]):
    def __init__(
        self,
        storage: Storage,
        clock: Clock = utc_now_iso,
        id_factory: Callable[[], str] = new_deck_id,
    ) -> None:
        super().__init__(storage, DECKS_KEY, Deck, clock)
        self._id_factory = id_factory

    @property
    def decks(self) -> tuple[Deck, ...]:
        return self._state

    def create_deck(self, name: str, format: str, description: str | None = None) -> Deck:
        """
        Create an empty deck.

        The deck is in the published state when this returns. Its write
        handle is ``last_write``.
        """
        now = self._clock()
        deck = Deck(
            id=self._id_factory(),
            name=name,
            format=format,
            description=description,
            created_at=now,
            updated_at=now,
        )
        self._commit(transitions.append_deck(self._state, deck))
        return deck

    def delete_deck(self, deck_id: str) -> PendingWrite:
        return self._commit(transitions.remove_deck(self._state, deck_id))

    def update_deck(self, deck_id: str, update: DeckUpdate | dict[str, Any]) -> PendingWrite:
        """Merge name/format/description into a deck. Only explicitly set fields apply."""
        fields = update.model_dump(exclude_unset=True) if isinstance(update, DeckUpdate) else update
        return self._commit(
            transitions.update_deck_fields(self._state, deck_id, fields, self._clock())
        )

    def add_card_to_deck(self, deck_id: str, entry: DeckEntry) -> PendingWrite:
        """Add a card to a zone, summing quantities with an existing entry."""
        return self._commit(transitions.add_deck_entry(self._state, deck_id, entry, self._clock()))

    def remove_card_from_deck(self, deck_id: str, scryfall_id: str, zone: Zone) -> PendingWrite:
        return self._commit(
            transitions.remove_deck_entry(self._state, deck_id, scryfall_id, zone, self._clock())
        )

    def update_deck_card_quantity(
        self, deck_id: str, scryfall_id: str, zone: Zone, quantity: int
    ) -> PendingWrite:
        """Set a (card, zone) quantity; zero or less removes that entry only."""
        return self._commit(
            transitions.set_deck_entry_quantity(
                self._state, deck_id, scryfall_id, zone, quantity, self._clock()
            )
        )

    def get_deck(self, deck_id: str) -> Deck | None:
        for deck in self._state:
            if deck.id == deck_id:
                return deck
        return None
