"""
Collection store.

Authoritative set of owned cards. Entries are keyed by (card ID, foil);
removal and quantity updates match on card ID alone and therefore affect
foil and non-foil copies together.
"""

from collections.abc import Iterable

from deckvault.analysis import ownership
from deckvault.config import COLLECTION_KEY
from deckvault.models.collection import CollectionEntry, Condition
from deckvault.storage.port import Storage
from deckvault.storage.write_behind import PendingWrite
from deckvault.store import transitions
from deckvault.store.base import Clock, StateStore, utc_now_iso


class CollectionStore(StateStore[CollectionEntry]):
    def __init__(self, storage: Storage, clock: Clock = utc_now_iso) -> None:
        super().__init__(storage, COLLECTION_KEY, CollectionEntry, clock)

    @property
    def entries(self) -> tuple[CollectionEntry, ...]:
        return self._state

    def add_to_collection(
        self,
        scryfall_id: str,
        name: str,
        *,
        quantity: int = 1,
        foil: bool = False,
        condition: Condition = Condition.NEAR_MINT,
        set_code: str = "",
        set_name: str = "",
        image_uri: str | None = None,
        mana_cost: str | None = None,
        type_line: str = "",
        colors: Iterable[str] = (),
    ) -> PendingWrite:
        """
        Add copies of a card.

        If an entry with the same (card, foil) key exists only its quantity
        grows; otherwise a new entry is created with the given condition and
        display attributes. Quantity must be at least 1 (not checked here).
        """
        entry = CollectionEntry(
            scryfall_id=scryfall_id,
            name=name,
            set_code=set_code,
            set_name=set_name,
            quantity=quantity,
            foil=foil,
            condition=condition,
            image_uri=image_uri,
            mana_cost=mana_cost,
            type_line=type_line,
            colors=tuple(colors),
            added_at=self._clock(),
        )
        return self._commit(transitions.add_collection_entry(self._state, entry))

    def remove_from_collection(self, scryfall_id: str) -> PendingWrite:
        """Remove all entries for a card regardless of foil."""
        return self._commit(transitions.remove_collection_card(self._state, scryfall_id))

    def update_card_quantity(self, scryfall_id: str, quantity: int) -> PendingWrite:
        """Set quantity for a card; zero or less removes it."""
        return self._commit(transitions.set_collection_quantity(self._state, scryfall_id, quantity))

    def is_in_collection(self, scryfall_id: str) -> bool:
        return ownership.is_owned(self._state, scryfall_id)

    def get_collection_card(self, scryfall_id: str) -> CollectionEntry | None:
        """First entry for a card in collection order, or None."""
        return ownership.find_owned(self._state, scryfall_id)

    def owned_quantity(self, scryfall_id: str) -> int:
        """Copies held across foil and non-foil entries."""
        return ownership.owned_quantity(self._state, scryfall_id)
