"""
Precon products.

Loads a preconstructed deck from MTGJSON, resolves its cards on Scryfall
and adds them to the collection or as a new deck. Both store operations
are plain sequences of store calls; a failure part way leaves whatever
was already added in place.
"""

import logging
from dataclasses import dataclass, field

from deckvault.clients.mtgjson import MTGJSONClient
from deckvault.models.card import MTGJSONDeck, ScryfallCard
from deckvault.models.collection import Condition
from deckvault.models.deck import Deck, Zone
from deckvault.services.card_resolver import CardResolver, collection_attrs, deck_entry
from deckvault.store.app_store import AppStore

logger = logging.getLogger(__name__)

PRECON_DECK_FORMAT = "commander"


@dataclass
class LoadedPrecon:
    """A precon deck with its cards resolved on Scryfall."""

    deck: MTGJSONDeck
    cards: list[ScryfallCard]
    unresolved: list[str] = field(default_factory=list)

    @property
    def name(self) -> str:
        return self.deck.name

    @property
    def commander_names(self) -> set[str]:
        return {card.name for card in self.deck.commander}

    def quantities(self) -> dict[str, int]:
        """Copies per card name across the commander and main boards."""
        counts: dict[str, int] = {}
        for card in [*self.deck.commander, *self.deck.main_board]:
            counts[card.name] = counts.get(card.name, 0) + card.count
        return counts

    @property
    def total_cards(self) -> int:
        return sum(self.quantities().values())


async def load_precon(
    mtgjson: MTGJSONClient, resolver: CardResolver, file_name: str
) -> LoadedPrecon:
    """
    Fetch a precon deck and resolve its commander and main board.

    Cards MTGJSON lists without a Scryfall ID, or that Scryfall cannot
    resolve, are reported by name in ``unresolved``.
    """
    deck = await mtgjson.get_deck(file_name)
    listed = [*deck.commander, *deck.main_board]

    ids = [c.identifiers.scryfall_id for c in listed if c.identifiers.scryfall_id]
    cards = await resolver.get_cards_by_ids(ids)

    resolved_ids = {card.id for card in cards}
    unresolved = [
        c.name
        for c in listed
        if not c.identifiers.scryfall_id or c.identifiers.scryfall_id not in resolved_ids
    ]
    if unresolved:
        logger.warning("Precon %s: %d cards could not be resolved", file_name, len(unresolved))

    return LoadedPrecon(deck=deck, cards=cards, unresolved=unresolved)


async def add_precon_to_collection(store: AppStore, precon: LoadedPrecon) -> int:
    """
    Add every resolved precon card to the collection as non-foil, near mint.

    Returns the number of copies added.
    """
    quantities = precon.quantities()
    added = 0

    for card in precon.cards:
        quantity = quantities.get(card.name, 1)
        await store.collection.add_to_collection(
            quantity=quantity,
            foil=False,
            condition=Condition.NEAR_MINT,
            **collection_attrs(card),
        )
        added += quantity

    logger.info("Added %d cards from %s to the collection", added, precon.name)
    return added


async def add_precon_as_deck(store: AppStore, precon: LoadedPrecon) -> Deck:
    """
    Create a deck from a precon and add unowned cards to the collection.

    Commander cards go to the commander zone, everything else to main.
    A card already in the collection is not added again.
    """
    quantities = precon.quantities()
    commanders = precon.commander_names

    deck = store.decks.create_deck(precon.name, PRECON_DECK_FORMAT, f"Precon: {precon.name}")
    await store.decks.last_write

    for card in precon.cards:
        quantity = quantities.get(card.name, 1)
        zone = Zone.COMMANDER if card.name in commanders else Zone.MAIN
        await store.decks.add_card_to_deck(deck.id, deck_entry(card, quantity, zone))

        if not store.collection.is_in_collection(card.id):
            await store.collection.add_to_collection(
                quantity=quantity,
                foil=False,
                condition=Condition.NEAR_MINT,
                **collection_attrs(card),
            )

    return store.decks.get_deck(deck.id) or deck
