"""
Deck list import.

Creates a deck from pasted text, resolving each card name through the
card resolver one line at a time. Names that cannot be resolved are
reported and skipped; the import never aborts on a lookup failure and
the deck is always left in a valid state.
"""

import logging
from dataclasses import dataclass, field

from deckvault.clients.scryfall import ScryfallError
from deckvault.models.deck import Deck
from deckvault.services.card_resolver import CardResolver, deck_entry
from deckvault.services.deck_list import DeckListLine, ensure_commander, parse_deck_list
from deckvault.store.app_store import AppStore

logger = logging.getLogger(__name__)


class EmptyDeckListError(ValueError):
    """Raised when the text contains no card lines."""


@dataclass
class DeckImportResult:
    """Outcome of a deck list import."""

    deck: Deck
    """The deck as stored after the import."""

    imported: list[DeckListLine] = field(default_factory=list)
    """Lines that resolved and were added."""

    errors: list[str] = field(default_factory=list)
    """Card names that could not be resolved, in list order."""

    @property
    def total_lines(self) -> int:
        return len(self.imported) + len(self.errors)

    @property
    def complete(self) -> bool:
        return not self.errors


async def import_deck(
    store: AppStore,
    resolver: CardResolver,
    name: str,
    format: str,
    text: str,
    description: str | None = None,
) -> DeckImportResult:
    """
    Import a deck list as a new deck.

    If no line is in a Commander section, the first card becomes the
    commander. Lookups run sequentially. Each deck write is awaited before
    the next lookup, so a storage failure stops the import with
    PersistenceError; everything added so far stays in the deck.

    Raises:
        EmptyDeckListError: If the text has no card lines
    """
    lines = ensure_commander(parse_deck_list(text))
    if not lines:
        raise EmptyDeckListError("Deck list contains no cards")

    deck = store.decks.create_deck(name, format, description)
    await store.decks.last_write
    logger.info("Importing %d lines into deck %s (%s)", len(lines), deck.name, deck.id)

    imported: list[DeckListLine] = []
    errors: list[str] = []

    for line in lines:
        try:
            card = await resolver.get_card_by_name(line.name)
        except ScryfallError as e:
            logger.warning("Lookup failed for %r: %s", line.name, e)
            card = None

        if card is None:
            errors.append(line.name)
            continue

        await store.decks.add_card_to_deck(deck.id, deck_entry(card, line.quantity, line.zone))
        imported.append(line)

    if errors:
        logger.info("Deck %s imported with %d unresolved names", deck.id, len(errors))

    final = store.decks.get_deck(deck.id) or deck
    return DeckImportResult(deck=final, imported=imported, errors=errors)
