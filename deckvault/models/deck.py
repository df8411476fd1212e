from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Zone(str, Enum):
    """Partition of a deck's card list."""

    MAIN = "main"
    SIDEBOARD = "sideboard"
    COMMANDER = "commander"


class DeckEntry(BaseModel):
    """
    A card placed in one zone of one deck.

    Identity within a deck is (scryfall_id, zone). The persisted field
    name for the zone is ``board``.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    scryfall_id: str
    name: str
    quantity: int
    zone: Zone = Field(default=Zone.MAIN, alias="board")
    image_uri: str | None = None
    mana_cost: str | None = None
    type_line: str | None = None
    colors: tuple[str, ...] | None = None

    @property
    def key(self) -> tuple[str, Zone]:
        return (self.scryfall_id, self.zone)


class Deck(BaseModel):
    """
    A named, ordered container of deck entries.

    Attributes:
        id: UUID4 string, unique across decks
        name: Display name
        format: Free-form format label (commander, modern, ...)
        description: Optional notes
        created_at: ISO timestamp, never changes
        updated_at: ISO timestamp, refreshed on every mutation
        cards: Entries in insertion order
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str
    name: str
    format: str
    description: str | None = None
    created_at: str
    updated_at: str
    cards: tuple[DeckEntry, ...] = ()

    def find_entry(self, scryfall_id: str, zone: Zone) -> DeckEntry | None:
        """Get the entry for a card in a zone, if present."""
        for entry in self.cards:
            if entry.scryfall_id == scryfall_id and entry.zone == zone:
                return entry
        return None

    def zone_cards(self, zone: Zone) -> list[DeckEntry]:
        """Entries in a single zone, in deck order."""
        return [entry for entry in self.cards if entry.zone == zone]


class DeckUpdate(BaseModel):
    """
    Partial metadata update for a deck.

    Only fields explicitly set are merged; use ``model_dump(exclude_unset=True)``.
    """

    name: str | None = None
    format: str | None = None
    description: str | None = None
