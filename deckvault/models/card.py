"""
Remote card records.

Pydantic models for the subset of Scryfall and MTGJSON payloads the
application reads. Unknown fields are ignored so upstream additions never
break parsing.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ImageSize = Literal["small", "normal", "large"]


class ImageUris(BaseModel):
    model_config = ConfigDict(extra="ignore")

    small: str = ""
    normal: str = ""
    large: str = ""
    png: str = ""
    art_crop: str = ""
    border_crop: str = ""


class CardFace(BaseModel):
    """One face of a multi-faced card."""

    model_config = ConfigDict(extra="ignore")

    name: str
    mana_cost: str | None = None
    type_line: str = ""
    oracle_text: str | None = None
    image_uris: ImageUris | None = None


class CardPrices(BaseModel):
    """
    Market prices as decimal strings, exactly as Scryfall sends them.

    Any price may be missing.
    """

    model_config = ConfigDict(extra="ignore")

    usd: str | None = None
    usd_foil: str | None = None
    eur: str | None = None
    eur_foil: str | None = None


class ScryfallCard(BaseModel):
    """A single card printing as returned by Scryfall."""

    model_config = ConfigDict(extra="ignore")

    id: str
    name: str
    set: str = ""
    set_name: str = ""
    collector_number: str = ""
    lang: str = "en"
    mana_cost: str | None = None
    cmc: float = 0.0
    type_line: str = ""
    oracle_text: str | None = None
    colors: list[str] | None = None
    color_identity: list[str] = Field(default_factory=list)
    rarity: str = "common"
    image_uris: ImageUris | None = None
    card_faces: list[CardFace] | None = None
    prices: CardPrices = Field(default_factory=CardPrices)
    legalities: dict[str, str] = Field(default_factory=dict)
    keywords: list[str] = Field(default_factory=list)
    released_at: str | None = None


class ScryfallSet(BaseModel):
    """A Scryfall set (expansion, commander product, ...)."""

    model_config = ConfigDict(extra="ignore")

    id: str
    code: str
    name: str
    set_type: str
    released_at: str | None = None
    card_count: int = 0
    parent_set_code: str | None = None


class ScryfallSearchPage(BaseModel):
    """One page of card search results."""

    model_config = ConfigDict(extra="ignore")

    total_cards: int = 0
    has_more: bool = False
    next_page: str | None = None
    data: list[ScryfallCard] = Field(default_factory=list)


class PreconGroup(BaseModel):
    """Precon products grouped under a parent expansion, or a standalone product."""

    key: str
    label: str
    released_at: str | None = None
    is_expansion: bool = False
    decks: list[ScryfallSet] = Field(default_factory=list)


# --- MTGJSON ---


class MTGJSONIdentifiers(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    scryfall_id: str | None = Field(default=None, alias="scryfallId")


class MTGJSONDeckMeta(BaseModel):
    """Entry in MTGJSON's DeckList.json."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str
    file_name: str = Field(alias="fileName")
    name: str
    release_date: str | None = Field(default=None, alias="releaseDate")
    type: str = ""


class MTGJSONDeckCard(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    count: int
    name: str
    uuid: str = ""
    number: str | None = None
    identifiers: MTGJSONIdentifiers = Field(default_factory=MTGJSONIdentifiers)


class MTGJSONDeck(BaseModel):
    """Full contents of a single precon deck."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    code: str
    name: str
    release_date: str | None = Field(default=None, alias="releaseDate")
    type: str = ""
    commander: list[MTGJSONDeckCard] = Field(default_factory=list)
    main_board: list[MTGJSONDeckCard] = Field(default_factory=list, alias="mainBoard")
    side_board: list[MTGJSONDeckCard] = Field(default_factory=list, alias="sideBoard")
