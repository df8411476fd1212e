from deckvault.models.card import (
    CardFace,
    CardPrices,
    ImageUris,
    MTGJSONDeck,
    MTGJSONDeckCard,
    MTGJSONDeckMeta,
    PreconGroup,
    ScryfallCard,
    ScryfallSearchPage,
    ScryfallSet,
)
from deckvault.models.collection import CollectionEntry, Condition
from deckvault.models.deck import Deck, DeckEntry, DeckUpdate, Zone
from deckvault.models.failure import (
    CollectionEntryNotFoundError,
    DeckCardNotFoundError,
    DeckNotFoundError,
    FailureDetail,
    FailureKind,
    KnownError,
)

__all__ = [
    "CardFace",
    "CardPrices",
    "CollectionEntry",
    "CollectionEntryNotFoundError",
    "DeckCardNotFoundError",
    "Condition",
    "Deck",
    "DeckEntry",
    "DeckNotFoundError",
    "DeckUpdate",
    "FailureDetail",
    "FailureKind",
    "ImageUris",
    "KnownError",
    "MTGJSONDeck",
    "MTGJSONDeckCard",
    "MTGJSONDeckMeta",
    "PreconGroup",
    "ScryfallCard",
    "ScryfallSearchPage",
    "ScryfallSet",
    "Zone",
]
