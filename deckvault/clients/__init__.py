from deckvault.clients.mtgjson import PRECON_DECK_TYPES, MTGJSONClient, MTGJSONError
from deckvault.clients.scryfall import (
    PRECON_SET_TYPES,
    ScryfallClient,
    ScryfallError,
    card_colors,
    card_image_uri,
    card_mana_cost,
    group_precons,
)

__all__ = [
    "MTGJSONClient",
    "MTGJSONError",
    "PRECON_DECK_TYPES",
    "PRECON_SET_TYPES",
    "ScryfallClient",
    "ScryfallError",
    "card_colors",
    "card_image_uri",
    "card_mana_cost",
    "group_precons",
]
