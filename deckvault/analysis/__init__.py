from deckvault.analysis.ownership import (
    DeckMembershipIndex,
    build_deck_membership,
    find_owned,
    is_owned,
    owned_quantity,
)
from deckvault.analysis.stats import (
    CollectionStats,
    DeckStats,
    collection_stats,
    deck_stats,
    mana_value,
    price_map,
    type_group,
)

__all__ = [
    "CollectionStats",
    "DeckMembershipIndex",
    "DeckStats",
    "build_deck_membership",
    "collection_stats",
    "deck_stats",
    "find_owned",
    "is_owned",
    "mana_value",
    "owned_quantity",
    "price_map",
    "type_group",
]
