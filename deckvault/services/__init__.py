"""
DeckVault services.

Workflows that combine the stores with the remote card sources.
"""

from deckvault.services.card_resolver import CardResolver, collection_attrs, deck_entry
from deckvault.services.deck_import import DeckImportResult, EmptyDeckListError, import_deck
from deckvault.services.deck_list import (
    DeckListLine,
    ensure_commander,
    export_file_name,
    format_deck_list,
    parse_deck_list,
)
from deckvault.services.precons import (
    LoadedPrecon,
    add_precon_as_deck,
    add_precon_to_collection,
    load_precon,
)

__all__ = [
    "CardResolver",
    "DeckImportResult",
    "DeckListLine",
    "EmptyDeckListError",
    "LoadedPrecon",
    "add_precon_as_deck",
    "add_precon_to_collection",
    "collection_attrs",
    "deck_entry",
    "ensure_commander",
    "export_file_name",
    "format_deck_list",
    "import_deck",
    "load_precon",
    "parse_deck_list",
]
