from deckvault.store.app_store import AppStore, create_app_store
from deckvault.store.base import StateStore, utc_now_iso
from deckvault.store.collection_store import CollectionStore
from deckvault.store.deck_store import DeckStore

__all__ = [
    "AppStore",
    "CollectionStore",
    "DeckStore",
    "StateStore",
    "create_app_store",
    "utc_now_iso",
]
