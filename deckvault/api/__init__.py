from deckvault.api.cards import router as cards_router
from deckvault.api.collection import router as collection_router
from deckvault.api.decks import router as decks_router
from deckvault.api.health import router as health_router
from deckvault.api.precons import router as precons_router

__all__ = [
    "cards_router",
    "collection_router",
    "decks_router",
    "health_router",
    "precons_router",
]
