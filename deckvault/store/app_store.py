"""
Application state container.

Owns one collection store and one deck store over a shared persistence
port. Tests build isolated instances; the API builds one per process in
its lifespan handler.

The two stores never reference each other. Operations that touch both
(e.g. adding a precon as a deck and to the collection) are explicit
sequences of calls with no atomicity between them.
"""

import logging

from deckvault.analysis.ownership import DeckMembershipIndex
from deckvault.config import Settings, settings
from deckvault.db.database import async_session_factory, init_db
from deckvault.storage.port import Storage
from deckvault.storage.sql import SqlBackend
from deckvault.store.base import Clock, utc_now_iso
from deckvault.store.collection_store import CollectionStore
from deckvault.store.deck_store import DeckStore

logger = logging.getLogger(__name__)


class AppStore:
    def __init__(self, storage: Storage, clock: Clock = utc_now_iso) -> None:
        self.storage = storage
        self.collection = CollectionStore(storage, clock=clock)
        self.decks = DeckStore(storage, clock=clock)
        self.membership = DeckMembershipIndex()
        self.initialized = False

    async def init(self) -> None:
        """Load both stores from storage. Subsequent calls do nothing."""
        if self.initialized:
            return
        await self.collection.load()
        await self.decks.load()
        self.initialized = True

    async def flush(self) -> None:
        """Wait for pending writes in both stores."""
        try:
            await self.collection.flush()
        finally:
            await self.decks.flush()

    def decks_containing(self, scryfall_id: str) -> list[str]:
        """Names of decks that contain a card, from the memoized index."""
        return self.membership.decks_containing(self.decks.decks, scryfall_id)


async def create_app_store(config: Settings = settings) -> AppStore:
    """
    Build and load the store described by configuration.

    With persistence disabled the store runs in memory only.
    """
    if config.persistence_enabled:
        await init_db()
        storage = Storage(SqlBackend(async_session_factory))
    else:
        storage = Storage(None)

    store = AppStore(storage)
    await store.init()
    logger.info(
        "Store ready: %d collection entries, %d decks",
        len(store.collection.entries),
        len(store.decks.decks),
    )
    return store
