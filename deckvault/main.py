from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from deckvault.api import (
    cards_router,
    collection_router,
    decks_router,
    health_router,
    precons_router,
)
from deckvault.api.errors import register_exception_handlers
from deckvault.clients.mtgjson import MTGJSONClient
from deckvault.clients.scryfall import ScryfallClient
from deckvault.config import settings
from deckvault.store.app_store import create_app_store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    app.state.store = await create_app_store(settings)
    async with ScryfallClient() as scryfall, MTGJSONClient() as mtgjson:
        app.state.scryfall = scryfall
        app.state.mtgjson = mtgjson
        try:
            yield
        finally:
            await app.state.store.flush()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("deckvault"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(collection_router)
app.include_router(decks_router)
app.include_router(health_router)
app.include_router(precons_router)

register_exception_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
