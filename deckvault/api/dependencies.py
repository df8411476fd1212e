"""
Shared FastAPI dependencies.

The store and the remote clients are built once in the application
lifespan and kept on ``app.state``. Tests replace these providers with
``app.dependency_overrides``.
"""

from fastapi import Request

from deckvault.clients.mtgjson import MTGJSONClient
from deckvault.clients.scryfall import ScryfallClient
from deckvault.services.card_resolver import CardResolver
from deckvault.store.app_store import AppStore


def get_store(request: Request) -> AppStore:
    return request.app.state.store  # type: ignore[no-any-return]


def get_resolver(request: Request) -> CardResolver:
    return request.app.state.scryfall  # type: ignore[no-any-return]


def get_scryfall(request: Request) -> ScryfallClient:
    return request.app.state.scryfall  # type: ignore[no-any-return]


def get_mtgjson(request: Request) -> MTGJSONClient:
    return request.app.state.mtgjson  # type: ignore[no-any-return]
