"""
Card search endpoints.

Proxies Scryfall search and marks each result with how many copies are
already in the collection.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from deckvault.api.dependencies import get_scryfall, get_store
from deckvault.clients.scryfall import ScryfallClient
from deckvault.models.card import ScryfallCard
from deckvault.store.app_store import AppStore

router = APIRouter(prefix="/cards", tags=["cards"])


class OwnedCard(BaseModel):
    """A Scryfall card plus its ownership in the local collection."""

    card: ScryfallCard
    in_collection: bool
    owned_quantity: int


class CardSearchResponse(BaseModel):
    """One page of search results."""

    query: str
    page: int
    total_cards: int
    has_more: bool
    cards: list[OwnedCard]


def with_ownership(store: AppStore, cards: list[ScryfallCard]) -> list[OwnedCard]:
    return [
        OwnedCard(
            card=card,
            in_collection=store.collection.is_in_collection(card.id),
            owned_quantity=store.collection.owned_quantity(card.id),
        )
        for card in cards
    ]


@router.get("/search", response_model=CardSearchResponse)
async def search_cards(
    q: Annotated[str, Query(min_length=1)],
    store: Annotated[AppStore, Depends(get_store)],
    scryfall: Annotated[ScryfallClient, Depends(get_scryfall)],
    page: Annotated[int, Query(ge=1)] = 1,
) -> CardSearchResponse:
    """
    Search cards with Scryfall query syntax.

    A query that matches nothing returns an empty page, not an error.
    """
    result = await scryfall.search_cards(q, page=page)
    return CardSearchResponse(
        query=q,
        page=page,
        total_cards=result.total_cards,
        has_more=result.has_more,
        cards=with_ownership(store, result.data),
    )
