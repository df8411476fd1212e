"""
Collection API endpoints.

Reads come straight from the in-memory store. Mutations await their write
handle so a 2xx response means the change is durable.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from pydantic import BaseModel, Field

from deckvault.analysis.stats import CollectionStats, collection_stats, price_map
from deckvault.api.dependencies import get_resolver, get_store
from deckvault.models.collection import CollectionEntry, Condition
from deckvault.models.failure import CollectionEntryNotFoundError
from deckvault.services.card_resolver import CardResolver
from deckvault.store.app_store import AppStore

router = APIRouter(prefix="/collection", tags=["collection"])


class CollectionResponse(BaseModel):
    """Every collection entry plus totals."""

    entries: list[CollectionEntry]
    stats: CollectionStats


class AddCardRequest(BaseModel):
    """Request to add copies of a card to the collection."""

    scryfall_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    foil: bool = False
    condition: Condition = Condition.NEAR_MINT
    set_code: str = ""
    set_name: str = ""
    image_uri: str | None = None
    mana_cost: str | None = None
    type_line: str = ""
    colors: list[str] = Field(default_factory=list)


class QuantityRequest(BaseModel):
    """New quantity; zero or less removes the card."""

    quantity: int


class CardEntriesResponse(BaseModel):
    """All entries held for one card ID (foil and non-foil)."""

    scryfall_id: str
    quantity: int
    entries: list[CollectionEntry]


class CardDecksResponse(BaseModel):
    """Decks that use a card."""

    scryfall_id: str
    decks: list[str]


def _entries_for(store: AppStore, card_id: str) -> list[CollectionEntry]:
    return [e for e in store.collection.entries if e.scryfall_id == card_id]


@router.get("", response_model=CollectionResponse)
async def get_collection(
    store: Annotated[AppStore, Depends(get_store)],
    resolver: Annotated[CardResolver, Depends(get_resolver)],
    with_prices: Annotated[bool, Query()] = False,
) -> CollectionResponse:
    """
    Get the collection in insertion order with totals.

    The estimated value is only filled in with ``with_prices``, which looks
    up current prices from Scryfall.
    """
    entries = store.collection.entries
    prices = None
    if with_prices and entries:
        cards = await resolver.get_cards_by_ids(entry.scryfall_id for entry in entries)
        prices = price_map(cards)
    return CollectionResponse(entries=list(entries), stats=collection_stats(entries, prices))


@router.post("", response_model=CollectionEntry, status_code=status.HTTP_201_CREATED)
async def add_card(
    request: AddCardRequest,
    store: Annotated[AppStore, Depends(get_store)],
) -> CollectionEntry:
    """
    Add copies of a card.

    Adding a card already held with the same foil flag increases its
    quantity and keeps the original condition.
    """
    await store.collection.add_to_collection(**request.model_dump())

    for entry in store.collection.entries:
        if entry.key == (request.scryfall_id, request.foil):
            return entry
    raise CollectionEntryNotFoundError(request.scryfall_id)


@router.patch("/{card_id}", response_model=CardEntriesResponse)
async def update_quantity(
    card_id: str,
    request: QuantityRequest,
    store: Annotated[AppStore, Depends(get_store)],
) -> CardEntriesResponse:
    """
    Set the quantity of a card.

    Applies to every entry for the card ID, foil and non-foil alike.
    """
    if not store.collection.is_in_collection(card_id):
        raise CollectionEntryNotFoundError(card_id)

    await store.collection.update_card_quantity(card_id, request.quantity)
    return CardEntriesResponse(
        scryfall_id=card_id,
        quantity=store.collection.owned_quantity(card_id),
        entries=_entries_for(store, card_id),
    )


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_card(
    card_id: str,
    store: Annotated[AppStore, Depends(get_store)],
) -> Response:
    """Remove a card, both foil and non-foil entries."""
    if not store.collection.is_in_collection(card_id):
        raise CollectionEntryNotFoundError(card_id)

    await store.collection.remove_from_collection(card_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/{card_id}/decks", response_model=CardDecksResponse)
async def get_card_decks(
    card_id: str,
    store: Annotated[AppStore, Depends(get_store)],
) -> CardDecksResponse:
    """Names of decks containing a card. Empty if no deck uses it."""
    return CardDecksResponse(scryfall_id=card_id, decks=store.decks_containing(card_id))
