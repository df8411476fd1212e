"""
Precon API endpoints.

Lists preconstructed decks from MTGJSON and adds them to the collection
or as a deck. Scryfall precon sets and their face commanders are listed
under ``/precons/sets``.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from deckvault.api.cards import OwnedCard, with_ownership
from deckvault.api.dependencies import get_mtgjson, get_resolver, get_scryfall, get_store
from deckvault.clients.mtgjson import MTGJSONClient
from deckvault.clients.scryfall import ScryfallClient
from deckvault.models.card import MTGJSONDeckMeta, PreconGroup
from deckvault.models.deck import Deck
from deckvault.services.card_resolver import CardResolver
from deckvault.services.precons import add_precon_as_deck, add_precon_to_collection, load_precon
from deckvault.store.app_store import AppStore

router = APIRouter(prefix="/precons", tags=["precons"])


class PreconListResponse(BaseModel):
    """Available precon decks, newest first."""

    decks: list[MTGJSONDeckMeta]
    count: int


class PreconSetsResponse(BaseModel):
    """Scryfall precon sets grouped by parent expansion, newest first."""

    groups: list[PreconGroup]
    count: int


class SetCommandersResponse(BaseModel):
    """Face commander(s) of a precon set."""

    set_code: str
    commanders: list[OwnedCard]


class PreconCollectionResponse(BaseModel):
    """Result of adding a precon to the collection."""

    name: str
    added: int
    unresolved: list[str]


class PreconDeckResponse(BaseModel):
    """Result of adding a precon as a deck."""

    deck: Deck
    unresolved: list[str]


@router.get("", response_model=PreconListResponse)
async def list_precons(
    mtgjson: Annotated[MTGJSONClient, Depends(get_mtgjson)],
) -> PreconListResponse:
    """List precon decks published by MTGJSON."""
    decks = await mtgjson.get_deck_list()
    decks.sort(key=lambda d: d.release_date or "", reverse=True)
    return PreconListResponse(decks=decks, count=len(decks))


@router.get("/sets", response_model=PreconSetsResponse)
async def list_precon_sets(
    scryfall: Annotated[ScryfallClient, Depends(get_scryfall)],
) -> PreconSetsResponse:
    """List Scryfall precon sets grouped under their parent expansion."""
    groups = await scryfall.get_grouped_precons()
    return PreconSetsResponse(groups=groups, count=sum(len(g.decks) for g in groups))


@router.get("/sets/{set_code}/commanders", response_model=SetCommandersResponse)
async def get_set_commanders(
    set_code: str,
    store: Annotated[AppStore, Depends(get_store)],
    scryfall: Annotated[ScryfallClient, Depends(get_scryfall)],
) -> SetCommandersResponse:
    """Face commander(s) of a set, marked with collection ownership. Empty if none match."""
    commanders = await scryfall.get_set_commanders(set_code)
    return SetCommandersResponse(set_code=set_code, commanders=with_ownership(store, commanders))


@router.post("/{file_name}/collection", response_model=PreconCollectionResponse)
async def add_to_collection(
    file_name: str,
    store: Annotated[AppStore, Depends(get_store)],
    mtgjson: Annotated[MTGJSONClient, Depends(get_mtgjson)],
    resolver: Annotated[CardResolver, Depends(get_resolver)],
) -> PreconCollectionResponse:
    """Add every card of a precon to the collection."""
    precon = await load_precon(mtgjson, resolver, file_name)
    added = await add_precon_to_collection(store, precon)
    return PreconCollectionResponse(name=precon.name, added=added, unresolved=precon.unresolved)


@router.post("/{file_name}/deck", response_model=PreconDeckResponse, status_code=status.HTTP_201_CREATED)
async def add_as_deck(
    file_name: str,
    store: Annotated[AppStore, Depends(get_store)],
    mtgjson: Annotated[MTGJSONClient, Depends(get_mtgjson)],
    resolver: Annotated[CardResolver, Depends(get_resolver)],
) -> PreconDeckResponse:
    """Create a deck from a precon; cards not yet owned join the collection."""
    precon = await load_precon(mtgjson, resolver, file_name)
    deck = await add_precon_as_deck(store, precon)
    return PreconDeckResponse(deck=deck, unresolved=precon.unresolved)
