"""
Deck API endpoints.

CRUD over the deck store plus deck list import and export. Mutations
await their write handle before responding.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel, Field, field_validator

from deckvault.analysis.stats import DeckStats, deck_stats, price_map
from deckvault.api.dependencies import get_resolver, get_store
from deckvault.models.deck import Deck, DeckEntry, Zone
from deckvault.models.failure import DeckCardNotFoundError, DeckNotFoundError, FailureKind, KnownError
from deckvault.services.card_resolver import CardResolver
from deckvault.services.deck_import import EmptyDeckListError, import_deck
from deckvault.services.deck_list import export_file_name, format_deck_list
from deckvault.store.app_store import AppStore

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckSummary(BaseModel):
    """Deck metadata without its card list."""

    id: str
    name: str
    format: str
    description: str | None = None
    card_count: int
    updated_at: str


class DeckListResponse(BaseModel):
    """Response model for a list of decks."""

    decks: list[DeckSummary]
    count: int


class DeckDetailResponse(BaseModel):
    """A deck with its statistics."""

    deck: Deck
    stats: DeckStats


class CreateDeckRequest(BaseModel):
    """Request to create an empty deck."""

    name: str = Field(min_length=1)
    format: str = Field(min_length=1)
    description: str | None = None


class UpdateDeckRequest(BaseModel):
    """Partial metadata update. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, min_length=1)
    format: str | None = Field(default=None, min_length=1)
    description: str | None = None

    @field_validator("name", "format")
    @classmethod
    def not_null(cls, value: str | None) -> str:
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class AddDeckCardRequest(BaseModel):
    """Request to add a card to one zone of a deck."""

    scryfall_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    quantity: int = Field(default=1, ge=1)
    zone: Zone = Zone.MAIN
    image_uri: str | None = None
    mana_cost: str | None = None
    type_line: str | None = None
    colors: list[str] | None = None


class QuantityRequest(BaseModel):
    """New quantity; zero or less removes the entry."""

    quantity: int


class ImportDeckRequest(BaseModel):
    """Request to create a deck from a plain-text deck list."""

    name: str = Field(min_length=1)
    format: str = Field(min_length=1)
    text: str = Field(min_length=1)
    description: str | None = None


class ImportDeckResponse(BaseModel):
    """Imported deck and the names that could not be resolved."""

    deck: Deck
    imported: int
    errors: list[str]


def _require_deck(store: AppStore, deck_id: str) -> Deck:
    deck = store.decks.get_deck(deck_id)
    if deck is None:
        raise DeckNotFoundError(deck_id)
    return deck


def _summary(deck: Deck) -> DeckSummary:
    return DeckSummary(
        id=deck.id,
        name=deck.name,
        format=deck.format,
        description=deck.description,
        card_count=sum(entry.quantity for entry in deck.cards),
        updated_at=deck.updated_at,
    )


@router.get("", response_model=DeckListResponse)
async def list_decks(
    store: Annotated[AppStore, Depends(get_store)],
) -> DeckListResponse:
    """List decks in creation order."""
    decks = [_summary(deck) for deck in store.decks.decks]
    return DeckListResponse(decks=decks, count=len(decks))


@router.post("", response_model=Deck, status_code=status.HTTP_201_CREATED)
async def create_deck(
    request: CreateDeckRequest,
    store: Annotated[AppStore, Depends(get_store)],
) -> Deck:
    """Create an empty deck."""
    deck = store.decks.create_deck(request.name, request.format, request.description)
    await store.decks.last_write
    return deck


@router.post("/import", response_model=ImportDeckResponse, status_code=status.HTTP_201_CREATED)
async def import_deck_list(
    request: ImportDeckRequest,
    store: Annotated[AppStore, Depends(get_store)],
    resolver: Annotated[CardResolver, Depends(get_resolver)],
) -> ImportDeckResponse:
    """
    Create a deck from a deck list.

    Card names are looked up one at a time. Names that cannot be found are
    returned in ``errors``; the rest of the deck is still created.
    """
    try:
        result = await import_deck(
            store,
            resolver,
            request.name,
            request.format,
            request.text,
            description=request.description,
        )
    except EmptyDeckListError as e:
        raise KnownError(
            kind=FailureKind.INVALID_INPUT,
            message="The deck list has no cards.",
            detail=str(e),
            suggestion="Paste lines like '1 Sol Ring'.",
            status_code=422,
        ) from e

    return ImportDeckResponse(deck=result.deck, imported=len(result.imported), errors=result.errors)


@router.get("/{deck_id}", response_model=DeckDetailResponse)
async def get_deck(
    deck_id: str,
    store: Annotated[AppStore, Depends(get_store)],
    resolver: Annotated[CardResolver, Depends(get_resolver)],
    with_prices: Annotated[bool, Query()] = False,
) -> DeckDetailResponse:
    """
    Get a deck with statistics.

    With ``with_prices`` the deck's cards are fetched from the card
    database to compute an estimated value; otherwise value is 0.
    """
    deck = _require_deck(store, deck_id)

    prices = None
    if with_prices and deck.cards:
        cards = await resolver.get_cards_by_ids(entry.scryfall_id for entry in deck.cards)
        prices = price_map(cards)

    return DeckDetailResponse(deck=deck, stats=deck_stats(deck, prices))


@router.patch("/{deck_id}", response_model=Deck)
async def update_deck(
    deck_id: str,
    request: UpdateDeckRequest,
    store: Annotated[AppStore, Depends(get_store)],
) -> Deck:
    """Rename or re-describe a deck. Cards are not affected."""
    _require_deck(store, deck_id)
    await store.decks.update_deck(deck_id, request.model_dump(exclude_unset=True))
    return _require_deck(store, deck_id)


@router.delete("/{deck_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_deck(
    deck_id: str,
    store: Annotated[AppStore, Depends(get_store)],
) -> Response:
    """Delete a deck. Collection entries are not affected."""
    _require_deck(store, deck_id)
    await store.decks.delete_deck(deck_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{deck_id}/cards", response_model=Deck)
async def add_deck_card(
    deck_id: str,
    request: AddDeckCardRequest,
    store: Annotated[AppStore, Depends(get_store)],
) -> Deck:
    """Add a card to a zone; an existing entry in that zone grows."""
    _require_deck(store, deck_id)
    entry = DeckEntry(
        scryfall_id=request.scryfall_id,
        name=request.name,
        quantity=request.quantity,
        zone=request.zone,
        image_uri=request.image_uri,
        mana_cost=request.mana_cost,
        type_line=request.type_line,
        colors=tuple(request.colors) if request.colors is not None else None,
    )
    await store.decks.add_card_to_deck(deck_id, entry)
    return _require_deck(store, deck_id)


@router.patch("/{deck_id}/cards/{card_id}/{zone}", response_model=Deck)
async def update_deck_card(
    deck_id: str,
    card_id: str,
    zone: Zone,
    request: QuantityRequest,
    store: Annotated[AppStore, Depends(get_store)],
) -> Deck:
    """Set the quantity of a card in one zone. Other zones are untouched."""
    deck = _require_deck(store, deck_id)
    if deck.find_entry(card_id, zone) is None:
        raise DeckCardNotFoundError(deck_id, card_id, zone.value)

    await store.decks.update_deck_card_quantity(deck_id, card_id, zone, request.quantity)
    return _require_deck(store, deck_id)


@router.delete("/{deck_id}/cards/{card_id}/{zone}", response_model=Deck)
async def remove_deck_card(
    deck_id: str,
    card_id: str,
    zone: Zone,
    store: Annotated[AppStore, Depends(get_store)],
) -> Deck:
    """Remove a card from one zone of a deck."""
    deck = _require_deck(store, deck_id)
    if deck.find_entry(card_id, zone) is None:
        raise DeckCardNotFoundError(deck_id, card_id, zone.value)

    await store.decks.remove_card_from_deck(deck_id, card_id, zone)
    return _require_deck(store, deck_id)


@router.get("/{deck_id}/export", response_class=PlainTextResponse)
async def export_deck(
    deck_id: str,
    store: Annotated[AppStore, Depends(get_store)],
) -> PlainTextResponse:
    """Export a deck as a plain-text deck list."""
    deck = _require_deck(store, deck_id)
    return PlainTextResponse(
        format_deck_list(deck),
        headers={"Content-Disposition": f'attachment; filename="{export_file_name(deck)}"'},
    )
