"""
MTGJSON client for precon deck lists.

Scryfall bundles every deck of a product under one set code; MTGJSON
publishes each deck individually, with Scryfall IDs for every card.
"""

import logging
from types import TracebackType
from typing import Any

import httpx

from deckvault.clients.rate_limit import RateLimiter
from deckvault.config import settings
from deckvault.models.card import MTGJSONDeck, MTGJSONDeckMeta

logger = logging.getLogger(__name__)

# Deck types offered as precon products
PRECON_DECK_TYPES = frozenset(
    {
        "Commander Deck",
        "Duel Deck",
        "Planechase",
        "Archenemy",
        "Starter Kit",
    }
)


class MTGJSONError(Exception):
    """Raised when MTGJSON cannot be reached or returns an error."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MTGJSONClient:
    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = settings.mtgjson_base_url,
        min_interval: float = settings.mtgjson_min_interval,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": settings.user_agent},
            timeout=settings.http_timeout,
            follow_redirects=True,
        )
        self._base_url = base_url.rstrip("/")
        self._limiter = RateLimiter(min_interval)

    async def __aenter__(self) -> "MTGJSONClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get_data(self, path: str, what: str) -> Any:
        await self._limiter.wait()
        try:
            response = await self._client.get(f"{self._base_url}{path}")
        except httpx.HTTPError as e:
            raise MTGJSONError(f"Failed to fetch {what}: {e}") from e

        if not response.is_success:
            raise MTGJSONError(
                f"Failed to fetch {what}: HTTP {response.status_code}",
                status_code=response.status_code,
            )
        return response.json().get("data")

    async def get_deck_list(self, precons_only: bool = True) -> list[MTGJSONDeckMeta]:
        """
        List every deck MTGJSON knows about.

        Args:
            precons_only: Keep only preconstructed product types
        """
        data = await self._get_data("/DeckList.json", "MTGJSON deck list") or []
        decks = [MTGJSONDeckMeta.model_validate(item) for item in data]
        if precons_only:
            decks = [d for d in decks if d.type in PRECON_DECK_TYPES]
        logger.debug("MTGJSON deck list: %d decks", len(decks))
        return decks

    async def get_deck(self, file_name: str) -> MTGJSONDeck:
        """Fetch one deck by its file name (e.g. ``AnimatedArmy_BLC``)."""
        data = await self._get_data(f"/decks/{file_name}.json", f"deck {file_name}")
        if data is None:
            raise MTGJSONError(f"Deck {file_name} has no data")
        return MTGJSONDeck.model_validate(data)
