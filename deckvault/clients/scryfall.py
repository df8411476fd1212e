"""
Scryfall API client.

Async, rate-limited access to the card lookups the application needs:
point lookup by ID, batch lookup, lookup by name with fuzzy fallback,
search and set listings.

Not-found results are returned as None or empty lists. Any other
non-success response or network failure raises ScryfallError so callers
can record the failure and continue.

Scryfall API reference: https://scryfall.com/docs/api
"""

import logging
from collections.abc import Iterable
from types import TracebackType
from typing import Any

import httpx
from pydantic import ValidationError

from deckvault.clients.rate_limit import RateLimiter
from deckvault.config import SCRYFALL_BATCH_SIZE, settings
from deckvault.models.card import (
    ImageSize,
    PreconGroup,
    ScryfallCard,
    ScryfallSearchPage,
    ScryfallSet,
)

logger = logging.getLogger(__name__)

# Set types that hold preconstructed products
PRECON_SET_TYPES = frozenset(
    {"commander", "duel_deck", "planechase", "archenemy", "from_the_vault", "starter"}
)


class ScryfallError(Exception):
    """Raised when Scryfall returns an error or the network fails."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def chunked(items: list[str], size: int) -> list[list[str]]:
    """Split a list into consecutive chunks of at most ``size`` items."""
    return [items[i : i + size] for i in range(0, len(items), size)]


class ScryfallClient:
    """
    Rate-limited Scryfall client.

    Usage:
        async with ScryfallClient() as scryfall:
            card = await scryfall.get_card_by_name("Sol Ring")
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str = settings.scryfall_base_url,
        min_interval: float = settings.scryfall_min_interval,
        batch_size: int = SCRYFALL_BATCH_SIZE,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={"User-Agent": settings.user_agent, "Accept": "application/json"},
            timeout=settings.http_timeout,
        )
        self._base_url = base_url.rstrip("/")
        self._limiter = RateLimiter(min_interval)
        self._batch_size = batch_size

    async def __aenter__(self) -> "ScryfallClient":
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

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        await self._limiter.wait()
        try:
            return await self._client.request(method, f"{self._base_url}{path}", **kwargs)
        except httpx.HTTPError as e:
            raise ScryfallError(f"Network error contacting Scryfall: {e}") from e

    @staticmethod
    def _raise_for_status(response: httpx.Response) -> None:
        if response.is_success:
            return
        try:
            details = response.json().get("details")
        except ValueError:
            details = None
        raise ScryfallError(
            details or f"Scryfall returned {response.status_code}",
            status_code=response.status_code,
        )

    # --- Card lookups ---

    async def get_card(self, card_id: str) -> ScryfallCard | None:
        """Fetch one printing by Scryfall ID. Returns None if it does not exist."""
        response = await self._request("GET", f"/cards/{card_id}")
        if response.status_code == 404:
            return None
        self._raise_for_status(response)
        return ScryfallCard.model_validate(response.json())

    async def get_cards_by_ids(self, card_ids: Iterable[str]) -> list[ScryfallCard]:
        """
        Resolve many IDs through the batch endpoint.

        IDs are deduplicated and sent in chunks of at most 75, one request at
        a time. Unresolvable IDs are silently omitted, so the result may be
        shorter than the input and is not positionally aligned with it.
        """
        unique_ids = list(dict.fromkeys(card_ids))
        cards: list[ScryfallCard] = []

        for batch in chunked(unique_ids, self._batch_size):
            response = await self._request(
                "POST",
                "/cards/collection",
                json={"identifiers": [{"id": card_id} for card_id in batch]},
            )
            self._raise_for_status(response)
            payload = response.json()
            cards.extend(ScryfallCard.model_validate(item) for item in payload.get("data", []))

            missing = payload.get("not_found", [])
            if missing:
                logger.info("Scryfall could not resolve %d of %d ids", len(missing), len(batch))

        return cards

    async def get_card_by_name(self, name: str) -> ScryfallCard | None:
        """
        Fetch a card by exact name, falling back to fuzzy matching.

        The fuzzy lookup only runs when the exact lookup returns 404.
        Returns None if neither finds the card.
        """
        response = await self._request("GET", "/cards/named", params={"exact": name})
        if response.status_code == 404:
            logger.debug("No exact match for %r, trying fuzzy", name)
            response = await self._request("GET", "/cards/named", params={"fuzzy": name})
            if response.status_code == 404:
                return None

        self._raise_for_status(response)
        return ScryfallCard.model_validate(response.json())

    # --- Search ---

    async def search_cards(self, query: str, page: int = 1, order: str = "name") -> ScryfallSearchPage:
        """
        Search using Scryfall query syntax.

        A query with no matches returns an empty page rather than raising.
        """
        response = await self._request(
            "GET",
            "/cards/search",
            params={"q": query, "page": str(page), "order": order},
        )
        if response.status_code == 404:
            return ScryfallSearchPage()
        self._raise_for_status(response)
        return ScryfallSearchPage.model_validate(response.json())

    async def get_set_cards(self, set_code: str, page: int = 1) -> ScryfallSearchPage:
        return await self.search_cards(f"set:{set_code}", page=page)

    # --- Sets and precons ---

    async def get_sets(self) -> list[ScryfallSet]:
        response = await self._request("GET", "/sets")
        self._raise_for_status(response)
        sets: list[ScryfallSet] = []
        for item in response.json().get("data", []):
            try:
                sets.append(ScryfallSet.model_validate(item))
            except ValidationError as e:
                logger.warning("Skipping malformed set %s: %s", item.get("code"), e)
        return sets

    async def get_precon_sets(self) -> list[ScryfallSet]:
        return [s for s in await self.get_sets() if s.set_type in PRECON_SET_TYPES]

    async def get_grouped_precons(self) -> list[PreconGroup]:
        return group_precons(await self.get_sets())

    async def get_set_commanders(self, set_code: str) -> list[ScryfallCard]:
        """
        Face commander(s) of a precon set.

        Takes the first legendary creature by collector number that is new
        to the set, falling back to reprints for older products. Returns two
        cards for a partner pair, one normally, none if nothing matches.
        """
        params = {"order": "set", "dir": "asc", "page": "1"}
        response = await self._request(
            "GET",
            "/cards/search",
            params={"q": f"set:{set_code} t:legendary t:creature -is:reprint", **params},
        )
        if response.status_code == 404:
            response = await self._request(
                "GET",
                "/cards/search",
                params={"q": f"set:{set_code} t:legendary t:creature", **params},
            )
        if not response.is_success:
            return []

        cards = ScryfallSearchPage.model_validate(response.json()).data
        if not cards:
            return []

        first = cards[0]
        if len(cards) > 1 and "Partner" in first.keywords and "Partner" in cards[1].keywords:
            return [first, cards[1]]
        return [first]


def group_precons(sets: list[ScryfallSet]) -> list[PreconGroup]:
    """
    Group precon sets under their parent expansion.

    A precon whose parent is a regular expansion joins that expansion's
    group; any other precon forms its own group. Groups are sorted by
    release date, newest first.
    """
    by_code = {s.code: s for s in sets}
    groups: dict[str, PreconGroup] = {}

    for deck in sets:
        if deck.set_type not in PRECON_SET_TYPES:
            continue

        parent = by_code.get(deck.parent_set_code) if deck.parent_set_code else None
        if parent is not None and parent.set_type not in PRECON_SET_TYPES:
            group = groups.get(parent.code)
            if group is None:
                group = PreconGroup(
                    key=parent.code,
                    label=parent.name,
                    released_at=parent.released_at or deck.released_at,
                    is_expansion=True,
                )
                groups[parent.code] = group
            group.decks.append(deck)
        else:
            groups[deck.code] = PreconGroup(
                key=deck.code,
                label=deck.name,
                released_at=deck.released_at,
                is_expansion=False,
                decks=[deck],
            )

    return sorted(groups.values(), key=lambda g: g.released_at or "", reverse=True)


# --- Card record helpers ---


def card_image_uri(card: ScryfallCard, size: ImageSize = "normal") -> str:
    """Best image URI for a card; front face for double-faced cards."""
    if card.image_uris is not None:
        return str(getattr(card.image_uris, size))
    if card.card_faces and card.card_faces[0].image_uris is not None:
        return str(getattr(card.card_faces[0].image_uris, size))
    return ""


def card_mana_cost(card: ScryfallCard) -> str:
    """Mana cost, taken from the front face when the card has none."""
    if card.mana_cost:
        return card.mana_cost
    if card.card_faces and card.card_faces[0].mana_cost:
        return card.card_faces[0].mana_cost
    return ""


def card_colors(card: ScryfallCard) -> list[str]:
    """Card colors, or its color identity when Scryfall omits colors (multi-faced cards)."""
    return list(card.colors if card.colors is not None else card.color_identity)
