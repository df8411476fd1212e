import itertools
import json
from collections.abc import Callable, Iterable
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from deckvault.api.dependencies import get_mtgjson, get_resolver, get_scryfall, get_store
from deckvault.clients.mtgjson import MTGJSONClient
from deckvault.clients.scryfall import ScryfallError, group_precons
from deckvault.db.database import drop_db, init_db
from deckvault.main import app
from deckvault.models.card import PreconGroup, ScryfallCard, ScryfallSearchPage, ScryfallSet
from deckvault.storage.port import MemoryBackend, PersistenceError, Storage
from deckvault.store.app_store import AppStore

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> Any:
    with open(FIXTURES / name) as f:
        return json.load(f)


class FailingBackend(MemoryBackend):
    """Memory backend whose writes fail while ``failing`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.failing = True
        self.attempts = 0

    async def set(self, key: str, value: Any) -> None:
        self.attempts += 1
        if self.failing:
            raise PersistenceError(f"disk full writing '{key}'", key)
        await super().set(key, value)


class FakeResolver:
    """
    In-memory card resolver.

    Names in ``broken`` raise ScryfallError; unknown names return None.
    """

    def __init__(self, cards: Iterable[ScryfallCard] = ()) -> None:
        self.cards = {card.name: card for card in cards}
        self.broken: set[str] = set()
        self.name_calls: list[str] = []
        self.id_calls: list[list[str]] = []

    async def get_card(self, card_id: str) -> ScryfallCard | None:
        for card in self.cards.values():
            if card.id == card_id:
                return card
        return None

    async def get_cards_by_ids(self, card_ids: Iterable[str]) -> list[ScryfallCard]:
        ids = list(card_ids)
        self.id_calls.append(ids)
        return [card for card in self.cards.values() if card.id in ids]

    async def get_card_by_name(self, name: str) -> ScryfallCard | None:
        self.name_calls.append(name)
        if name in self.broken:
            raise ScryfallError("Scryfall returned 500", status_code=500)
        return self.cards.get(name)


class FakeScryfall(FakeResolver):
    """
    Resolver plus card search, precon sets and set commanders.

    Search matches card names by substring; queries in ``broken`` raise
    ScryfallError.
    """

    def __init__(self, cards: Iterable[ScryfallCard] = (), sets: Iterable[ScryfallSet] = ()) -> None:
        super().__init__(cards)
        self.sets = list(sets)
        self.commanders: dict[str, list[ScryfallCard]] = {}
        self.search_calls: list[tuple[str, int]] = []

    async def search_cards(self, query: str, page: int = 1, order: str = "name") -> ScryfallSearchPage:
        self.search_calls.append((query, page))
        if query in self.broken:
            raise ScryfallError("Scryfall returned 500", status_code=500)
        matches = [card for card in self.cards.values() if query.lower() in card.name.lower()]
        return ScryfallSearchPage(total_cards=len(matches), data=matches)

    async def get_grouped_precons(self) -> list[PreconGroup]:
        return group_precons(self.sets)

    async def get_set_commanders(self, set_code: str) -> list[ScryfallCard]:
        return list(self.commanders.get(set_code, []))


def make_card(
    card_id: str,
    name: str,
    *,
    mana_cost: str | None = None,
    type_line: str = "Artifact",
    colors: list[str] | None = None,
    usd: str | None = None,
) -> ScryfallCard:
    return ScryfallCard.model_validate(
        {
            "id": card_id,
            "name": name,
            "set": "cmm",
            "set_name": "Commander Masters",
            "mana_cost": mana_cost,
            "type_line": type_line,
            "colors": colors if colors is not None else [],
            "image_uris": {"normal": f"https://cards.scryfall.io/normal/{card_id}.jpg"},
            "prices": {"usd": usd},
        }
    )


@pytest.fixture
def clock() -> Callable[[], str]:
    """Deterministic clock that advances one second per call."""
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    ticks = itertools.count()

    def now() -> str:
        moment = start + timedelta(seconds=next(ticks))
        return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")

    return now


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def storage(backend: MemoryBackend) -> Storage:
    return Storage(backend)


@pytest.fixture
async def store(storage: Storage, clock: Callable[[], str]) -> AppStore:
    app_store = AppStore(storage, clock=clock)
    await app_store.init()
    return app_store


@pytest.fixture
def sol_ring() -> ScryfallCard:
    return make_card("sol-ring-id", "Sol Ring", mana_cost="{1}", usd="1.50")


@pytest.fixture
def atraxa() -> ScryfallCard:
    return make_card(
        "atraxa-id",
        "Atraxa, Praetors' Voice",
        mana_cost="{G}{W}{U}{B}",
        type_line="Legendary Creature — Phyrexian Angel Horror",
        colors=["B", "G", "U", "W"],
        usd="12.00",
    )


@pytest.fixture
def resolver(sol_ring: ScryfallCard, atraxa: ScryfallCard) -> FakeResolver:
    return FakeResolver([sol_ring, atraxa])


@pytest.fixture
def fake_scryfall(
    client: AsyncClient, sol_ring: ScryfallCard, atraxa: ScryfallCard, fixture_json
) -> FakeScryfall:
    """Fake Scryfall client served to the card search and precon set routes."""
    sets = [ScryfallSet.model_validate(s) for s in fixture_json("scryfall_sets.json")["data"] if "code" in s]
    fake = FakeScryfall([sol_ring, atraxa], sets)
    app.dependency_overrides[get_scryfall] = lambda: fake
    return fake


@pytest.fixture
def card_factory() -> Callable[..., ScryfallCard]:
    return make_card


@pytest.fixture
def failing_backend() -> FailingBackend:
    return FailingBackend()


@pytest.fixture
def fixture_json() -> Callable[[str], Any]:
    return load_fixture


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    await init_db(engine)
    yield engine
    await drop_db(engine)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def client(store: AppStore, resolver: FakeResolver):
    """Async test client wired to the in-memory store and fake resolver."""
    mtgjson = MTGJSONClient(base_url="https://mtgjson.test/api/v5", min_interval=0)
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_resolver] = lambda: resolver
    app.dependency_overrides[get_mtgjson] = lambda: mtgjson

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    await mtgjson.aclose()
