"""Tests for card search endpoints."""

from httpx import AsyncClient

from deckvault.store.app_store import AppStore


class TestSearchCards:
    async def test_results_marked_with_ownership(
        self, client: AsyncClient, fake_scryfall, store: AppStore
    ) -> None:
        store.collection.add_to_collection("sol-ring-id", "Sol Ring", quantity=2)
        store.collection.add_to_collection("sol-ring-id", "Sol Ring", foil=True)

        response = await client.get("/cards/search", params={"q": "r"})

        assert response.status_code == 200
        data = response.json()
        assert data["total_cards"] == 2
        assert data["has_more"] is False
        owned = {c["card"]["id"]: (c["in_collection"], c["owned_quantity"]) for c in data["cards"]}
        assert owned == {"sol-ring-id": (True, 3), "atraxa-id": (False, 0)}

    async def test_page_is_forwarded(self, client: AsyncClient, fake_scryfall) -> None:
        response = await client.get("/cards/search", params={"q": "atraxa", "page": 2})

        assert response.json()["page"] == 2
        assert fake_scryfall.search_calls == [("atraxa", 2)]

    async def test_no_matches_is_empty_page(self, client: AsyncClient, fake_scryfall) -> None:
        response = await client.get("/cards/search", params={"q": "nothing like this"})

        assert response.status_code == 200
        assert response.json()["cards"] == []
        assert response.json()["total_cards"] == 0

    async def test_empty_query_rejected(self, client: AsyncClient, fake_scryfall) -> None:
        response = await client.get("/cards/search", params={"q": ""})

        assert response.status_code == 422
        assert fake_scryfall.search_calls == []

    async def test_scryfall_failure_502(self, client: AsyncClient, fake_scryfall) -> None:
        fake_scryfall.broken.add("t:dragon")

        response = await client.get("/cards/search", params={"q": "t:dragon"})

        assert response.status_code == 502
        assert response.json()["kind"] == "external_api_error"
