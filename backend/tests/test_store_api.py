"""
Storefront Backend — Admin Store & Currency API Tests
=======================================================

What we test:
    - GET /admin/store returns the default store
    - Store currencies: add, duplicate, unknown, remove, default protection
    - POST /admin/store: default currency rules, default location, metadata
    - GET /admin/currencies listing and filtering
"""

import pytest


class TestStore:
    @pytest.mark.asyncio
    async def test_get_default_store(self, client, admin_headers):
        response = await client.get("/admin/store", headers=admin_headers)

        assert response.status_code == 200
        store = response.json()["store"]
        assert store["name"] == "Storefront"
        assert store["default_currency_code"] == "usd"
        assert store["default_currency"]["code"] == "usd"
        assert [c["code"] for c in store["currencies"]] == ["usd"]

    @pytest.mark.asyncio
    async def test_update_name_and_metadata(self, client, admin_headers):
        response = await client.post(
            "/admin/store",
            json={"name": "Nordic Goods", "metadata": {"theme": "dark"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        store = response.json()["store"]
        assert store["name"] == "Nordic Goods"
        assert store["metadata"] == {"theme": "dark"}

    @pytest.mark.asyncio
    async def test_replace_currencies_and_default(self, client, admin_headers):
        response = await client.post(
            "/admin/store",
            json={"currencies": ["eur", "DKK"], "default_currency_code": "eur"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        store = response.json()["store"]
        assert store["default_currency_code"] == "eur"
        assert store["default_currency"]["name"] == "Euro"
        assert sorted(c["code"] for c in store["currencies"]) == ["dkk", "eur"]

    @pytest.mark.asyncio
    async def test_default_currency_must_be_a_store_currency(self, client, admin_headers):
        response = await client.post(
            "/admin/store",
            json={"default_currency_code": "eur"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Store does not have currency: eur"

    @pytest.mark.asyncio
    async def test_unknown_default_location(self, client, admin_headers):
        response = await client.post(
            "/admin/store",
            json={"default_location_id": "sloc_missing"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_set_default_location(self, client, admin_headers):
        created = await client.post(
            "/admin/stock-locations", json={"name": "Main warehouse"}, headers=admin_headers
        )
        location_id = created.json()["stock_location"]["id"]

        response = await client.post(
            "/admin/store",
            json={"default_location_id": location_id},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["store"]["default_location_id"] == location_id


class TestStoreCurrencies:
    @pytest.mark.asyncio
    async def test_add_currency(self, client, admin_headers):
        response = await client.post("/admin/store/currencies/EUR", headers=admin_headers)

        assert response.status_code == 200
        codes = sorted(c["code"] for c in response.json()["store"]["currencies"])
        assert codes == ["eur", "usd"]

    @pytest.mark.asyncio
    async def test_add_currency_twice(self, client, admin_headers):
        await client.post("/admin/store/currencies/eur", headers=admin_headers)
        response = await client.post("/admin/store/currencies/eur", headers=admin_headers)

        assert response.status_code == 422
        assert response.json()["message"] == "Currency already added"

    @pytest.mark.asyncio
    async def test_add_unknown_currency(self, client, admin_headers):
        response = await client.post("/admin/store/currencies/xyz", headers=admin_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_remove_currency(self, client, admin_headers):
        await client.post("/admin/store/currencies/eur", headers=admin_headers)

        response = await client.delete("/admin/store/currencies/eur", headers=admin_headers)

        assert response.status_code == 200
        assert [c["code"] for c in response.json()["store"]["currencies"]] == ["usd"]

    @pytest.mark.asyncio
    async def test_cannot_remove_default_currency(self, client, admin_headers):
        response = await client.delete("/admin/store/currencies/usd", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["error"] == "not_allowed"

    @pytest.mark.asyncio
    async def test_region_can_use_added_currency(self, client, admin_headers):
        await client.post("/admin/store/currencies/eur", headers=admin_headers)

        response = await client.post(
            "/admin/regions",
            json={"name": "Eurozone", "currency_code": "eur", "countries": ["de", "fr"]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["region"]["currency_code"] == "eur"


class TestCurrencies:
    @pytest.mark.asyncio
    async def test_list_currencies(self, client, admin_headers):
        response = await client.get("/admin/currencies?limit=5", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert len(body["currencies"]) == 5
        assert body["count"] > 5
        assert int(response.headers["X-Total-Count"]) == body["count"]

    @pytest.mark.asyncio
    async def test_filter_currencies(self, client, admin_headers):
        response = await client.get("/admin/currencies?q=euro", headers=admin_headers)

        codes = [c["code"] for c in response.json()["currencies"]]
        assert "eur" in codes
        assert "usd" not in codes
