"""
Storefront Backend — /store API Tests
=======================================

What we test:
    - CORS is scoped: /store trusts STORE_CORS origins, /admin trusts ADMIN_CORS
    - Customer registration, login (cookie and token), session, logout
    - /store/customers/me read and update
    - /store/auth/{email} account lookup
    - Public region listing
"""

import pytest

CUSTOMER = {
    "email": "Jane@Example.com",
    "password": "hunter22",
    "first_name": "Jane",
    "last_name": "Doe",
}


async def register(client, **overrides):
    body = dict(CUSTOMER, **overrides)
    response = await client.post("/store/customers", json=body)
    assert response.status_code == 200, response.text
    return response.json()["customer"]


class TestCors:
    @pytest.mark.asyncio
    async def test_store_preflight_allows_store_origin(self, client):
        response = await client.options(
            "/store/regions",
            headers={
                "Origin": "http://store.test",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://store.test"
        assert response.headers["access-control-allow-credentials"] == "true"

    @pytest.mark.asyncio
    async def test_store_preflight_rejects_admin_origin(self, client):
        response = await client.options(
            "/store/regions",
            headers={
                "Origin": "http://admin.test",
                "Access-Control-Request-Method": "GET",
            },
        )

        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    @pytest.mark.asyncio
    async def test_admin_preflight_allows_admin_origin(self, client):
        response = await client.options(
            "/admin/regions",
            headers={
                "Origin": "http://admin.test",
                "Access-Control-Request-Method": "POST",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://admin.test"

    @pytest.mark.asyncio
    async def test_simple_request_exposes_headers(self, client):
        response = await client.get("/store/regions", headers={"Origin": "http://store.test"})

        assert response.headers["access-control-allow-origin"] == "http://store.test"
        assert "X-Total-Count" in response.headers["access-control-expose-headers"]

    @pytest.mark.asyncio
    async def test_health_has_no_cors(self, client):
        response = await client.get("/health", headers={"Origin": "http://store.test"})
        assert "access-control-allow-origin" not in response.headers


class TestCustomerAccounts:
    @pytest.mark.asyncio
    async def test_register_logs_in(self, client):
        customer = await register(client)

        assert customer["id"].startswith("cus_")
        assert customer["email"] == "jane@example.com"
        assert customer["has_account"] is True
        assert "password_hash" not in customer

        me = await client.get("/store/customers/me")
        assert me.status_code == 200
        assert me.json()["customer"]["id"] == customer["id"]

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client):
        await register(client)

        response = await client.post("/store/customers", json=CUSTOMER)

        assert response.status_code == 422
        assert response.json()["error"] == "invalid_request_error"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client):
        response = await client.post("/store/customers", json=dict(CUSTOMER, email="not-an-email"))
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_register_password_too_long(self, client):
        response = await client.post("/store/customers", json=dict(CUSTOMER, password="\u00e9" * 40))

        assert response.status_code == 400
        assert response.json()["details"]["field"] == "password"

    @pytest.mark.asyncio
    async def test_me_requires_login(self, client):
        response = await client.get("/store/customers/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_login_and_logout(self, client):
        await register(client)
        client.cookies.clear()

        login = await client.post(
            "/store/auth", json={"email": "jane@example.com", "password": "hunter22"}
        )
        assert login.status_code == 200
        session = await client.get("/store/auth")
        assert session.json()["customer"]["email"] == "jane@example.com"

        await client.delete("/store/auth")
        client.cookies.clear()
        assert (await client.get("/store/auth")).status_code == 401

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client):
        await register(client)

        response = await client.post(
            "/store/auth", json={"email": "jane@example.com", "password": "wrong"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Wrong email or password"

    @pytest.mark.asyncio
    async def test_bearer_token(self, client):
        await register(client)
        client.cookies.clear()

        token = await client.post(
            "/store/auth/token", json={"email": "jane@example.com", "password": "hunter22"}
        )
        headers = {"Authorization": f"Bearer {token.json()['access_token']}"}

        response = await client.get("/store/customers/me", headers=headers)
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_admin_token_is_not_a_customer_token(self, client, admin_headers):
        response = await client.get("/store/customers/me", headers=admin_headers)
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_update_me(self, client):
        await register(client)

        response = await client.post(
            "/store/customers/me",
            json={"first_name": "Janet", "phone": "+45 1234", "password": "new-secret"},
        )

        assert response.status_code == 200
        assert response.json()["customer"]["first_name"] == "Janet"
        assert response.json()["customer"]["phone"] == "+45 1234"

        client.cookies.clear()
        login = await client.post(
            "/store/auth", json={"email": "jane@example.com", "password": "new-secret"}
        )
        assert login.status_code == 200

    @pytest.mark.asyncio
    async def test_email_exists(self, client):
        await register(client)

        known = await client.get("/store/auth/JANE@example.com")
        unknown = await client.get("/store/auth/nobody@example.com")

        assert known.json() == {"exists": True}
        assert unknown.json() == {"exists": False}


class TestStoreRegions:
    @pytest.mark.asyncio
    async def test_list_and_get_regions(self, client, admin_headers):
        created = await client.post(
            "/admin/regions",
            json={"name": "Nordics", "currency_code": "usd", "countries": ["dk"]},
            headers=admin_headers,
        )
        region_id = created.json()["region"]["id"]

        listing = await client.get("/store/regions")
        single = await client.get(f"/store/regions/{region_id}")

        assert listing.status_code == 200
        assert [r["id"] for r in listing.json()["regions"]] == [region_id]
        assert single.json()["region"]["countries"][0]["iso_2"] == "dk"

    @pytest.mark.asyncio
    async def test_unknown_region(self, client):
        response = await client.get("/store/regions/reg_missing")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_stale_cookie_is_ignored(self, client):
        client.cookies.set("storefront_store_session", "garbage")

        response = await client.get("/store/regions")

        assert response.status_code == 200
