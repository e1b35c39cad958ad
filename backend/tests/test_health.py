"""
Storefront Backend — Health & Cross-Cutting Middleware Tests
==============================================================

What we test:
    - GET /health reports database and storage status
    - X-Request-ID is generated or echoed back
    - Unknown routes use the standard error envelope
    - Access log lines carry the API area and the actor
"""

import logging

import pytest

from storefront import __version__
from storefront.middleware.logging import api_area


class TestHealth:
    @pytest.mark.asyncio
    async def test_health_ok(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["storage"] == "writable"
        assert body["version"] == __version__
        assert body["uptime_seconds"] >= 0


class TestRequestId:
    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/health")
        assert len(response.headers["X-Request-ID"]) == 8

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/health", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_error_carries_request_id(self, client):
        response = await client.get("/admin/regions", headers={"X-Request-ID": "trace-456"})

        assert response.status_code == 401
        assert response.json()["request_id"] == "trace-456"


class TestErrorEnvelope:
    @pytest.mark.asyncio
    async def test_unknown_route(self, client):
        response = await client.get("/does-not-exist")

        assert response.status_code == 404
        body = response.json()
        assert body["error"] == "not_found"
        assert set(body) == {"error", "message", "details", "request_id"}


class TestAccessLog:
    def test_api_area(self):
        assert api_area("/admin/regions") == "admin"
        assert api_area("/store") == "store"
        assert api_area("/uploads/2024/01/01/a.png") == "files"
        assert api_area("/administrator") == "other"

    @pytest.mark.asyncio
    async def test_access_log_names_actor(self, client, admin_user, caplog):
        with caplog.at_level(logging.INFO, logger="storefront.access"):
            await client.get("/admin/regions", headers={"x-api-key": "test-api-token"})

        lines = [r.getMessage() for r in caplog.records if r.name == "storefront.access"]
        assert any(f"actor={admin_user.id}" in line and "area=admin" in line for line in lines)

    @pytest.mark.asyncio
    async def test_access_log_on_failed_authenticated_request(self, client, admin_user, caplog):
        with caplog.at_level(logging.INFO, logger="storefront.access"):
            response = await client.post(
                "/admin/regions/reg_missing/countries",
                json={"country_code": "dk"},
                headers={"x-api-key": "test-api-token"},
            )

        assert response.status_code == 404
        lines = [r.getMessage() for r in caplog.records if r.name == "storefront.access"]
        assert any(f"actor={admin_user.id}" in line and "-> 404" in line for line in lines)
