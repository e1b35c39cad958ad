"""
Storefront Backend — Upload, Download & Export API Tests
==========================================================

What we test:
    - POST /admin/uploads stores files and returns url/key pairs
    - GET /uploads/{key} serves public files
    - DELETE /admin/uploads removes a file
    - POST /admin/uploads/download-url and private file protection
    - POST /admin/exports/regions writes a private CSV
"""

import pytest


async def upload(client, headers, name="notes.txt", content=b"hello world", content_type="text/plain"):
    response = await client.post(
        "/admin/uploads",
        files=[("files", (name, content, content_type))],
        headers=headers,
    )
    assert response.status_code == 200, response.text
    return response.json()["uploads"][0]


class TestUploads:
    @pytest.mark.asyncio
    async def test_upload_requires_authentication(self, client):
        response = await client.post(
            "/admin/uploads", files=[("files", ("a.txt", b"a", "text/plain"))]
        )
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_upload_multiple_files(self, client, admin_headers):
        response = await client.post(
            "/admin/uploads",
            files=[
                ("files", ("a.txt", b"first", "text/plain")),
                ("files", ("b.csv", b"x,y\n", "text/csv")),
            ],
            headers=admin_headers,
        )

        assert response.status_code == 200
        uploads = response.json()["uploads"]
        assert len(uploads) == 2
        assert uploads[0]["key"].endswith(".txt")
        assert uploads[1]["key"].endswith(".csv")

    @pytest.mark.asyncio
    async def test_serve_uploaded_file(self, client, admin_headers):
        stored = await upload(client, admin_headers)

        response = await client.get(stored["url"])

        assert response.status_code == 200
        assert response.content == b"hello world"
        assert response.headers["content-type"].startswith("text/plain")
        assert "public" in response.headers["cache-control"]

    @pytest.mark.asyncio
    async def test_serve_missing_file(self, client):
        response = await client.get("/uploads/2024/01/01/missing.txt")
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_upload(self, client, admin_headers):
        stored = await upload(client, admin_headers)

        response = await client.request(
            "DELETE",
            "/admin/uploads",
            json={"file_key": stored["key"]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json() == {"id": stored["key"], "object": "file", "deleted": True}
        assert (await client.get(stored["url"])).status_code == 404

    @pytest.mark.asyncio
    async def test_download_url(self, client, admin_headers):
        stored = await upload(client, admin_headers)

        response = await client.post(
            "/admin/uploads/download-url",
            json={"file_key": stored["key"]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        download_url = response.json()["download_url"]
        assert "signature=" in download_url
        assert (await client.get(download_url)).content == b"hello world"

    @pytest.mark.asyncio
    async def test_download_url_for_missing_file(self, client, admin_headers):
        response = await client.post(
            "/admin/uploads/download-url",
            json={"file_key": "2024/01/01/missing.txt"},
            headers=admin_headers,
        )
        assert response.status_code == 404


class TestExports:
    @pytest.mark.asyncio
    async def test_export_regions(self, client, admin_headers):
        await client.post(
            "/admin/regions",
            json={"name": "Nordics", "currency_code": "usd", "countries": ["dk", "se"]},
            headers=admin_headers,
        )

        response = await client.post("/admin/exports/regions", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["file_key"].startswith("private/exports/regions-")
        assert body["file_key"].endswith(".csv")

        download = await client.get(body["download_url"])
        assert download.status_code == 200
        assert download.headers["cache-control"] == "private, no-store"
        lines = download.text.strip().splitlines()
        assert len(lines) == 2
        assert "Nordics" in lines[1]
        assert "dk;se" in lines[1]

    @pytest.mark.asyncio
    async def test_private_file_requires_signature(self, client, admin_headers):
        response = await client.post("/admin/exports/regions", headers=admin_headers)
        file_key = response.json()["file_key"]

        unsigned = await client.get(f"/uploads/{file_key}")
        assert unsigned.status_code == 401

        tampered = await client.get(f"/uploads/{file_key}?expires=9999999999&signature=bad")
        assert tampered.status_code == 401

    @pytest.mark.asyncio
    async def test_private_file_under_alias_key(self, client, admin_headers):
        response = await client.post("/admin/exports/regions", headers=admin_headers)
        file_key = response.json()["file_key"]

        for alias in (f"%2E/{file_key}", f"2024/%2E%2E/{file_key}", file_key.replace("/", "//", 1)):
            aliased = await client.get(f"/uploads/{alias}")
            assert aliased.status_code == 400, alias
            assert aliased.json()["error"] == "invalid_data"
