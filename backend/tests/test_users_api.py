"""
Storefront Backend — Admin User & Auth API Tests
==================================================

What we test:
    - Admin login: session cookie, bearer token, x-api-key, logout
    - User CRUD with duplicate email and immutable fields
    - Password reset: token request, reset, single use, wrong email
"""

import pytest

from conftest import ADMIN_EMAIL, ADMIN_PASSWORD
from storefront.database import async_session_factory
from storefront.services.user_service import user_service


async def reset_token(user_id):
    async with async_session_factory() as session:
        return await user_service.generate_reset_password_token(session, user_id)


class TestAdminAuth:
    @pytest.mark.asyncio
    async def test_login_sets_session_cookie(self, client, admin_user):
        response = await client.post(
            "/admin/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == admin_user.id
        assert "storefront_admin_session" in response.cookies

        session = await client.get("/admin/auth")
        assert session.status_code == 200
        assert session.json()["user"]["email"] == ADMIN_EMAIL

    @pytest.mark.asyncio
    async def test_login_is_case_insensitive_on_email(self, client, admin_user):
        response = await client.post(
            "/admin/auth/token", json={"email": ADMIN_EMAIL.upper(), "password": ADMIN_PASSWORD}
        )
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client, admin_user):
        response = await client.post(
            "/admin/auth", json={"email": ADMIN_EMAIL, "password": "nope"}
        )

        assert response.status_code == 401
        assert response.json()["message"] == "Wrong email or password"

    @pytest.mark.asyncio
    async def test_token_login(self, client, admin_user):
        token = await client.post(
            "/admin/auth/token", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )
        headers = {"Authorization": f"Bearer {token.json()['access_token']}"}

        response = await client.get("/admin/users", headers=headers)

        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_logout(self, client, admin_user):
        await client.post("/admin/auth", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})

        response = await client.delete("/admin/auth")
        client.cookies.clear()

        assert response.status_code == 200
        assert (await client.get("/admin/auth")).status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_api_key(self, client, admin_user):
        response = await client.get("/admin/users", headers={"x-api-key": "wrong"})
        assert response.status_code == 401


class TestUserCrud:
    @pytest.mark.asyncio
    async def test_create_user(self, client, admin_headers):
        response = await client.post(
            "/admin/users",
            json={"email": "Member@Storefront.test", "password": "secret", "first_name": "Mo"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["id"].startswith("usr_")
        assert user["email"] == "member@storefront.test"
        assert user["role"] == "member"
        assert "password" not in user
        assert "password_hash" not in user

    @pytest.mark.asyncio
    async def test_create_duplicate_email(self, client, admin_headers):
        response = await client.post(
            "/admin/users",
            json={"email": ADMIN_EMAIL, "password": "secret"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "A user with the same email already exists"

    @pytest.mark.asyncio
    async def test_create_invalid_email(self, client, admin_headers):
        response = await client.post(
            "/admin/users",
            json={"email": "not-an-email", "password": "secret"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_create_password_too_long(self, client, admin_headers):
        response = await client.post(
            "/admin/users",
            json={"email": "long@storefront.test", "password": "a" * 100},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"] == "invalid_data"

    @pytest.mark.asyncio
    async def test_list_users(self, client, admin_headers):
        response = await client.get("/admin/users", headers=admin_headers)

        assert response.status_code == 200
        assert response.headers["X-Total-Count"] == "1"
        assert response.json()["users"][0]["email"] == ADMIN_EMAIL

    @pytest.mark.asyncio
    async def test_update_user(self, client, admin_headers, admin_user):
        response = await client.post(
            f"/admin/users/{admin_user.id}",
            json={"first_name": "Grace", "role": "developer", "metadata": {"team": "ops"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["first_name"] == "Grace"
        assert user["last_name"] == "Admin"
        assert user["role"] == "developer"
        assert user["metadata"] == {"team": "ops"}

    @pytest.mark.asyncio
    async def test_update_duplicate_api_token(self, client, admin_headers):
        created = await client.post(
            "/admin/users",
            json={"email": "dev@storefront.test", "password": "secret"},
            headers=admin_headers,
        )
        user_id = created.json()["user"]["id"]

        response = await client.post(
            f"/admin/users/{user_id}",
            json={"api_token": "test-api-token"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["message"] == "A user with the same api token already exists"
        # The existing token still resolves to a single user
        listing = await client.get("/admin/users", headers={"x-api-key": "test-api-token"})
        assert listing.status_code == 200

    @pytest.mark.asyncio
    async def test_update_email_not_allowed(self, client, admin_headers, admin_user):
        response = await client.post(
            f"/admin/users/{admin_user.id}",
            json={"email": "other@storefront.test"},
            headers=admin_headers,
        )
        assert response.status_code == 400

    @pytest.mark.asyncio
    async def test_delete_user(self, client, admin_headers):
        created = await client.post(
            "/admin/users",
            json={"email": "temp@storefront.test", "password": "secret"},
            headers=admin_headers,
        )
        user_id = created.json()["user"]["id"]

        response = await client.delete(f"/admin/users/{user_id}", headers=admin_headers)

        assert response.json() == {"id": user_id, "object": "user", "deleted": True}
        assert (await client.get(f"/admin/users/{user_id}", headers=admin_headers)).status_code == 404

        # The email can be reused once the user is deleted
        again = await client.post(
            "/admin/users",
            json={"email": "temp@storefront.test", "password": "secret"},
            headers=admin_headers,
        )
        assert again.status_code == 200


class TestPasswordReset:
    @pytest.mark.asyncio
    async def test_password_token_always_204(self, client, admin_user):
        known = await client.post("/admin/users/password-token", json={"email": ADMIN_EMAIL})
        unknown = await client.post(
            "/admin/users/password-token", json={"email": "ghost@storefront.test"}
        )

        assert known.status_code == 204
        assert unknown.status_code == 204

    @pytest.mark.asyncio
    async def test_reset_password(self, client, admin_user):
        token = await reset_token(admin_user.id)

        response = await client.post(
            "/admin/users/reset-password",
            json={"token": token, "password": "brand-new", "email": ADMIN_EMAIL},
        )

        assert response.status_code == 200
        login = await client.post(
            "/admin/auth/token", json={"email": ADMIN_EMAIL, "password": "brand-new"}
        )
        assert login.status_code == 200

        # The token was signed with the old password hash
        reused = await client.post(
            "/admin/users/reset-password", json={"token": token, "password": "again"}
        )
        assert reused.status_code == 401

    @pytest.mark.asyncio
    async def test_reset_password_wrong_email(self, client, admin_user):
        token = await reset_token(admin_user.id)

        response = await client.post(
            "/admin/users/reset-password",
            json={"token": token, "password": "brand-new", "email": "other@storefront.test"},
        )

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_reset_token_is_not_an_access_token(self, client, admin_user):
        token = await reset_token(admin_user.id)

        response = await client.get(
            "/admin/regions", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 401
