"""
Storefront Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the test suite.
How:   Tests run against the real application and a temporary SQLite
       database (aiosqlite). Each test gets a freshly created schema with
       seeded currencies/countries and the default store.

Fixture Hierarchy:
    database            create schema, seed, create store / drop afterwards
    ├── db_session      AsyncSession for service-level tests
    ├── admin_user      a live admin user (password ADMIN_PASSWORD)
    │   └── admin_headers   Bearer token headers for /admin requests
    └── client          httpx AsyncClient bound to the ASGI app
    temp_storage        empty directory for file service tests
"""

import os
import tempfile

# Settings are read at import time: configure the environment before any
# storefront module is imported.
_TEST_DIR = tempfile.mkdtemp(prefix="storefront_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_DIR}/storefront_test.db"
os.environ["STORAGE_ROOT"] = os.path.join(_TEST_DIR, "uploads")
os.environ["JWT_SECRET"] = "test-jwt-secret-that-is-long-enough-for-hs256"
os.environ["BACKEND_URL"] = "http://test"
os.environ["STORE_CORS"] = "http://store.test"
os.environ["ADMIN_CORS"] = "http://admin.test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from storefront.database import Base, async_session_factory, engine
from storefront.models import UserRole
from storefront.security import ADMIN_DOMAIN, create_access_token
from storefront.seed import seed_reference_data
from storefront.services.store_service import store_service
from storefront.services.user_service import user_service

ADMIN_EMAIL = "admin@storefront.test"
ADMIN_PASSWORD = "correct-horse-battery"


# ══════════════════════════════════════════════════════════════════════════
# Database Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def database():
    """
    Fresh schema per test.

    The engine is disposed afterwards so no pooled connection outlives the
    test's event loop.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_factory() as session:
        async with session.begin():
            await seed_reference_data(session)
            await store_service.ensure_default_store(session)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    """
    AsyncSession for calling services directly.

    Services only flush; the session is rolled back at the end of the test.
    """
    async with async_session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def admin_user(database):
    async with async_session_factory() as session:
        async with session.begin():
            user = await user_service.create(
                session,
                email=ADMIN_EMAIL,
                password=ADMIN_PASSWORD,
                first_name="Ada",
                last_name="Admin",
                role=UserRole.ADMIN,
                api_token="test-api-token",
            )
    return user


@pytest.fixture
def admin_headers(admin_user):
    token = create_access_token(subject=admin_user.id, domain=ADMIN_DOMAIN)
    return {"Authorization": f"Bearer {token}"}


# ══════════════════════════════════════════════════════════════════════════
# HTTP Client
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def client(database):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    Usage:
        async def test_health(client):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from storefront.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as http_client:
        yield http_client


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "storage"
    storage_dir.mkdir()
    return str(storage_dir)
