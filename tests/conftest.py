# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import os
from datetime import timedelta
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing the application
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["DATABASE_TYPE"] = "sqlite"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars!"
os.environ["LOG_LEVEL"] = "WARNING"
# Cheap Argon2 parameters keep the suite fast
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_MEMORY_COST"] = "8192"
os.environ["ARGON2_PARALLELISM"] = "1"

from fakes import InMemoryStore  # noqa: E402
from storefront_api.core.security import JwtSigner, PasswordManager  # noqa: E402
from storefront_api.core.settings import settings  # noqa: E402
from storefront_api.database.base_store import BaseStore  # noqa: E402
from storefront_api.database.factory import DatabaseFactory  # noqa: E402
from storefront_api.database.query import QueryTranslator  # noqa: E402
from storefront_api.services.account_service import AccountService  # noqa: E402
from storefront_api.services.auth_service import AuthService  # noqa: E402
from storefront_api.services.product_service import ProductService  # noqa: E402


# ==============================================================================
# SECURITY FIXTURES
# ==============================================================================

@pytest.fixture
def password_manager() -> PasswordManager:
    return PasswordManager(time_cost=1, memory_cost=8192, parallelism=1)


@pytest.fixture
def signer() -> JwtSigner:
    return JwtSigner(settings.SECRET_KEY, expires_delta=timedelta(hours=1))


# ==============================================================================
# SERVICE FIXTURES (in-memory store)
# ==============================================================================

@pytest.fixture
def memory_store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def account_service(memory_store: InMemoryStore) -> AccountService:
    return AccountService(memory_store, QueryTranslator())


@pytest.fixture
def auth_service(
    account_service: AccountService,
    signer: JwtSigner,
    password_manager: PasswordManager,
) -> AuthService:
    return AuthService(account_service, signer, password_manager)


@pytest.fixture
def product_service(memory_store: InMemoryStore) -> ProductService:
    return ProductService(memory_store, QueryTranslator())


# ==============================================================================
# DATABASE & HTTP CLIENT FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def store(tmp_path) -> AsyncGenerator[BaseStore, None]:
    """SQLAlchemy store on a fresh SQLite file, registered with the factory."""
    DatabaseFactory.reset()
    database_url = f"sqlite+aiosqlite:///{tmp_path / 'test.db'}"

    sql_store = await DatabaseFactory.initialize(database_url=database_url)
    yield sql_store

    await DatabaseFactory.shutdown()
    DatabaseFactory.reset()


@pytest_asyncio.fixture
async def client(store: BaseStore) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client for API testing."""
    from storefront_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client


@pytest_asyncio.fixture
async def auth_client(client: AsyncClient, signup_data: dict) -> AsyncGenerator[AsyncClient, None]:
    """Client carrying a bearer token for a freshly registered account."""
    response = await client.post("/api/v1/auth/register", json=signup_data)
    assert response.status_code == 201, f"Failed to register: {response.text}"

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": signup_data["email"], "password": signup_data["password"]},
    )
    assert response.status_code == 200, f"Failed to login: {response.text}"

    client.headers["Authorization"] = f"Bearer {response.json()['access_token']}"
    yield client
    client.headers.pop("Authorization", None)


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def signup_data() -> dict:
    return {
        "email": "test@email.com",
        "password": "12345678",
        "first_name": "John",
        "last_name": "Doe",
    }


@pytest.fixture
def product_data() -> dict:
    return {
        "name": "Coffee Mug",
        "description": "Ceramic, 350 ml",
        "price": "9.99",
        "quantity": 12,
    }
