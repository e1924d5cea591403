"""Pytest fixtures for API integration tests.

Every test runs a full application against its own SQLite file. The
client is entered as a context manager so the lifespan creates the
schema and the whole test shares one event loop.
"""

import asyncio

import pytest
from fastapi.testclient import TestClient
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from taskapi.infrastructure.persistence.sqlalchemy import SQLAlchemyRepositoryFactory
from taskapi.presentation.api.app import API_V1_PREFIX, create_app
from taskapi_config.settings import Settings
from tests.shared.fixtures import TEST_JWT_SECRET

DEFAULT_PASSWORD = "Sup3r$ecret"


@pytest.fixture
def api_v1_prefix() -> str:
    """Get the API v1 prefix for building URLs."""
    return API_V1_PREFIX


@pytest.fixture
def api_settings(database_url) -> Settings:
    """Test API settings with debug enabled and cheap hashing."""
    return Settings(
        _env_file=None,
        database_url=database_url,
        jwt_secret_key=SecretStr(TEST_JWT_SECRET),
        bcrypt_rounds=4,
        api_debug=True,
        api_cors_origins="http://localhost:3000",
        log_level="WARNING",
    )


@pytest.fixture
def test_client(api_settings):
    """Create a test client; the lifespan creates the tables."""
    app = create_app(settings=api_settings)
    with TestClient(app) as client:
        yield client


def _run(coro):
    """Run a coroutine in a fresh event loop, apart from TestClient's loop."""
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def set_account_active(database_url):
    """Flip the active flag of an account directly in the credential store."""

    async def _set(email: str, active: bool) -> None:
        engine = create_async_engine(database_url, poolclass=NullPool)
        session_maker = async_sessionmaker(engine, class_=AsyncSession)
        try:
            async with session_maker() as session:
                factory = SQLAlchemyRepositoryFactory(session)
                user = await factory.user_repository().find_by_email(email)
                assert user is not None
                await factory.credential_repository().set_active(user.id, active)
                await session.commit()
        finally:
            await engine.dispose()

    def _apply(email: str, active: bool) -> None:
        _run(_set(email, active))

    return _apply


@pytest.fixture
def register_user(test_client, api_v1_prefix):
    """Register an account and return the response body."""

    def _register(email: str, name: str = "Jane Doe", password: str = DEFAULT_PASSWORD):
        response = test_client.post(
            f"{api_v1_prefix}/auth/register",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 201, (
            f"Registration failed: {response.status_code} - {response.text}"
        )
        return response.json()

    return _register


@pytest.fixture
def login_headers(test_client, api_v1_prefix):
    """Log in and return Authorization headers."""

    def _login(email: str, password: str = DEFAULT_PASSWORD) -> dict:
        response = test_client.post(
            f"{api_v1_prefix}/auth/login",
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, (
            f"Login failed: {response.status_code} - {response.text}"
        )
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _login


@pytest.fixture
def auth_headers(register_user, login_headers) -> dict:
    """Headers for a freshly registered primary user."""
    register_user("jane.doe@example.com")
    return login_headers("jane.doe@example.com")


@pytest.fixture
def other_auth_headers(register_user, login_headers) -> dict:
    """Headers for a second, unrelated user."""
    register_user("john.roe@example.com", name="John Roe")
    return login_headers("john.roe@example.com")
