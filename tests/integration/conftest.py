"""
Pytest fixtures for integration tests.

Each test gets its own SQLite database file under pytest's tmp_path, so
tests never share state and never touch a configured database.

Usage:
    async def test_something(db_session):
        repo = TaskRepositorySQLAlchemy(db_session)
        await repo.save(task)
"""

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from taskapi.domain.user import User
from taskapi.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyRepositoryFactory,
    create_tables,
    drop_tables,
)
from tests.shared.fixtures import (
    TEST_USER_EMAIL,
    TEST_USER_EMAIL_2,
    TEST_USER_ID,
    TEST_USER_ID_2,
)


@pytest.fixture
def database_url(tmp_path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'taskapi-test.db'}"


@pytest_asyncio.fixture
async def async_engine(database_url):
    """Engine with a freshly created schema, dropped after the test."""
    engine = create_async_engine(
        database_url,
        echo=False,
        poolclass=NullPool,  # Avoid connection pool issues in tests
    )
    await create_tables(engine)
    yield engine
    await drop_tables(engine)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(async_engine):
    """Provide a session; uncommitted work is rolled back afterwards."""
    session_maker = async_sessionmaker(
        async_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    async with session_maker() as session:
        yield session
        await session.rollback()


@pytest.fixture
def repositories(db_session) -> SQLAlchemyRepositoryFactory:
    return SQLAlchemyRepositoryFactory(db_session)


@pytest_asyncio.fixture
async def test_user(repositories) -> User:
    """Persist the primary test user."""
    user = User(
        id=TEST_USER_ID,
        email=TEST_USER_EMAIL,
        username="test",
        name="Test User",
    )
    await repositories.user_repository().save(user)
    return user


@pytest_asyncio.fixture
async def second_user(repositories) -> User:
    """Persist a second user for isolation tests."""
    user = User(
        id=TEST_USER_ID_2,
        email=TEST_USER_EMAIL_2,
        username="test2",
        name="Second User",
    )
    await repositories.user_repository().save(user)
    return user
