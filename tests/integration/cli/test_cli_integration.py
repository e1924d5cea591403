"""Integration tests for the taskapi CLI."""

import asyncio

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool
from typer.testing import CliRunner

from taskapi.domain.user import User
from taskapi.infrastructure.persistence.sqlalchemy import SQLAlchemyRepositoryFactory
from taskapi.presentation.cli.app import app
from taskapi_config import clear_settings_cache

runner = CliRunner()


def _run(coro):
    loop = asyncio.new_event_loop()
    try:
        return loop.run_until_complete(coro)
    finally:
        loop.close()


@pytest.fixture
def cli_database(monkeypatch, database_url):
    """Point the CLI at a fresh SQLite file via DATABASE_URL."""
    monkeypatch.setenv("DATABASE_URL", database_url)
    clear_settings_cache()
    yield database_url
    clear_settings_cache()


async def _with_factory(database_url, action):
    engine = create_async_engine(database_url, poolclass=NullPool)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_maker() as session:
            result = await action(SQLAlchemyRepositoryFactory(session))
            await session.commit()
            return result
    finally:
        await engine.dispose()


def _seed_user(database_url, email: str) -> User:
    async def _action(factory):
        user = User.create(email=email, username="cli", name="Cli User")
        await factory.user_repository().save(user)
        await factory.credential_repository().save(user.id, "$2b$04$hash")
        return user

    return _run(_with_factory(database_url, _action))


def _is_active(database_url, user: User) -> bool:
    async def _action(factory):
        credential = await factory.credential_repository().find_by_user_id(user.id)
        return credential.active

    return _run(_with_factory(database_url, _action))


class TestSecretsCommand:
    """Tests for `taskapi secrets generate`."""

    def test_generate_prints_both_secrets(self):
        result = runner.invoke(app, ["secrets", "generate"])

        assert result.exit_code == 0
        assert "JWT_SECRET_KEY=" in result.output
        assert "POSTGRES_PASSWORD=" in result.output


class TestUserCommands:
    """Tests for `taskapi db init` and `taskapi users ...`."""

    def test_db_init_then_toggle_account(self, cli_database):
        # Arrange
        init = runner.invoke(app, ["db", "init"])
        assert init.exit_code == 0, init.output
        user = _seed_user(cli_database, "cli.user@example.com")

        # Act
        deactivated = runner.invoke(app, ["users", "deactivate", "CLI.User@example.com"])

        # Assert
        assert deactivated.exit_code == 0, deactivated.output
        assert not _is_active(cli_database, user)

        activated = runner.invoke(app, ["users", "activate", "cli.user@example.com"])
        assert activated.exit_code == 0
        assert _is_active(cli_database, user)

    def test_unknown_account_exits_with_error(self, cli_database):
        runner.invoke(app, ["db", "init"])

        result = runner.invoke(app, ["users", "deactivate", "nobody@example.com"])

        assert result.exit_code == 1
        assert "No account found" in result.output
