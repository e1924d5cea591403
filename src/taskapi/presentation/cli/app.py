"""Task API CLI application using Typer.

This module provides command-line utilities for the Task API backend:
secret generation for deployment configuration, running the server,
and enabling or disabling user accounts.
"""

import asyncio
import secrets
from typing import Optional

import typer
import uvicorn
from rich.console import Console
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from taskapi.infrastructure.persistence.sqlalchemy import (
    SQLAlchemyRepositoryFactory,
    create_tables,
)
from taskapi_config.settings import get_settings

app = typer.Typer(
    name="taskapi",
    help="Task API - personal task management CLI",
    no_args_is_help=True,
)
console = Console()


# Create secrets subcommand group
secrets_app = typer.Typer(
    name="secrets",
    help="Secret generation utilities",
    no_args_is_help=True,
)
app.add_typer(secrets_app)

users_app = typer.Typer(
    name="users",
    help="User account administration",
    no_args_is_help=True,
)
app.add_typer(users_app)

db_app = typer.Typer(
    name="db",
    help="Database utilities",
    no_args_is_help=True,
)
app.add_typer(db_app)


@secrets_app.command("generate")
def generate_secrets() -> None:
    """Generate secure secrets for the Task API configuration.

    Generates two secrets:
    - JWT_SECRET_KEY: Secret for signing JWT authentication tokens
    - POSTGRES_PASSWORD: Database password

    Copy the output to your .env file.
    """
    console.print("\n[bold green]Task API Secret Generation[/bold green]")
    console.print("=" * 60)
    console.print(
        "\nGenerated secrets for your [bold].env[/bold] configuration file:\n"
    )

    # 64 bytes, well above the HS256 minimum
    jwt_secret = secrets.token_urlsafe(64)
    console.print(f"[cyan]JWT_SECRET_KEY[/cyan]={jwt_secret}")

    db_password = secrets.token_urlsafe(32)
    console.print(f"[cyan]POSTGRES_PASSWORD[/cyan]={db_password}")

    console.print("\n" + "=" * 60)
    console.print(
        "[yellow]⚠  Keep these secrets secure and never commit them "
        "to version control![/yellow]"
    )
    console.print(
        "[dim]Copy the above values to your config/.env or "
        "config/.env.dev file.[/dim]\n"
    )


@app.command("serve")
def serve(
    host: Optional[str] = typer.Option(None, help="Bind address (default: API_HOST)"),
    port: Optional[int] = typer.Option(None, help="Bind port (default: API_PORT)"),
    reload: bool = typer.Option(False, help="Reload on code changes"),
) -> None:
    """Run the API server with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "taskapi.presentation.api.app:create_app",
        factory=True,
        host=host or settings.api_host,
        port=port or settings.api_port,
        reload=reload,
    )


@db_app.command("init")
def init_db() -> None:
    """Create missing database tables."""

    async def _run() -> None:
        engine = create_async_engine(get_settings().sqlalchemy_url)
        try:
            await create_tables(engine)
        finally:
            await engine.dispose()

    asyncio.run(_run())
    console.print("[green]Database schema is up to date[/green]")


async def _set_active(email: str, active: bool) -> bool:
    engine = create_async_engine(get_settings().sqlalchemy_url)
    session_maker = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    try:
        async with session_maker() as session:
            factory = SQLAlchemyRepositoryFactory(session)
            user = await factory.user_repository().find_by_email(email)
            if user is None:
                return False
            updated = await factory.credential_repository().set_active(user.id, active)
            await session.commit()
            return updated
    finally:
        await engine.dispose()


def _change_status(email: str, active: bool) -> None:
    if not asyncio.run(_set_active(email, active)):
        console.print(f"[red]No account found for {email}[/red]")
        raise typer.Exit(code=1)
    state = "enabled" if active else "disabled"
    console.print(f"[green]Account {email} {state}[/green]")


@users_app.command("activate")
def activate_user(email: str = typer.Argument(..., help="Account email")) -> None:
    """Allow an account to log in again."""
    _change_status(email, active=True)


@users_app.command("deactivate")
def deactivate_user(email: str = typer.Argument(..., help="Account email")) -> None:
    """Block logins and reject the account's existing tokens."""
    _change_status(email, active=False)


def cli() -> None:
    """Entry point for the CLI application."""
    app()


if __name__ == "__main__":
    cli()
