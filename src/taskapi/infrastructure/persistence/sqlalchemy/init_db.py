"""Database initialization utilities."""

import logging

from sqlalchemy.ext.asyncio import AsyncEngine

# Import models to register with Base.metadata
import taskapi.infrastructure.persistence.sqlalchemy.models  # noqa: F401
from taskapi.infrastructure.persistence.sqlalchemy.models.base import Base
from taskapi_auth.persistence.sqlalchemy import AuthBase

logger = logging.getLogger(__name__)

_METADATA = (Base.metadata, AuthBase.metadata)


async def create_tables(engine: AsyncEngine) -> None:
    """
    Create all database tables (idempotent).

    Uses SQLAlchemy's create_all() which only creates missing tables.
    Existing tables and their data are never modified or deleted.
    """
    logger.info("Ensuring all database tables exist...")
    async with engine.begin() as conn:
        for metadata in _METADATA:
            await conn.run_sync(metadata.create_all)
    logger.info("Database schema is up to date")


async def drop_tables(engine: AsyncEngine) -> None:
    """
    Drop all database tables (USE WITH CAUTION!).

    This is primarily for testing and development reset scenarios.
    """
    logger.warning("Dropping all database tables...")
    async with engine.begin() as conn:
        for metadata in reversed(_METADATA):
            await conn.run_sync(metadata.drop_all)
