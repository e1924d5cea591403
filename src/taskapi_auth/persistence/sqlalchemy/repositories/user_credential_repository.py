"""SQLAlchemy implementation of UserCredentialRepository."""

import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi_auth.persistence.sqlalchemy.errors import store_errors
from taskapi_auth.persistence.sqlalchemy.models import UserCredentialModel
from taskapi_auth.repositories import UserCredentialData, UserCredentialRepository

logger = logging.getLogger(__name__)


def _as_utc(value: datetime | None) -> datetime | None:
    # SQLite drops tzinfo on the way back
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class UserCredentialRepositorySQLAlchemy(UserCredentialRepository):
    """SQLAlchemy implementation of UserCredentialRepository."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session.

        Parameters
        ----------
        session
            SQLAlchemy async session
        """
        self._session = session

    def _to_data(self, model: UserCredentialModel) -> UserCredentialData:
        """Map SQLAlchemy model to data transfer object."""
        return UserCredentialData(
            user_id=model.user_id,
            password_hash=model.password_hash,
            active=model.active,
            verified=model.verified,
            created_at=_as_utc(model.created_at),  # type: ignore[arg-type]
            updated_at=_as_utc(model.updated_at),  # type: ignore[arg-type]
            last_login_at=_as_utc(model.last_login_at),
        )

    async def _find_model_by_user_id(self, user_id: UUID) -> UserCredentialModel | None:
        """Internal helper to find the concrete model for modification."""
        stmt = select(UserCredentialModel).where(
            UserCredentialModel.user_id == str(user_id),
        )
        with store_errors("credential lookup"):
            result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def save(
        self,
        user_id: UUID,
        password_hash: str,
    ) -> UserCredentialData:
        existing = await self._find_model_by_user_id(user_id)

        if existing:
            existing.password_hash = password_hash
            existing.updated_at = datetime.now(tz=timezone.utc)
            with store_errors("credential update"):
                await self._session.flush()
            logger.debug("Updated credentials for user: %s", user_id)
            return self._to_data(existing)

        now = datetime.now(tz=timezone.utc)
        model = UserCredentialModel(
            user_id=str(user_id),
            password_hash=password_hash,
            active=True,
            verified=False,
            created_at=now,
            updated_at=now,
        )
        self._session.add(model)
        with store_errors("credential insert"):
            await self._session.flush()
        logger.info("Created credentials for user: %s", user_id)
        return self._to_data(model)

    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        model = await self._find_model_by_user_id(user_id)
        return self._to_data(model) if model else None

    async def update_last_login(self, user_id: UUID) -> None:
        credential = await self._find_model_by_user_id(user_id)
        if credential:
            credential.last_login_at = datetime.now(tz=timezone.utc)
            with store_errors("last login update"):
                await self._session.flush()

    async def set_active(self, user_id: UUID, active: bool) -> bool:
        credential = await self._find_model_by_user_id(user_id)
        if credential is None:
            return False

        credential.active = active
        credential.updated_at = datetime.now(tz=timezone.utc)
        with store_errors("credential status update"):
            await self._session.flush()
        logger.info("Set active=%s for user: %s", active, user_id)
        return True
