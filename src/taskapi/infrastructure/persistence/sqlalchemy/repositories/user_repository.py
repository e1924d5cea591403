"""SQLAlchemy implementation of UserRepository."""

import logging
from typing import Optional, Union
from uuid import UUID

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.domain.shared.time import ensure_tz_aware
from taskapi.domain.user import (
    Email,
    User,
    UserAlreadyExistsError,
    UserRepository,
    normalize_email,
)
from taskapi.infrastructure.persistence.sqlalchemy.models import UserModel
from taskapi_auth.persistence.sqlalchemy import store_errors

logger = logging.getLogger(__name__)


def _email_value(email: Union[str, Email]) -> str:
    # Lookups never reject malformed input, they just miss
    return email.value if isinstance(email, Email) else normalize_email(email)


class UserRepositorySQLAlchemy(UserRepository):
    """SQLAlchemy implementation of the UserRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        model = await self._find_model_by_id(user_id)
        return self._map_to_domain(model) if model else None

    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        stmt = select(UserModel).where(UserModel.email == _email_value(email))
        with store_errors("user lookup by email"):
            result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        stmt = select(exists().where(UserModel.email == _email_value(email)))
        with store_errors("user email check"):
            result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def exists_by_username(self, username: str) -> bool:
        stmt = select(exists().where(UserModel.username == username))
        with store_errors("username check"):
            result = await self._session.execute(stmt)
        return bool(result.scalar())

    async def save(self, user: User) -> None:
        existing = await self._find_model_by_id(user.id)

        try:
            if existing:
                self._update_model(existing, user)
                logger.debug("Updated user: %s", user.id)
            else:
                self._session.add(self._map_to_model(user))
                logger.info("Created user: %s", user.id)

            with store_errors("user save"):
                await self._session.flush()
        except IntegrityError as e:
            # Two registrations raced past the existence check
            raise UserAlreadyExistsError(user.email) from e

    async def _find_model_by_id(self, user_id: UUID) -> Optional[UserModel]:
        stmt = select(UserModel).where(UserModel.id == user_id)
        with store_errors("user lookup by id"):
            result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: UserModel) -> User:
        return User.reconstitute(
            id=model.id,
            email=model.email,
            username=model.username,
            name=model.name,
            phone_number=model.phone_number,
            address=model.address,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, user: User) -> UserModel:
        return UserModel(
            id=user.id,
            email=user.email,
            username=user.username,
            name=user.name,
            phone_number=user.phone_number,
            address=user.address,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )

    def _update_model(self, model: UserModel, user: User) -> None:
        # id and username never change
        model.email = user.email
        model.name = user.name
        model.phone_number = user.phone_number
        model.address = user.address
        model.updated_at = user.updated_at
