"""SQLAlchemy repository factory bound to one session."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.infrastructure.persistence.sqlalchemy.repositories.task_repository import (
    TaskRepositorySQLAlchemy,
)
from taskapi.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)
from taskapi_auth.persistence.sqlalchemy import UserCredentialRepositorySQLAlchemy


class SQLAlchemyRepositoryFactory:
    """SQLAlchemy implementation of the RepositoryFactory Protocol."""

    def __init__(self, session: AsyncSession):
        self._session = session

        # Cached instances (created on demand)
        self._user_repo: UserRepositorySQLAlchemy | None = None
        self._credential_repo: UserCredentialRepositorySQLAlchemy | None = None
        self._task_repo: TaskRepositorySQLAlchemy | None = None

    @property
    def session(self) -> AsyncSession:
        return self._session

    def user_repository(self) -> UserRepositorySQLAlchemy:
        if self._user_repo is None:
            self._user_repo = UserRepositorySQLAlchemy(self._session)
        return self._user_repo

    def credential_repository(self) -> UserCredentialRepositorySQLAlchemy:
        if self._credential_repo is None:
            self._credential_repo = UserCredentialRepositorySQLAlchemy(self._session)
        return self._credential_repo

    def task_repository(self) -> TaskRepositorySQLAlchemy:
        if self._task_repo is None:
            self._task_repo = TaskRepositorySQLAlchemy(self._session)
        return self._task_repo
