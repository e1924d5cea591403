"""Repository factory protocol for application layer."""

from __future__ import annotations

from typing import Any, Protocol

from taskapi.domain.task.repositories import TaskRepository
from taskapi.domain.user.repositories import UserRepository
from taskapi_auth.repositories import UserCredentialRepository


class RepositoryFactory(Protocol):
    """Protocol for creating repositories bound to one unit of work."""

    @property
    def session(self) -> Any:
        """Get the database session for transaction management.

        The type is intentionally `Any` to avoid coupling the
        application layer to specific database implementations.
        Use this for commit/rollback at the presentation layer.
        """
        ...

    def user_repository(self) -> UserRepository:
        """Get user repository."""
        ...

    def credential_repository(self) -> UserCredentialRepository:
        """Get user credential repository."""
        ...

    def task_repository(self) -> TaskRepository:
        """Get task repository."""
        ...
