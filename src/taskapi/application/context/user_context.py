"""User context for request-scoped user identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from taskapi.domain.user.aggregates import User
    from taskapi_auth.repositories import UserCredentialData


@dataclass(frozen=True)
class UserContext:
    """
    Immutable principal for the current authenticated user.

    Resolved once per request by the authentication gate (or once per
    login by the authenticator) and handed explicitly to the handlers and
    commands that need it. Never carries the password hash.
    """

    user_id: UUID
    email: str
    username: str
    active: bool = True
    verified: bool = False

    @classmethod
    def create(cls, user: User, credential: UserCredentialData) -> UserContext:
        return cls(
            user_id=user.id,
            email=user.email,
            username=user.username,
            active=credential.active,
            verified=credential.verified,
        )

    def __str__(self) -> str:
        return f"UserContext({self.username})"

    def __repr__(self) -> str:
        return f"UserContext(user_id={self.user_id}, email={self.email!r})"
