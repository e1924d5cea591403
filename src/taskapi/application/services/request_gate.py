"""Per-request bearer token authentication."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskapi.application.context import UserContext
from taskapi.domain.shared.exceptions import ErrorCode
from taskapi_auth import JWTService, StoreUnavailableError, TokenFailure
from taskapi_auth.repositories import UserCredentialRepository

if TYPE_CHECKING:
    from taskapi.domain.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GateDecision:
    """Outcome of the gate for one request.

    Exactly one of three shapes: a public pass-through, an authenticated
    principal, or a failure code.
    """

    principal: UserContext | None = None
    failure: ErrorCode | None = None
    public: bool = False

    @classmethod
    def passthrough(cls) -> GateDecision:
        return cls(public=True)

    @classmethod
    def authenticated(cls, principal: UserContext) -> GateDecision:
        return cls(principal=principal)

    @classmethod
    def rejected(cls, failure: ErrorCode) -> GateDecision:
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None


class PublicPathMatcher:
    """Matches request paths against an allowlist.

    ``/docs`` matches only ``/docs``; ``/docs/**`` matches ``/docs`` and
    everything below it.
    """

    def __init__(self, patterns: Iterable[str]):
        self._exact: set[str] = set()
        self._prefixes: list[str] = []
        for pattern in patterns:
            if pattern.endswith("/**"):
                self._prefixes.append(pattern[: -len("/**")])
            else:
                self._exact.add(pattern)

    def matches(self, path: str) -> bool:
        if path in self._exact:
            return True
        return any(
            path == prefix or path.startswith(f"{prefix}/") for prefix in self._prefixes
        )


class RequestAuthenticationGate:
    """
    Establishes the caller's identity before a handler runs.

    Holds only read-only collaborators, so a single instance may serve
    concurrent requests. Steps, each short-circuiting on failure:

    1. public path -> pass through
    2. no bearer token -> MISSING_TOKEN
    3. token rejected -> TOKEN_EXPIRED, MALFORMED_TOKEN, UNSUPPORTED_TOKEN
       or INVALID_TOKEN
    4. subject unknown -> INVALID_TOKEN
    5. account inactive -> ACCOUNT_DISABLED
    6. principal returned for injection into the request
    """

    def __init__(
        self,
        public_paths: PublicPathMatcher,
        jwt_service: JWTService,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
    ):
        self._public_paths = public_paths
        self._jwt_service = jwt_service
        self._user_repo = user_repository
        self._credential_repo = credential_repository

    def is_public(self, path: str) -> bool:
        return self._public_paths.matches(path)

    async def authenticate(self, path: str, token: str | None) -> GateDecision:
        """Run the gate for one request.

        ``token`` is the bearer credential already taken from the
        ``Authorization`` header, or None when there was none.
        """
        if self.is_public(path):
            return GateDecision.passthrough()

        if not token:
            logger.debug("No bearer token on %s", path)
            return GateDecision.rejected(ErrorCode.MISSING_TOKEN)

        verification = self._jwt_service.verify(token)
        payload = verification.payload
        if verification.failure is not None or payload is None:
            failure = verification.failure or TokenFailure.INVALID_TOKEN
            return GateDecision.rejected(ErrorCode(failure.value))

        try:
            user = await self._user_repo.find_by_email(payload.email)
            credential = (
                await self._credential_repo.find_by_user_id(user.id) if user else None
            )
        except StoreUnavailableError:
            logger.error("Cannot resolve token subject, store unavailable")
            return GateDecision.rejected(ErrorCode.UPSTREAM_UNAVAILABLE)

        # Deleted, replaced or foreign subjects all look the same to the caller
        if user is None or credential is None or user.id != payload.user_id:
            logger.warning("Token subject does not resolve to a user: %s", payload.user_id)
            return GateDecision.rejected(ErrorCode.INVALID_TOKEN)

        if not credential.active:
            logger.warning("Token presented for disabled account: %s", user.id)
            return GateDecision.rejected(ErrorCode.ACCOUNT_DISABLED)

        return GateDecision.authenticated(UserContext.create(user, credential))
