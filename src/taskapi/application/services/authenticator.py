"""Credential check producing an authenticated principal."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskapi.application.context import UserContext
from taskapi.domain.shared.exceptions import ErrorCode
from taskapi.domain.user import mask_email, normalize_email
from taskapi_auth import PasswordHashingService, StoreUnavailableError
from taskapi_auth.repositories import UserCredentialRepository

if TYPE_CHECKING:
    from taskapi.domain.user import UserRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticationResult:
    """Either the authenticated principal or the reason authentication failed."""

    principal: UserContext | None = None
    failure: ErrorCode | None = None
    # Stored hash uses an outdated work factor
    needs_rehash: bool = False

    @classmethod
    def success(
        cls,
        principal: UserContext,
        needs_rehash: bool = False,
    ) -> AuthenticationResult:
        return cls(principal=principal, needs_rehash=needs_rehash)

    @classmethod
    def failed(cls, failure: ErrorCode) -> AuthenticationResult:
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None


class Authenticator:
    """
    Turns an email and a plaintext password into a principal.

    Unknown email and wrong password both yield INVALID_CREDENTIALS, and
    an unknown email still pays for one bcrypt verification so the two
    cases take comparable time. A correct password on an inactive account
    yields ACCOUNT_DISABLED. Store outages yield UPSTREAM_UNAVAILABLE and
    are never reported as bad credentials.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service

    async def authenticate(self, email: str, password: str) -> AuthenticationResult:
        normalized = normalize_email(email)

        try:
            user = await self._user_repo.find_by_email(normalized)
            credential = (
                await self._credential_repo.find_by_user_id(user.id) if user else None
            )
        except StoreUnavailableError:
            logger.error("Authentication aborted, store unavailable")
            return AuthenticationResult.failed(ErrorCode.UPSTREAM_UNAVAILABLE)

        if user is None or credential is None:
            self._password_service.verify_dummy(password)
            logger.info("Login failed for %s: unknown account", mask_email(normalized))
            return AuthenticationResult.failed(ErrorCode.INVALID_CREDENTIALS)

        if not self._password_service.verify(password, credential.password_hash):
            logger.info("Login failed for %s: bad password", mask_email(normalized))
            return AuthenticationResult.failed(ErrorCode.INVALID_CREDENTIALS)

        if not credential.active:
            logger.warning("Login refused for disabled account %s", mask_email(normalized))
            return AuthenticationResult.failed(ErrorCode.ACCOUNT_DISABLED)

        return AuthenticationResult.success(
            UserContext.create(user, credential),
            needs_rehash=self._password_service.needs_rehash(credential.password_hash),
        )
