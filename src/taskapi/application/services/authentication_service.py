"""Authentication service for user registration and login."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskapi.application.context import UserContext
from taskapi.application.services.authenticator import Authenticator
from taskapi.application.validation import validate_login, validate_registration
from taskapi.domain.shared.exceptions import ErrorCode, UpstreamUnavailableError
from taskapi.domain.user import (
    AccountDisabledError,
    Email,
    InvalidCredentialsError,
    User,
    UserAlreadyExistsError,
    mask_email,
    username_from_email,
    with_suffix,
)
from taskapi_auth import JWTService, PasswordHashingService
from taskapi_auth.repositories import UserCredentialRepository

if TYPE_CHECKING:
    from taskapi.domain.user import UserRepository

logger = logging.getLogger(__name__)

MAX_USERNAME_ATTEMPTS = 100


@dataclass(frozen=True)
class LoginResult:
    token: str
    principal: UserContext


class AuthenticationService:
    """
    Application service for user authentication.

    Orchestrates taskapi_auth infrastructure (password hashing, JWT tokens)
    with the User domain to provide:
    - User registration
    - Login with password

    Session commit and rollback stay with the caller.
    """

    def __init__(
        self,
        user_repository: UserRepository,
        credential_repository: UserCredentialRepository,
        password_service: PasswordHashingService,
        jwt_service: JWTService,
    ):
        self._user_repo = user_repository
        self._credential_repo = credential_repository
        self._password_service = password_service
        self._jwt_service = jwt_service
        self._authenticator = Authenticator(
            user_repository,
            credential_repository,
            password_service,
        )

    async def _unique_username(self, email: Email) -> str:
        base = username_from_email(email)
        candidate = base
        for suffix in range(1, MAX_USERNAME_ATTEMPTS + 1):
            if not await self._user_repo.exists_by_username(candidate):
                return candidate
            candidate = with_suffix(base, suffix)
        logger.error("No free username left for base %r", base)
        raise UserAlreadyExistsError(email.value)

    async def register(self, email: str, password: str, name: str) -> User:
        """
        Create a user and its credentials.

        Parameters
        ----------
        email
            Login email, normalized to lowercase before storage
        password
            Plaintext password, hashed with bcrypt before storage
        name
            Display name

        Returns
        -------
        The created user

        Raises
        ------
        ValidationError
            If any field fails validation
        UserAlreadyExistsError
            If the email is already registered
        """
        validate_registration(email, password, name).raise_if_invalid()

        email_obj = Email(email)
        if await self._user_repo.exists_by_email(email_obj.value):
            logger.info("Registration refused, email taken: %s", mask_email(email_obj.value))
            raise UserAlreadyExistsError(email_obj.value)

        username = await self._unique_username(email_obj)
        password_hash = self._password_service.hash(password)

        user = User.create(email_obj, username=username, name=name)
        await self._user_repo.save(user)
        await self._credential_repo.save(user_id=user.id, password_hash=password_hash)

        logger.info("User registered: %s (%s)", mask_email(user.email), user.id)
        return user

    async def login(self, email: str, password: str) -> LoginResult:
        """Check credentials and issue an access token.

        Raises InvalidCredentialsError for an unknown email or wrong
        password, AccountDisabledError for an inactive account and
        UpstreamUnavailableError when the stores cannot be reached.
        """
        validate_login(email, password).raise_if_invalid()

        result = await self._authenticator.authenticate(email, password)
        if result.failure is ErrorCode.ACCOUNT_DISABLED:
            raise AccountDisabledError
        if result.failure is ErrorCode.UPSTREAM_UNAVAILABLE:
            raise UpstreamUnavailableError
        if not result.ok or result.principal is None:
            raise InvalidCredentialsError

        principal = result.principal
        if result.needs_rehash:
            await self._credential_repo.save(
                user_id=principal.user_id,
                password_hash=self._password_service.hash(password),
            )
            logger.info("Upgraded password hash for %s", principal.user_id)
        await self._credential_repo.update_last_login(principal.user_id)

        token = self._jwt_service.create_access_token(
            user_id=principal.user_id,
            email=principal.email,
            username=principal.username,
        )
        logger.info("User logged in: %s", mask_email(principal.email))
        return LoginResult(token=token, principal=principal)
