"""Unit tests for AuthenticationService registration and login."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from taskapi.application.services import AuthenticationService
from taskapi.domain.shared.exceptions import (
    ErrorCode,
    UpstreamUnavailableError,
    ValidationError,
)
from taskapi.domain.user import (
    AccountDisabledError,
    InvalidCredentialsError,
    User,
    UserAlreadyExistsError,
    UserRepository,
)
from taskapi_auth import JWTService, PasswordHashingService, StoreUnavailableError
from taskapi_auth.repositories import UserCredentialData, UserCredentialRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


class TestAuthenticationServiceRegister:
    """Tests for user registration."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user_repo = AsyncMock(spec=UserRepository)
        self.credential_repo = AsyncMock(spec=UserCredentialRepository)
        self.password_service = Mock(spec=PasswordHashingService)
        self.jwt_service = Mock(spec=JWTService)

        self.user_repo.exists_by_email.return_value = False
        self.user_repo.exists_by_username.return_value = False
        self.password_service.hash.return_value = "$2b$04$hashed"

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
        )

    @pytest.mark.asyncio
    async def test_register_creates_user_and_credential(self):
        # Act
        user = await self.service.register("Jane.Doe@Example.com", "Sup3r$ecret", "Jane Doe")

        # Assert
        assert user.email == "jane.doe@example.com"
        assert user.username == "jane.doe"
        assert user.name == "Jane Doe"
        self.user_repo.save.assert_awaited_once_with(user)
        self.credential_repo.save.assert_awaited_once_with(
            user_id=user.id,
            password_hash="$2b$04$hashed",
        )
        self.password_service.hash.assert_called_once_with("Sup3r$ecret")

    @pytest.mark.asyncio
    async def test_register_existing_email_skips_hashing(self):
        # Arrange
        self.user_repo.exists_by_email.return_value = True

        # Act & Assert
        with pytest.raises(UserAlreadyExistsError):
            await self.service.register("jane@example.com", "Sup3r$ecret", "Jane Doe")

        self.password_service.hash.assert_not_called()
        self.user_repo.save.assert_not_awaited()
        self.credential_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_register_checks_normalized_email(self):
        await self.service.register("  JANE@example.com", "Sup3r$ecret", "Jane Doe")

        self.user_repo.exists_by_email.assert_awaited_once_with("jane@example.com")

    @pytest.mark.asyncio
    async def test_taken_username_gets_numeric_suffix(self):
        self.user_repo.exists_by_username.side_effect = [True, True, False]

        user = await self.service.register("jane@example.com", "Sup3r$ecret", "Jane Doe")

        assert user.username == "jane2"

    @pytest.mark.asyncio
    async def test_no_free_username_is_conflict(self):
        self.user_repo.exists_by_username.return_value = True

        with pytest.raises(UserAlreadyExistsError):
            await self.service.register("jane@example.com", "Sup3r$ecret", "Jane Doe")

        self.user_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_weak_password_is_rejected_before_lookup(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.register("jane@example.com", "short", "Jane Doe")

        assert exc_info.value.code is ErrorCode.WEAK_PASSWORD
        self.user_repo.exists_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_fields_are_reported_together(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.register("bad", "short", "")

        assert set(exc_info.value.field_errors) == {"email", "password", "name"}
        assert exc_info.value.code is ErrorCode.VALIDATION_FAILED


class TestAuthenticationServiceLogin:
    """Tests for login."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user = User.create(email="jane@example.com", username="jane", name="Jane Doe")
        self.user_repo = AsyncMock(spec=UserRepository)
        self.credential_repo = AsyncMock(spec=UserCredentialRepository)
        self.password_service = Mock(spec=PasswordHashingService)
        self.jwt_service = Mock(spec=JWTService)

        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = self._credential()
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = False
        self.jwt_service.create_access_token.return_value = "signed.jwt.token"

        self.service = AuthenticationService(
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
            password_service=self.password_service,
            jwt_service=self.jwt_service,
        )

    def _credential(self, active: bool = True) -> UserCredentialData:
        return UserCredentialData(
            user_id=str(self.user.id),
            password_hash="$2b$04$stored",
            active=active,
            verified=False,
            created_at=NOW,
            updated_at=NOW,
            last_login_at=None,
        )

    @pytest.mark.asyncio
    async def test_login_issues_token(self):
        # Act
        result = await self.service.login("jane@example.com", "Sup3r$ecret")

        # Assert
        assert result.token == "signed.jwt.token"
        assert result.principal.user_id == self.user.id
        self.jwt_service.create_access_token.assert_called_once_with(
            user_id=self.user.id,
            email="jane@example.com",
            username="jane",
        )
        self.credential_repo.update_last_login.assert_awaited_once_with(self.user.id)
        self.credential_repo.save.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_outdated_hash_is_upgraded_on_login(self):
        # Arrange
        self.password_service.needs_rehash.return_value = True
        self.password_service.hash.return_value = "$2b$12$new"

        # Act
        await self.service.login("jane@example.com", "Sup3r$ecret")

        # Assert
        self.password_service.hash.assert_called_once_with("Sup3r$ecret")
        self.credential_repo.save.assert_awaited_once_with(
            user_id=self.user.id,
            password_hash="$2b$12$new",
        )

    @pytest.mark.asyncio
    async def test_unknown_email_raises_invalid_credentials(self):
        self.user_repo.find_by_email.return_value = None

        with pytest.raises(InvalidCredentialsError) as exc_info:
            await self.service.login("ghost@example.com", "Sup3r$ecret")

        assert exc_info.value.code is ErrorCode.INVALID_CREDENTIALS
        self.jwt_service.create_access_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_wrong_password_raises_invalid_credentials(self):
        self.password_service.verify.return_value = False

        with pytest.raises(InvalidCredentialsError):
            await self.service.login("jane@example.com", "wrong-password")

        self.credential_repo.update_last_login.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_disabled_account_raises(self):
        self.credential_repo.find_by_user_id.return_value = self._credential(active=False)

        with pytest.raises(AccountDisabledError) as exc_info:
            await self.service.login("jane@example.com", "Sup3r$ecret")

        assert exc_info.value.code is ErrorCode.ACCOUNT_DISABLED
        self.jwt_service.create_access_token.assert_not_called()

    @pytest.mark.asyncio
    async def test_store_outage_raises_upstream_unavailable(self):
        self.user_repo.find_by_email.side_effect = StoreUnavailableError()

        with pytest.raises(UpstreamUnavailableError):
            await self.service.login("jane@example.com", "Sup3r$ecret")

    @pytest.mark.asyncio
    async def test_missing_password_is_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            await self.service.login("jane@example.com", "")

        assert "password" in exc_info.value.field_errors
        self.user_repo.find_by_email.assert_not_awaited()
