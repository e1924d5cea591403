"""Unit tests for the Authenticator."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, Mock

import pytest

from taskapi.application.services import Authenticator
from taskapi.domain.shared.exceptions import ErrorCode
from taskapi.domain.user import User, UserRepository
from taskapi_auth import PasswordHashingService, StoreUnavailableError
from taskapi_auth.repositories import UserCredentialData, UserCredentialRepository

NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def make_credential(user: User, active: bool = True) -> UserCredentialData:
    return UserCredentialData(
        user_id=str(user.id),
        password_hash="$2b$04$storedhash",
        active=active,
        verified=False,
        created_at=NOW,
        updated_at=NOW,
        last_login_at=None,
    )


class TestAuthenticator:
    """Tests for credential checks."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user = User.create(email="jane@example.com", username="jane", name="Jane Doe")
        self.user_repo = AsyncMock(spec=UserRepository)
        self.credential_repo = AsyncMock(spec=UserCredentialRepository)
        self.password_service = Mock(spec=PasswordHashingService)
        self.authenticator = Authenticator(
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
            password_service=self.password_service,
        )

    @pytest.mark.asyncio
    async def test_success_returns_principal(self):
        # Arrange
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = make_credential(self.user)
        self.password_service.verify.return_value = True

        # Act
        result = await self.authenticator.authenticate("jane@example.com", "Sup3r$ecret")

        # Assert
        assert result.ok
        assert result.principal.user_id == self.user.id
        assert result.principal.email == "jane@example.com"
        assert result.principal.active is True

    @pytest.mark.asyncio
    async def test_success_flags_outdated_hash(self):
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = make_credential(self.user)
        self.password_service.verify.return_value = True
        self.password_service.needs_rehash.return_value = True

        result = await self.authenticator.authenticate("jane@example.com", "Sup3r$ecret")

        assert result.ok
        assert result.needs_rehash is True
        self.password_service.needs_rehash.assert_called_once_with("$2b$04$storedhash")

    @pytest.mark.asyncio
    async def test_email_is_normalized_before_lookup(self):
        self.user_repo.find_by_email.return_value = None

        await self.authenticator.authenticate("  JANE@Example.com ", "whatever")

        self.user_repo.find_by_email.assert_awaited_once_with("jane@example.com")

    @pytest.mark.asyncio
    async def test_unknown_email_is_invalid_credentials(self):
        # Arrange
        self.user_repo.find_by_email.return_value = None

        # Act
        result = await self.authenticator.authenticate("ghost@example.com", "whatever")

        # Assert
        assert result.failure is ErrorCode.INVALID_CREDENTIALS
        self.password_service.verify_dummy.assert_called_once_with("whatever")
        self.credential_repo.find_by_user_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_credential_is_invalid_credentials(self):
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = None

        result = await self.authenticator.authenticate("jane@example.com", "whatever")

        assert result.failure is ErrorCode.INVALID_CREDENTIALS
        self.password_service.verify_dummy.assert_called_once()

    @pytest.mark.asyncio
    async def test_wrong_password_is_invalid_credentials(self):
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = make_credential(self.user)
        self.password_service.verify.return_value = False

        result = await self.authenticator.authenticate("jane@example.com", "wrong")

        assert result.failure is ErrorCode.INVALID_CREDENTIALS
        assert result.principal is None

    @pytest.mark.asyncio
    async def test_inactive_account_with_correct_password_is_disabled(self):
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = make_credential(
            self.user, active=False
        )
        self.password_service.verify.return_value = True

        result = await self.authenticator.authenticate("jane@example.com", "Sup3r$ecret")

        assert result.failure is ErrorCode.ACCOUNT_DISABLED

    @pytest.mark.asyncio
    async def test_inactive_account_with_wrong_password_is_invalid_credentials(self):
        """The disabled state is only revealed to callers who know the password."""
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = make_credential(
            self.user, active=False
        )
        self.password_service.verify.return_value = False

        result = await self.authenticator.authenticate("jane@example.com", "wrong")

        assert result.failure is ErrorCode.INVALID_CREDENTIALS

    @pytest.mark.asyncio
    async def test_store_outage_is_upstream_unavailable(self):
        self.user_repo.find_by_email.side_effect = StoreUnavailableError("down")

        result = await self.authenticator.authenticate("jane@example.com", "Sup3r$ecret")

        assert result.failure is ErrorCode.UPSTREAM_UNAVAILABLE
        self.password_service.verify.assert_not_called()
