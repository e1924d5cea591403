"""Unit tests for the request authentication gate."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock

import pytest

from taskapi.application.services import (
    PublicPathMatcher,
    RequestAuthenticationGate,
)
from taskapi.domain.shared.exceptions import ErrorCode
from taskapi.domain.user import User, UserRepository
from taskapi_auth import JWTService, StoreUnavailableError
from taskapi_auth.repositories import UserCredentialData, UserCredentialRepository

SECRET = "gate-test-secret-0123456789abcdefghijklmnop"
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
PUBLIC = ["/health", "/api/v1/auth/register", "/api/v1/auth/login", "/docs/**"]


def make_credential(user: User, active: bool = True) -> UserCredentialData:
    return UserCredentialData(
        user_id=str(user.id),
        password_hash="$2b$04$storedhash",
        active=active,
        verified=True,
        created_at=NOW,
        updated_at=NOW,
        last_login_at=None,
    )


class TestPublicPathMatcher:
    """Tests for allowlist matching."""

    def setup_method(self):
        self.matcher = PublicPathMatcher(PUBLIC)

    def test_exact_match(self):
        assert self.matcher.matches("/health")
        assert self.matcher.matches("/api/v1/auth/login")

    def test_exact_pattern_does_not_match_children(self):
        assert not self.matcher.matches("/health/deep")
        assert not self.matcher.matches("/api/v1/auth/me")

    def test_wildcard_matches_base_and_descendants(self):
        assert self.matcher.matches("/docs")
        assert self.matcher.matches("/docs/oauth2-redirect")

    def test_wildcard_does_not_match_sibling_prefix(self):
        assert not self.matcher.matches("/docsearch")


class TestRequestAuthenticationGate:
    """Tests for the per-request authentication steps."""

    def setup_method(self):
        """Set up test fixtures."""
        self.user = User.create(email="jane@example.com", username="jane", name="Jane Doe")
        self.jwt_service = JWTService(secret_key=SECRET)
        self.user_repo = AsyncMock(spec=UserRepository)
        self.credential_repo = AsyncMock(spec=UserCredentialRepository)
        self.user_repo.find_by_email.return_value = self.user
        self.credential_repo.find_by_user_id.return_value = make_credential(self.user)
        self.gate = RequestAuthenticationGate(
            public_paths=PublicPathMatcher(PUBLIC),
            jwt_service=self.jwt_service,
            user_repository=self.user_repo,
            credential_repository=self.credential_repo,
        )

    def _token(self, **kwargs) -> str:
        return self.jwt_service.create_access_token(
            self.user.id, self.user.email, self.user.username, **kwargs
        )

    @pytest.mark.asyncio
    async def test_public_path_passes_without_token(self):
        decision = await self.gate.authenticate("/api/v1/auth/login", None)

        assert decision.public
        assert decision.ok
        self.user_repo.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_public_path_ignores_bad_token(self):
        decision = await self.gate.authenticate("/health", "garbage")

        assert decision.public

    @pytest.mark.asyncio
    async def test_missing_token(self):
        decision = await self.gate.authenticate("/api/v1/tasks", None)

        assert decision.failure is ErrorCode.MISSING_TOKEN

    @pytest.mark.asyncio
    async def test_empty_token_is_missing_token(self):
        decision = await self.gate.authenticate("/api/v1/tasks", "")

        assert decision.failure is ErrorCode.MISSING_TOKEN

    @pytest.mark.asyncio
    async def test_valid_token_yields_principal(self):
        # Act
        decision = await self.gate.authenticate("/api/v1/tasks", self._token())

        # Assert
        assert decision.ok
        assert not decision.public
        assert decision.principal.user_id == self.user.id
        assert decision.principal.verified is True

    @pytest.mark.asyncio
    async def test_expired_token(self):
        decision = await self.gate.authenticate(
            "/api/v1/tasks", self._token(expires_delta=timedelta(seconds=-5))
        )

        assert decision.failure is ErrorCode.TOKEN_EXPIRED
        self.user_repo.find_by_email.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_malformed_token(self):
        decision = await self.gate.authenticate("/api/v1/tasks", "not-a-jwt")

        assert decision.failure is ErrorCode.MALFORMED_TOKEN

    @pytest.mark.asyncio
    async def test_foreign_signature_is_invalid(self):
        other = JWTService(secret_key="other-secret-0123456789abcdefghijklmnopq")
        token = other.create_access_token(self.user.id, self.user.email, self.user.username)

        decision = await self.gate.authenticate("/api/v1/tasks", token)

        assert decision.failure is ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_unknown_subject_is_invalid(self):
        self.user_repo.find_by_email.return_value = None

        decision = await self.gate.authenticate("/api/v1/tasks", self._token())

        assert decision.failure is ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_subject_with_different_id_is_invalid(self):
        """A re-registered email does not inherit tokens of the old account."""
        self.user_repo.find_by_email.return_value = User.create(
            email="jane@example.com", username="jane", name="Jane Again"
        )

        decision = await self.gate.authenticate("/api/v1/tasks", self._token())

        assert decision.failure is ErrorCode.INVALID_TOKEN

    @pytest.mark.asyncio
    async def test_disabled_account(self):
        self.credential_repo.find_by_user_id.return_value = make_credential(
            self.user, active=False
        )

        decision = await self.gate.authenticate("/api/v1/tasks", self._token())

        assert decision.failure is ErrorCode.ACCOUNT_DISABLED

    @pytest.mark.asyncio
    async def test_store_outage(self):
        self.user_repo.find_by_email.side_effect = StoreUnavailableError()

        decision = await self.gate.authenticate("/api/v1/tasks", self._token())

        assert decision.failure is ErrorCode.UPSTREAM_UNAVAILABLE
