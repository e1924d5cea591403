"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import jwt
import pytest

from taskapi_auth.schemas import TokenFailure
from taskapi_auth.services import JWTService

SECRET = "test-secret-key-0123456789abcdefghijklmnop"
OTHER_SECRET = "another-secret-key-0123456789abcdefghijklm"


class TestJWTServiceInit:
    """Tests for JWTService initialization."""

    def test_init_with_valid_secret(self):
        """Test that service initializes with valid secret."""
        service = JWTService(secret_key=SECRET)
        assert service is not None

    def test_init_with_empty_secret_raises(self):
        """Test that empty secret raises ValueError."""
        with pytest.raises(ValueError, match="cannot be empty"):
            JWTService(secret_key="")

    def test_init_with_non_positive_expiration_raises(self):
        with pytest.raises(ValueError, match="must be positive"):
            JWTService(secret_key=SECRET, expiration_ms=0)


class TestAccessTokens:
    """Tests for access token creation and verification."""

    def setup_method(self):
        """Set up test fixtures."""
        self.service = JWTService(secret_key=SECRET)
        self.user_id = uuid4()
        self.email = "jane.doe@example.com"
        self.username = "jane.doe"

    def _token(self, **kwargs) -> str:
        return self.service.create_access_token(
            user_id=self.user_id,
            email=self.email,
            username=self.username,
            **kwargs,
        )

    def test_verify_valid_access_token(self):
        """A freshly issued token resolves to the same user."""
        result = self.service.verify(self._token())

        assert result.ok
        assert result.payload.user_id == self.user_id
        assert result.payload.email == self.email
        assert result.payload.username == self.username
        assert not result.payload.is_expired()

    def test_token_claims_layout(self):
        """Subject is the email; the id travels in userId."""
        claims = jwt.decode(self._token(), SECRET, algorithms=["HS256"])

        assert claims["sub"] == self.email
        assert claims["userId"] == str(self.user_id)
        assert claims["username"] == self.username
        assert claims["exp"] > claims["iat"]

    def test_default_lifetime_is_one_day(self):
        payload = self.service.verify(self._token()).payload

        lifetime = payload.exp - payload.issued_at
        assert timedelta(hours=23, minutes=59) <= lifetime <= timedelta(days=1, seconds=1)

    def test_expired_token_reports_expired(self):
        """A token past its lifetime is expired, never merely invalid."""
        token = self._token(expires_delta=timedelta(seconds=-1))

        result = self.service.verify(token)

        assert result.failure is TokenFailure.TOKEN_EXPIRED
        assert self.service.is_expired(token)

    def test_token_signed_with_other_key_is_invalid(self):
        other = JWTService(secret_key=OTHER_SECRET)
        token = other.create_access_token(self.user_id, self.email, self.username)

        assert self.service.verify(token).failure is TokenFailure.INVALID_TOKEN

    def test_expired_token_with_bad_signature_is_invalid_not_expired(self):
        """Signature is checked before expiry."""
        other = JWTService(secret_key=OTHER_SECRET)
        token = other.create_access_token(
            self.user_id,
            self.email,
            self.username,
            expires_delta=timedelta(seconds=-1),
        )

        result = self.service.verify(token)

        assert result.failure is TokenFailure.INVALID_TOKEN
        assert not self.service.is_expired(token)

    def test_tampered_signature_is_invalid(self):
        header, payload, signature = self._token().split(".")
        flipped = "A" if signature[0] != "A" else "B"
        tampered = f"{header}.{payload}.{flipped}{signature[1:]}"

        assert self.service.verify(tampered).failure is TokenFailure.INVALID_TOKEN

    @pytest.mark.parametrize("garbage", ["not-a-token", "abc.def", "a.b.c"])
    def test_garbage_is_malformed(self, garbage):
        assert self.service.verify(garbage).failure is TokenFailure.MALFORMED_TOKEN

    def test_other_algorithm_is_unsupported(self):
        now = datetime.now(tz=timezone.utc)
        token = jwt.encode(
            {
                "sub": self.email,
                "userId": str(self.user_id),
                "iat": now,
                "exp": now + timedelta(hours=1),
            },
            SECRET,
            algorithm="HS512",
        )

        assert self.service.verify(token).failure is TokenFailure.UNSUPPORTED_TOKEN

    def test_unsigned_token_is_unsupported(self):
        now = datetime.now(tz=timezone.utc)
        token = jwt.encode(
            {"sub": self.email, "userId": str(self.user_id), "iat": now,
             "exp": now + timedelta(hours=1)},
            None,
            algorithm="none",
        )

        assert self.service.verify(token).failure is TokenFailure.UNSUPPORTED_TOKEN

    def test_token_without_user_id_is_invalid(self):
        now = datetime.now(tz=timezone.utc)
        token = jwt.encode(
            {"sub": self.email, "iat": now, "exp": now + timedelta(hours=1)},
            SECRET,
            algorithm="HS256",
        )

        assert self.service.verify(token).failure is TokenFailure.INVALID_TOKEN

    def test_token_without_expiry_is_invalid(self):
        token = jwt.encode(
            {"sub": self.email, "userId": str(self.user_id),
             "iat": datetime.now(tz=timezone.utc)},
            SECRET,
            algorithm="HS256",
        )

        assert self.service.verify(token).failure is TokenFailure.INVALID_TOKEN
