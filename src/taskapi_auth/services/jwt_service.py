"""JWT token service.

Provides JWT token creation and verification for authentication.
"""

import logging
from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from taskapi_auth.schemas import TokenFailure, TokenPayload, TokenVerification

logger = logging.getLogger(__name__)


class JWTService:
    """Service for JWT token creation and verification.

    Tokens are self-contained: they carry the login email as subject, the
    user id, the display username and the issue/expiry timestamps, signed
    with a single symmetric key that lives as long as the process.

    Verification never raises for a bad token. It returns a
    ``TokenVerification`` naming one of four failure kinds so the caller
    can report and log each one appropriately.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token(user_id, "user@example.com", "user")
    >>> result = service.verify(token)
    >>> print(result.payload.user_id)
    """

    DEFAULT_EXPIRATION_MS = 86_400_000
    ALGORITHM = "HS256"
    REQUIRED_CLAIMS = ("sub", "iat", "exp")

    def __init__(
        self,
        secret_key: str,
        expiration_ms: int = DEFAULT_EXPIRATION_MS,
    ):
        """Initialize the JWT service.

        Parameters
        ----------
        secret_key
            Secret key for signing tokens. Must be kept secure.
        expiration_ms
            Token lifetime in milliseconds (default 24 hours)
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)
        if expiration_ms <= 0:
            msg = "JWT expiration must be positive"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._expire = timedelta(milliseconds=expiration_ms)

    def create_access_token(
        self,
        user_id: UUID,
        email: str,
        username: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create a signed access token.

        Parameters
        ----------
        user_id
            The user's unique identifier
        email
            The user's login email, used as subject
        username
            The user's display username
        expires_delta
            Custom lifetime (optional, mainly for tests)

        Returns
        -------
        The encoded JWT token string
        """
        now = datetime.now(tz=timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self._expire)

        payload = {
            "sub": email,
            "userId": str(user_id),
            "username": username,
            "iat": now,
            "exp": expire,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)

    def verify(self, token: str) -> TokenVerification:
        """Verify and decode a JWT token.

        The signature is checked before the expiry, so a tampered token
        that has also expired is reported as invalid, not expired.

        Parameters
        ----------
        token
            The JWT token string to verify

        Returns
        -------
        TokenVerification holding either the payload or the failure kind
        """
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": list(self.REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError:
            logger.debug("Token has expired")
            return TokenVerification.failed(TokenFailure.TOKEN_EXPIRED)
        except jwt.InvalidAlgorithmError as e:
            logger.error("Unsupported token algorithm: %s", e)
            return TokenVerification.failed(TokenFailure.UNSUPPORTED_TOKEN)
        except jwt.InvalidSignatureError:
            logger.warning("Token signature verification failed")
            return TokenVerification.failed(TokenFailure.INVALID_TOKEN)
        except jwt.DecodeError as e:
            logger.error("Malformed token: %s", e)
            return TokenVerification.failed(TokenFailure.MALFORMED_TOKEN)
        except jwt.InvalidTokenError as e:
            logger.warning("Invalid token claims: %s", e)
            return TokenVerification.failed(TokenFailure.INVALID_TOKEN)

        try:
            payload = TokenPayload(
                user_id=UUID(claims["userId"]),
                email=claims["sub"],
                username=claims.get("username", ""),
                issued_at=datetime.fromtimestamp(claims["iat"], tz=timezone.utc),
                exp=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Token payload is missing identity claims: %s", e)
            return TokenVerification.failed(TokenFailure.INVALID_TOKEN)

        return TokenVerification.success(payload)

    def is_expired(self, token: str) -> bool:
        """Check whether a token fails verification only because it expired."""
        return self.verify(token).failure is TokenFailure.TOKEN_EXPIRED
