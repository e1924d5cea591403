"""Auth schemas and data structures.

These are simple data classes used for transferring authentication
data between components.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class TokenFailure(str, Enum):
    """Reasons a bearer token can be rejected.

    Values match the public API error codes of the same name.
    """

    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    UNSUPPORTED_TOKEN = "UNSUPPORTED_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    INVALID_TOKEN = "INVALID_TOKEN"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the claims extracted from a verified JWT token.

    Attributes
    ----------
    user_id
        The unique identifier of the user (``userId`` claim)
    email
        The login email the token was issued for (``sub`` claim)
    username
        Display username at the time of issuance
    issued_at
        Token issuance timestamp
    exp
        Token expiration timestamp
    """

    user_id: UUID
    email: str
    username: str
    issued_at: datetime
    exp: datetime

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) >= self.exp


@dataclass(frozen=True)
class TokenVerification:
    """Outcome of verifying a token: either a payload or a failure kind."""

    payload: TokenPayload | None = None
    failure: TokenFailure | None = None

    @classmethod
    def success(cls, payload: TokenPayload) -> TokenVerification:
        return cls(payload=payload)

    @classmethod
    def failed(cls, failure: TokenFailure) -> TokenVerification:
        return cls(failure=failure)

    @property
    def ok(self) -> bool:
        return self.failure is None
