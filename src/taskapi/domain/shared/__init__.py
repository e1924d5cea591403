"""Building blocks shared by all domains."""

from taskapi.domain.shared.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    ConcurrencyError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    UpstreamUnavailableError,
    ValidationError,
)
from taskapi.domain.shared.time import ensure_tz_aware, utc_now

__all__ = [
    "AccessDeniedError",
    "AuthenticationError",
    "ConcurrencyError",
    "ConflictError",
    "DomainException",
    "EntityNotFoundError",
    "ErrorCode",
    "UpstreamUnavailableError",
    "ValidationError",
    "ensure_tz_aware",
    "utc_now",
]
