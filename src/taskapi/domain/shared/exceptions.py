"""Shared domain exceptions and error codes.

This module defines the base exception hierarchy and error codes for the
entire domain layer. All domain exceptions should inherit from DomainException
to enable centralized exception handling in the presentation layer.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public API contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_FAILED = "VALIDATION_FAILED"
    WEAK_PASSWORD = "WEAK_PASSWORD"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"

    # Authentication Errors (401, or 400 at login)
    MISSING_TOKEN = "MISSING_TOKEN"
    TOKEN_EXPIRED = "TOKEN_EXPIRED"
    MALFORMED_TOKEN = "MALFORMED_TOKEN"
    UNSUPPORTED_TOKEN = "UNSUPPORTED_TOKEN"
    INVALID_TOKEN = "INVALID_TOKEN"
    ACCOUNT_DISABLED = "ACCOUNT_DISABLED"
    AUTHENTICATION_FAILED = "AUTHENTICATION_FAILED"

    # Authorization Errors (403)
    ACCESS_DENIED = "ACCESS_DENIED"

    # Not Found Errors (404)
    ENTITY_NOT_FOUND = "ENTITY_NOT_FOUND"
    TASK_NOT_FOUND = "TASK_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    USER_ALREADY_EXISTS = "USER_ALREADY_EXISTS"
    CONCURRENCY_CONFLICT = "CONCURRENCY_CONFLICT"

    # External Service Errors (503)
    UPSTREAM_UNAVAILABLE = "UPSTREAM_UNAVAILABLE"

    # General Errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DomainException(Exception):  # NOQA: N818
    """Base exception for all domain-related errors.

    This exception provides structured error information that can be
    used by the presentation layer to generate consistent API responses.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationError(DomainException):
    """Raised when input validation fails.

    ``field_errors`` maps a request field to the reason it was rejected and
    is returned to the client alongside the error code.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
        field_errors: dict[str, str] | None = None,
    ) -> None:
        super().__init__(message, code, details)
        self.field_errors = field_errors or {}


class EntityNotFoundError(DomainException):
    """Raised when a requested entity cannot be found."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.ENTITY_NOT_FOUND,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConflictError(DomainException):
    """Raised when an operation conflicts with existing state."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class ConcurrencyError(DomainException):
    """Raised when concurrent modifications conflict.

    Clients may retry with a fresh copy of the resource.
    """

    def __init__(
        self,
        message: str = "The resource was modified by another request",
        code: ErrorCode = ErrorCode.CONCURRENCY_CONFLICT,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AuthenticationError(DomainException):
    """Raised when a request cannot be tied to an authenticated principal.

    Always answered with 401, whatever the code.
    """

    def __init__(
        self,
        message: str = "Authentication required",
        code: ErrorCode = ErrorCode.AUTHENTICATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class AccessDeniedError(DomainException):
    """Raised when an authenticated principal may not touch a resource."""

    def __init__(
        self,
        message: str = "You do not have permission to access this resource",
        code: ErrorCode = ErrorCode.ACCESS_DENIED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class UpstreamUnavailableError(DomainException):
    """Raised when a backing store times out or refuses connections."""

    def __init__(
        self,
        message: str = "A backing service is temporarily unavailable",
        code: ErrorCode = ErrorCode.UPSTREAM_UNAVAILABLE,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)
