"""Centralized exception handlers for the FastAPI application.

Domain exceptions are classified where they are raised (each carries a
stable ErrorCode); this module only maps codes to HTTP statuses and renders
them in one format.

Error Response Format:
    {
        "detail": "Human-readable error message",
        "code": "MACHINE_READABLE_ERROR_CODE",
        "status": 404,
        "path": "/api/v1/tasks/999",
        "timestamp": "2024-01-15T10:30:00+00:00",
        "field_errors": {"title": "..."}      # validation errors only
    }

Usage:
    from taskapi.presentation.api.exception_handlers import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

import logging
from datetime import UTC, datetime

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from taskapi.domain.shared.exceptions import (
    AuthenticationError,
    ConcurrencyError,
    ConflictError,
    DomainException,
    EntityNotFoundError,
    ErrorCode,
    ValidationError,
)
from taskapi_auth import StoreUnavailableError

logger = logging.getLogger(__name__)

HIDDEN_DETAIL = "An error occurred. Please contact support."


# =============================================================================
# Error Code to HTTP Status Mapping
# =============================================================================

ERROR_CODE_TO_STATUS: dict[ErrorCode, int] = {
    # 400 Bad Request - validation and login errors
    ErrorCode.VALIDATION_FAILED: status.HTTP_400_BAD_REQUEST,
    ErrorCode.WEAK_PASSWORD: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CREDENTIALS: status.HTTP_400_BAD_REQUEST,
    ErrorCode.ACCOUNT_DISABLED: status.HTTP_400_BAD_REQUEST,
    # 401 Unauthorized - request authentication
    ErrorCode.MISSING_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.TOKEN_EXPIRED: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.MALFORMED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.UNSUPPORTED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorCode.AUTHENTICATION_FAILED: status.HTTP_401_UNAUTHORIZED,
    # 403 Forbidden
    ErrorCode.ACCESS_DENIED: status.HTTP_403_FORBIDDEN,
    # 404 Not Found
    ErrorCode.ENTITY_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.TASK_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    # 409 Conflict
    ErrorCode.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorCode.USER_ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorCode.CONCURRENCY_CONFLICT: status.HTTP_409_CONFLICT,
    # 503 Service Unavailable
    ErrorCode.UPSTREAM_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
    # 500 Internal Server Error
    ErrorCode.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def _get_status_for_exception(exc: DomainException) -> int:
    """Determine HTTP status code for a domain exception.

    Authentication failures are always 401, whatever their code, so an
    ACCOUNT_DISABLED raised by the gate is 401 while the same code raised by
    login is 400.
    """
    if isinstance(exc, AuthenticationError):
        return status.HTTP_401_UNAUTHORIZED

    if exc.code in ERROR_CODE_TO_STATUS:
        return ERROR_CODE_TO_STATUS[exc.code]

    # Fallback based on exception type hierarchy
    if isinstance(exc, EntityNotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (ConflictError, ConcurrencyError)):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST

    # Default to 400 for domain exceptions
    return status.HTTP_400_BAD_REQUEST


def _hide_details(request: Request) -> bool:
    settings = getattr(request.app.state, "settings", None)
    return bool(settings and settings.api_hide_error_details)


def _create_error_response(  # noqa: PLR0913
    request: Request,
    status_code: int,
    message: str,
    code: str,
    field_errors: dict[str, str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Create a standardized error response."""
    content: dict = {
        "detail": HIDDEN_DETAIL if _hide_details(request) else message,
        "code": code,
        "status": status_code,
        "path": request.url.path,
        "timestamp": datetime.now(UTC).isoformat(),
    }
    if field_errors:
        content["field_errors"] = field_errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_name(loc: tuple) -> str:
    # ("body", "title") -> "title"; ("query", "page") -> "page"
    parts = [str(p) for p in loc if p not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def _log_level_for(exc: DomainException) -> int:
    # Expiry is routine; everything else may need a look
    if exc.code is ErrorCode.TOKEN_EXPIRED:
        return logging.DEBUG
    return logging.WARNING


def render_domain_exception(request: Request, exc: DomainException) -> JSONResponse:
    """Render a domain exception in the standard error format.

    Shared by the exception handler and the authentication middleware,
    which rejects requests before they reach a route.
    """
    status_code = _get_status_for_exception(exc)

    logger.log(
        _log_level_for(exc),
        "Domain exception on %s %s: %s (code=%s, details=%s)",
        request.method,
        request.url.path,
        exc.message,
        exc.code.value,
        exc.details,
    )

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return _create_error_response(
        request,
        status_code=status_code,
        message=exc.message,
        code=exc.code.value,
        field_errors=getattr(exc, "field_errors", None),
        headers=headers,
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI application.

    This should be called during app initialization to enable centralized
    exception handling for all domain exceptions.

    Parameters
    ----------
    app
        The FastAPI application instance
    """

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle all domain exceptions with structured response.

        Logs the full exception details for debugging while returning
        a safe, user-friendly message to the client.
        """
        return render_domain_exception(request, exc)

    @app.exception_handler(StoreUnavailableError)
    async def store_unavailable_handler(
        request: Request,
        exc: StoreUnavailableError,
    ) -> JSONResponse:
        """Backing store outages surface as 503, never as a client error."""
        logger.error(
            "Store unavailable on %s %s: %s",
            request.method,
            request.url.path,
            exc.message,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            message="A backing service is temporarily unavailable",
            code=ErrorCode.UPSTREAM_UNAVAILABLE.value,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies and query parameters are validation failures."""
        field_errors: dict[str, str] = {}
        for error in exc.errors():
            field_errors.setdefault(_field_name(tuple(error.get("loc", ()))), error["msg"])

        logger.info(
            "Request validation failed on %s %s: %s",
            request.method,
            request.url.path,
            field_errors,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_400_BAD_REQUEST,
            message="Request validation failed",
            code=ErrorCode.VALIDATION_FAILED.value,
            field_errors=field_errors,
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unhandled exceptions with consistent error format.

        This is the catch-all handler for any exceptions not handled by
        the domain-specific handlers above. It ensures clients always
        receive a consistent error response format.
        """
        logger.exception(
            "Unhandled exception on %s %s: %s",
            request.method,
            request.url.path,
            exc,
        )
        return _create_error_response(
            request,
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            message="An internal error occurred",
            code=ErrorCode.INTERNAL_ERROR.value,
        )
