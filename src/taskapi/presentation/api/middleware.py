"""Request authentication middleware.

The gate runs here, before routing, so a protected request without valid
credentials is rejected before its body is read or validated. Rejections
use the same error format as the exception handlers.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import Response

from taskapi.application.services import RequestAuthenticationGate
from taskapi.domain.shared.exceptions import (
    AuthenticationError,
    ErrorCode,
    UpstreamUnavailableError,
)
from taskapi.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from taskapi.presentation.api.dependencies import security
from taskapi.presentation.api.exception_handlers import render_domain_exception

logger = logging.getLogger(__name__)

GATE_MESSAGES: dict[ErrorCode, str] = {
    ErrorCode.MISSING_TOKEN: "Authentication required",
    ErrorCode.TOKEN_EXPIRED: "Token has expired",
    ErrorCode.MALFORMED_TOKEN: "Token is malformed",
    ErrorCode.UNSUPPORTED_TOKEN: "Token type is not supported",
    ErrorCode.INVALID_TOKEN: "Token is invalid",
    ErrorCode.ACCOUNT_DISABLED: "Account is disabled",
}


async def _run_gate(request: Request, token: str | None):
    # Own short-lived session; the route opens its own if it needs one
    async with request.app.state.session_maker() as session:
        factory = SQLAlchemyRepositoryFactory(session)
        gate = RequestAuthenticationGate(
            public_paths=request.app.state.public_paths,
            jwt_service=request.app.state.jwt_service,
            user_repository=factory.user_repository(),
            credential_repository=factory.credential_repository(),
        )
        return await gate.authenticate(request.url.path, token)


def register_auth_middleware(app: FastAPI) -> None:
    """Attach the authentication gate to every request.

    Register before CORS so that CORS stays the outer layer and preflight
    requests are answered without credentials.
    """

    @app.middleware("http")
    async def authenticate_request(request: Request, call_next) -> Response:
        credentials = await security(request)
        token = credentials.credentials if credentials else None

        try:
            decision = await _run_gate(request, token)
        except Exception:
            logger.exception("Authentication failed unexpectedly on %s", request.url.path)
            return render_domain_exception(
                request,
                AuthenticationError(
                    "Authentication failed",
                    code=ErrorCode.AUTHENTICATION_FAILED,
                ),
            )

        if decision.failure is ErrorCode.UPSTREAM_UNAVAILABLE:
            return render_domain_exception(request, UpstreamUnavailableError())
        if decision.failure is not None:
            return render_domain_exception(
                request,
                AuthenticationError(
                    GATE_MESSAGES.get(decision.failure, "Authentication failed"),
                    code=decision.failure,
                ),
            )

        # Read back by get_current_principal
        request.state.principal = decision.principal
        return await call_next(request)
