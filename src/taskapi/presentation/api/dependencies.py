"""FastAPI dependency injection for the Task API.

Provides dependencies for:
- Database sessions
- The bearer security scheme and the current principal
- Repository factory and service instances

Long-lived objects (engine, session maker, JWT and password services) are
created once by the app factory and read from ``app.state``.
"""

import logging
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from taskapi.application.context import UserContext
from taskapi.application.services import AuthenticationService
from taskapi.domain.shared.exceptions import AuthenticationError, ErrorCode
from taskapi.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
)
from taskapi_auth import JWTService, PasswordHashingService
from taskapi_config.settings import Settings

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# Application-scoped objects
# -----------------------------------------------------------------------------


def get_api_settings(request: Request) -> Settings:
    """Settings the running application was created with."""
    return request.app.state.settings


def get_jwt_service(request: Request) -> JWTService:
    return request.app.state.jwt_service


def get_password_service(request: Request) -> PasswordHashingService:
    return request.app.state.password_service


SettingsDep = Annotated[Settings, Depends(get_api_settings)]
JWTServiceDep = Annotated[JWTService, Depends(get_jwt_service)]
PasswordServiceDep = Annotated[PasswordHashingService, Depends(get_password_service)]


# -----------------------------------------------------------------------------
# Database Session
# -----------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """
    Database session dependency.

    Creates an async session for the request using the shared engine/pool.
    The route handler and its services share this session.

    Yields
    ------
    AsyncSession for database operations
    """
    async with request.app.state.session_maker() as session:
        yield session


# Type alias for injected session
DBSession = Annotated[AsyncSession, Depends(get_db_session)]


async def get_repository_factory(session: DBSession) -> SQLAlchemyRepositoryFactory:
    return SQLAlchemyRepositoryFactory(session)


# Type alias for injected repository factory
RepoFactory = Annotated[SQLAlchemyRepositoryFactory, Depends(get_repository_factory)]


# -----------------------------------------------------------------------------
# Request Authentication
# -----------------------------------------------------------------------------

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


def get_current_principal(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> UserContext:
    """
    The principal established by the authentication middleware.

    The gate has already verified ``credentials`` before routing; the
    parameter is declared so protected routes carry the bearer scheme in
    the OpenAPI document.

    Raises
    ------
    AuthenticationError
        If the route is on the public allowlist and therefore has no principal
    """
    principal = getattr(request.state, "principal", None)
    if principal is None:
        logger.debug("No principal on %s", request.url.path)
        raise AuthenticationError(code=ErrorCode.MISSING_TOKEN)
    return principal


# Type alias for injected principal
CurrentPrincipal = Annotated[UserContext, Depends(get_current_principal)]


# -----------------------------------------------------------------------------
# Application Services
# -----------------------------------------------------------------------------


async def get_authentication_service(
    factory: RepoFactory,
    jwt_service: JWTServiceDep,
    password_service: PasswordServiceDep,
) -> AuthenticationService:
    """
    Get authentication service with all dependencies.

    This service orchestrates user registration and login.
    """
    return AuthenticationService(
        user_repository=factory.user_repository(),
        credential_repository=factory.credential_repository(),
        password_service=password_service,
        jwt_service=jwt_service,
    )


# Type alias for injected auth service
AuthService = Annotated[AuthenticationService, Depends(get_authentication_service)]
