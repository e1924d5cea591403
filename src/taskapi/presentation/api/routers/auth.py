"""Authentication router for user registration and login."""

import logging

from fastapi import APIRouter, status

from taskapi.presentation.api.dependencies import (
    AuthService,
    CurrentPrincipal,
    DBSession,
)
from taskapi.presentation.api.schemas.auth import (
    LoginRequest,
    PrincipalResponse,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from taskapi.presentation.api.schemas.common import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"model": ErrorResponse, "description": "Invalid input or weak password"},
        409: {"model": ErrorResponse, "description": "Email already registered"},
    },
)
async def register(
    request: RegisterRequest,
    auth_service: AuthService,
    session: DBSession,
) -> UserResponse:
    """
    Register a new account.

    The username is derived from the email address. Passwords need 8-128
    characters and at most 72 bytes once UTF-8 encoded.
    """
    try:
        user = await auth_service.register(
            email=request.email,  # type: ignore[arg-type]
            password=request.password,  # type: ignore[arg-type]
            name=request.name,  # type: ignore[arg-type]
        )
        await session.commit()
    except Exception:
        await session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    return UserResponse(
        id=user.id,
        username=user.username,
        name=user.name,
        email=user.email,
        phone_number=user.phone_number,
        address=user.address,
    )


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        400: {"model": ErrorResponse, "description": "Invalid credentials or disabled account"},
        503: {"model": ErrorResponse, "description": "User store unavailable"},
    },
)
async def login(
    request: LoginRequest,
    auth_service: AuthService,
    session: DBSession,
) -> TokenResponse:
    """
    Authenticate with email and password.

    Returns a bearer token to send as ``Authorization: Bearer <token>``.
    """
    try:
        result = await auth_service.login(
            email=request.email,  # type: ignore[arg-type]
            password=request.password,  # type: ignore[arg-type]
        )
        # Persist last_login_at
        await session.commit()
    except Exception:
        await session.rollback()
        raise

    return TokenResponse(token=result.token)


@router.get(
    "/me",
    summary="Get current user",
    responses={
        200: {"description": "The authenticated principal"},
        401: {"model": ErrorResponse, "description": "Not authenticated"},
    },
)
async def get_me(principal: CurrentPrincipal) -> PrincipalResponse:
    """Return the identity the bearer token resolves to."""
    return PrincipalResponse(
        id=principal.user_id,
        email=principal.email,
        username=principal.username,
        active=principal.active,
        verified=principal.verified,
    )
