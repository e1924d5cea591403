"""API request and response schemas."""

from taskapi.presentation.api.schemas.auth import (
    LoginRequest,
    PrincipalResponse,
    RegisterRequest,
    TokenResponse,
    UserResponse,
)
from taskapi.presentation.api.schemas.common import (
    ApiResponse,
    ErrorResponse,
    HealthResponse,
)
from taskapi.presentation.api.schemas.tasks import (
    TaskCreateRequest,
    TaskPageResponse,
    TaskResponse,
    TaskUpdateRequest,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "PrincipalResponse",
    "RegisterRequest",
    "TaskCreateRequest",
    "TaskPageResponse",
    "TaskResponse",
    "TaskUpdateRequest",
    "TokenResponse",
    "UserResponse",
]
