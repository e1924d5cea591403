"""taskapi auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of the task domain. It handles:
- Password hashing (bcrypt)
- JWT token creation and verification
- User credential storage (with pluggable persistence)

Architecture:
    taskapi_auth/
    ├── services/           # Pure logic (password hashing, JWT, signing key)
    ├── repositories/       # Abstract interfaces
    ├── persistence/        # Implementations by technology
    │   └── sqlalchemy/     # SQLAlchemy implementation
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from taskapi_auth import PasswordHashingService, JWTService

    from taskapi_auth.persistence.sqlalchemy import (
        UserCredentialRepositorySQLAlchemy,
        AuthBase,
    )
"""

from taskapi_auth.exceptions import AuthError, StoreUnavailableError
from taskapi_auth.repositories import UserCredentialData, UserCredentialRepository
from taskapi_auth.schemas import TokenFailure, TokenPayload, TokenVerification
from taskapi_auth.services import JWTService, PasswordHashingService, load_signing_key

__all__ = [
    # Services
    "JWTService",
    "PasswordHashingService",
    "load_signing_key",
    # Repositories (interfaces)
    "UserCredentialData",
    "UserCredentialRepository",
    # Schemas
    "TokenFailure",
    "TokenPayload",
    "TokenVerification",
    # Exceptions
    "AuthError",
    "StoreUnavailableError",
]
