"""SQLAlchemy implementation for taskapi_auth persistence.

Provides:
- AuthBase: Declarative base for auth models
- UserCredentialModel: SQLAlchemy model for credentials
- UserCredentialRepositorySQLAlchemy: Repository implementation
- store_errors: maps connectivity failures to StoreUnavailableError

Examples
--------
# Create auth tables next to the application's own:
from taskapi_auth.persistence.sqlalchemy import AuthBase
await conn.run_sync(AuthBase.metadata.create_all)
"""

from taskapi_auth.persistence.sqlalchemy.base import AuthBase
from taskapi_auth.persistence.sqlalchemy.errors import store_errors
from taskapi_auth.persistence.sqlalchemy.models import UserCredentialModel
from taskapi_auth.persistence.sqlalchemy.repositories import (
    UserCredentialRepositorySQLAlchemy,
)

__all__ = [
    "AuthBase",
    "UserCredentialModel",
    "UserCredentialRepositorySQLAlchemy",
    "store_errors",
]
