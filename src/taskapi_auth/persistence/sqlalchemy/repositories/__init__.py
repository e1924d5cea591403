from taskapi_auth.persistence.sqlalchemy.repositories.user_credential_repository import (
    UserCredentialRepositorySQLAlchemy,
)

__all__ = ["UserCredentialRepositorySQLAlchemy"]
