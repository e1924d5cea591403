from taskapi.infrastructure.persistence.sqlalchemy.repositories.factory import (
    SQLAlchemyRepositoryFactory,
)
from taskapi.infrastructure.persistence.sqlalchemy.repositories.task_repository import (
    TaskRepositorySQLAlchemy,
)
from taskapi.infrastructure.persistence.sqlalchemy.repositories.user_repository import (
    UserRepositorySQLAlchemy,
)

__all__ = [
    "SQLAlchemyRepositoryFactory",
    "TaskRepositorySQLAlchemy",
    "UserRepositorySQLAlchemy",
]
