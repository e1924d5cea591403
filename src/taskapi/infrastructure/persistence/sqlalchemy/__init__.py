"""SQLAlchemy persistence for users and tasks."""

from taskapi.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from taskapi.infrastructure.persistence.sqlalchemy.models import (
    Base,
    TaskModel,
    UserModel,
)
from taskapi.infrastructure.persistence.sqlalchemy.repositories import (
    SQLAlchemyRepositoryFactory,
    TaskRepositorySQLAlchemy,
    UserRepositorySQLAlchemy,
)

__all__ = [
    "Base",
    "SQLAlchemyRepositoryFactory",
    "TaskModel",
    "TaskRepositorySQLAlchemy",
    "UserModel",
    "UserRepositorySQLAlchemy",
    "create_tables",
    "drop_tables",
]
