"""SQLAlchemy models for persistence layer."""

from taskapi.infrastructure.persistence.sqlalchemy.models.base import Base
from taskapi.infrastructure.persistence.sqlalchemy.models.task_model import TaskModel
from taskapi.infrastructure.persistence.sqlalchemy.models.user_model import UserModel

__all__ = [
    "Base",
    "TaskModel",
    "UserModel",
]
