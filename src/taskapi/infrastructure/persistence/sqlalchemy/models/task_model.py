"""SQLAlchemy model for Task aggregate."""

from typing import Optional
from uuid import UUID

from sqlalchemy import ForeignKey, Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from taskapi.infrastructure.persistence.sqlalchemy.models.base import Base, TimestampMixin


class TaskModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting Task aggregates.

    ``version`` is SQLAlchemy's version counter: every UPDATE and DELETE
    is qualified with the version that was loaded, and a zero row count
    raises StaleDataError.

    Table: tasks
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    owner_id: Mapped[UUID] = mapped_column(
        Uuid,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False)
    version: Mapped[int] = mapped_column(Integer, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def __repr__(self) -> str:
        return f"<TaskModel(id={self.id}, owner_id={self.owner_id}, version={self.version})>"
