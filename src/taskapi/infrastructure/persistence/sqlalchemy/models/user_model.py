"""SQLAlchemy model for User aggregate."""

from typing import Optional
from uuid import UUID

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from taskapi.infrastructure.persistence.sqlalchemy.models.base import Base, TimestampMixin


class UserModel(Base, TimestampMixin):
    """
    SQLAlchemy model for persisting User aggregates.

    - email is unique and stored lowercase
    - username is unique, derived from the email at registration
    - credentials live in ``user_credentials``, keyed by the user id

    Table: users
    """

    __tablename__ = "users"

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    username: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    address: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    def __repr__(self) -> str:
        return f"<UserModel(id={self.id}, username={self.username})>"
