"""SQLAlchemy model for user authentication credentials.

This model stores password hashes and account status flags.
"""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from taskapi_auth.persistence.sqlalchemy.base import AuthBase


def _utc_now() -> datetime:
    return datetime.now(tz=timezone.utc)


class UserCredentialModel(AuthBase):
    """
    SQLAlchemy model for user authentication credentials.

    This stores password hashes and account flags separately from the
    main User model. Each user has at most one credential record.

    - active: login and token re-validation are refused when False
    - verified: informational only
    - last_login_at: audit trail for login activity

    Table: user_credentials
    """

    __tablename__ = "user_credentials"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    # No FK to stay decoupled from the user table
    user_id: Mapped[str] = mapped_column(
        String(36),
        unique=True,
        nullable=False,
        index=True,
    )

    # bcrypt format, 60 chars
    password_hash: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
    verified: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
        onupdate=_utc_now,
    )
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<UserCredentialModel(id={self.id}, user_id={self.user_id})>"
