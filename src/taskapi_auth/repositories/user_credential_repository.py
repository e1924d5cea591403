"""Abstract repository interface for user credentials.

This interface defines the contract for credential persistence.
Implementations can use SQLAlchemy or any other storage.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class UserCredentialData:
    """Immutable credential data returned by repository.

    The password hash never leaves the authentication boundary: it is not
    logged and not serialized to clients.
    """

    user_id: str
    password_hash: str
    active: bool
    verified: bool
    created_at: datetime
    updated_at: datetime
    last_login_at: datetime | None

    def __repr__(self) -> str:
        return (
            f"UserCredentialData(user_id={self.user_id!r}, "
            f"active={self.active}, verified={self.verified})"
        )


class UserCredentialRepository(ABC):
    """
    Abstract repository interface for user authentication credentials.

    Each user has exactly one credential record. It is created at
    registration, replaced on an explicit password change and only removed
    together with the user.

    Implementations must raise ``StoreUnavailableError`` when the backing
    store cannot be reached.
    """

    @abstractmethod
    async def save(self, user_id: UUID, password_hash: str) -> UserCredentialData:
        """
        Create or update credentials for a user.

        New records start active and unverified.

        Parameters
        ----------
        user_id
            The user's unique identifier
        password_hash
            The bcrypt password hash

        Returns
        -------
        The saved credential data
        """

    @abstractmethod
    async def find_by_user_id(self, user_id: UUID) -> UserCredentialData | None:
        """
        Find credentials by user ID.

        Parameters
        ----------
        user_id
            The user's unique identifier

        Returns
        -------
        Credential data if found, None otherwise
        """

    @abstractmethod
    async def update_last_login(self, user_id: UUID) -> None:
        """
        Update last login timestamp.

        Called after successful authentication.

        Parameters
        ----------
        user_id
            The user's unique identifier
        """

    @abstractmethod
    async def set_active(self, user_id: UUID, active: bool) -> bool:
        """
        Enable or disable login for a user.

        Parameters
        ----------
        user_id
            The user's unique identifier
        active
            New value of the active flag

        Returns
        -------
        True if the credential existed and was updated, False otherwise
        """
