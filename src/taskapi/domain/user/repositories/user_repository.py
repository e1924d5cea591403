"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union
from uuid import UUID

from taskapi.domain.user.aggregates.user import User
from taskapi.domain.user.value_objects.email import Email


class UserRepository(ABC):
    """Repository interface for User aggregates.

    Email lookups are case-insensitive: implementations compare the
    normalized (lowercase) form. Connectivity failures surface as
    ``StoreUnavailableError``.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UUID) -> Optional[User]:
        """
        Find a user by their ID.

        Parameters
        ----------
        user_id
            The user's unique identifier (UUID4)

        Returns
        -------
        User if found, None otherwise
        """

    @abstractmethod
    async def find_by_email(self, email: Union[str, Email]) -> Optional[User]:
        """
        Find a user by their email address.

        Parameters
        ----------
        email
            The user's email address (string or Email value object)

        Returns
        -------
        User if found, None otherwise
        """

    @abstractmethod
    async def exists_by_email(self, email: Union[str, Email]) -> bool:
        """
        Check if a user exists with the given email.

        Parameters
        ----------
        email
            The email address to check

        Returns
        -------
        True if user exists, False otherwise
        """

    @abstractmethod
    async def exists_by_username(self, username: str) -> bool:
        """
        Check if a username is already taken.

        Parameters
        ----------
        username
            The username to check

        Returns
        -------
        True if taken, False otherwise
        """

    @abstractmethod
    async def save(self, user: User) -> None:
        """
        Save or update a user.

        Parameters
        ----------
        user
            The user to save

        Raises
        ------
        UserAlreadyExistsError
            If email is already in use by another user
        """
