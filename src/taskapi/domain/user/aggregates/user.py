from datetime import datetime
from typing import Optional, Union
from uuid import UUID, uuid4

from taskapi.domain.shared.time import utc_now
from taskapi.domain.user.value_objects.email import Email


class User:
    """
    User aggregate root.

    Holds the profile of an account. Each user is identified by a random
    UUID generated at creation time; the email is the unique login key and
    the username is derived from it once at registration.

    Credentials and account status live in the credential store, not here.
    """

    def __init__(  # NOQA: PLR0913
        self,
        email: Union[str, Email],
        username: str,
        name: str,
        phone_number: Optional[str] = None,
        address: Optional[str] = None,
        id: Optional[UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._email = email if isinstance(email, Email) else Email(email)
        self._username = username
        self._name = name
        self._phone_number = phone_number
        self._address = address
        self._id = id if id is not None else uuid4()
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> UUID:
        return self._id

    @property
    def email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def username(self) -> str:
        return self._username

    @property
    def name(self) -> str:
        return self._name

    @property
    def phone_number(self) -> Optional[str]:
        return self._phone_number

    @property
    def address(self) -> Optional[str]:
        return self._address

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    @classmethod
    def create(
        cls,
        email: Union[str, Email],
        username: str,
        name: str,
    ) -> "User":
        return cls(email=email, username=username, name=name.strip())

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: UUID,
        email: str,
        username: str,
        name: str,
        phone_number: Optional[str],
        address: Optional[str],
        created_at: datetime,
        updated_at: datetime,
    ) -> "User":
        return cls(
            email=email,
            username=username,
            name=name,
            phone_number=phone_number,
            address=address,
            id=id,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, User):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return f"User(id={self._id}, email={self.email!r}, username={self._username!r})"
