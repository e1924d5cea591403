from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from taskapi.domain.shared.time import utc_now
from taskapi.domain.task.value_objects import TaskStatus


class Task:
    """
    Task aggregate root.

    A task belongs to exactly one user. The owner is fixed when the task is
    created from the authenticated principal and never reassigned.

    ``id`` is assigned by the store on first save. ``version`` is the
    optimistic concurrency counter maintained by the store; it is 0 until
    the task has been persisted.
    """

    def __init__(  # NOQA: PLR0913
        self,
        owner_id: UUID,
        title: str,
        description: Optional[str] = None,
        status: Union[str, TaskStatus] = TaskStatus.OPEN,
        id: Optional[int] = None,
        version: int = 0,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        self._owner_id = owner_id
        self._title = title
        self._description = description
        self._status = status if isinstance(status, TaskStatus) else TaskStatus.parse(status)
        self._id = id
        self._version = version
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or utc_now()

    @property
    def id(self) -> Optional[int]:
        return self._id

    @property
    def owner_id(self) -> UUID:
        return self._owner_id

    @property
    def title(self) -> str:
        return self._title

    @property
    def description(self) -> Optional[str]:
        return self._description

    @property
    def status(self) -> TaskStatus:
        return self._status

    @property
    def version(self) -> int:
        return self._version

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def is_owned_by(self, user_id: UUID) -> bool:
        return self._owner_id == user_id

    def update(
        self,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[Union[str, TaskStatus]] = None,
    ) -> None:
        # Only provided (non-None) values are updated; others are preserved.
        if title is not None:
            self._title = title
        if description is not None:
            self._description = description
        if status is not None:
            self._status = status if isinstance(status, TaskStatus) else TaskStatus.parse(status)
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        owner_id: UUID,
        title: str,
        description: Optional[str] = None,
        status: Union[str, TaskStatus] = TaskStatus.OPEN,
    ) -> "Task":
        return cls(owner_id=owner_id, title=title, description=description, status=status)

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: int,
        owner_id: UUID,
        title: str,
        description: Optional[str],
        status: str,
        version: int,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Task":
        return cls(
            owner_id=owner_id,
            title=title,
            description=description,
            status=status,
            id=id,
            version=version,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __repr__(self) -> str:
        return (
            f"Task(id={self._id}, owner_id={self._owner_id}, "
            f"status={self._status.value}, version={self._version})"
        )
