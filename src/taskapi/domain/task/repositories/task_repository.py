"""Task repository interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Optional
from uuid import UUID

from taskapi.domain.task.aggregates.task import Task


class TaskSortField(str, Enum):
    """Columns a task listing can be ordered by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    STATUS = "status"


@dataclass(frozen=True)
class TaskPage:
    """One page of tasks plus the total number of matching tasks."""

    items: list[Task]
    total: int


class TaskRepository(ABC):
    """Repository interface for Task aggregates.

    Lookups by id are not scoped to an owner: callers load first, then
    check ownership, so "not found" and "not yours" stay distinguishable.
    """

    @abstractmethod
    async def find_by_id(self, task_id: int) -> Optional[Task]:
        """
        Find a task by its ID.

        Parameters
        ----------
        task_id
            The task's identifier

        Returns
        -------
        Task if found, None otherwise
        """

    @abstractmethod
    async def save(self, task: Task) -> Task:
        """
        Insert a new task or update an existing one.

        Parameters
        ----------
        task
            The task to persist

        Returns
        -------
        The stored task with its assigned id and current version

        Raises
        ------
        ConcurrencyError
            If the stored version no longer matches ``task.version``
        """

    @abstractmethod
    async def delete(self, task: Task) -> None:
        """
        Delete a task.

        Parameters
        ----------
        task
            The task to delete

        Raises
        ------
        ConcurrencyError
            If the task was modified since it was loaded
        """

    @abstractmethod
    async def list_by_owner(
        self,
        owner_id: UUID,
        page: int,
        size: int,
        sort_by: TaskSortField = TaskSortField.CREATED_AT,
        descending: bool = True,
    ) -> TaskPage:
        """
        List tasks owned by a user, one page at a time.

        Parameters
        ----------
        owner_id
            The owning user's identifier
        page
            Zero-based page index
        size
            Page size
        sort_by
            Column to order by
        descending
            Sort direction

        Returns
        -------
        TaskPage with the page items and the overall count
        """
