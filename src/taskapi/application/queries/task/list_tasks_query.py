"""Query for paginated listing of the current user's tasks."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from taskapi.domain.shared.exceptions import ValidationError
from taskapi.domain.task import Task, TaskRepository, TaskSortField

if TYPE_CHECKING:
    from taskapi.application.context import UserContext
    from taskapi.application.factories import RepositoryFactory

MAX_PAGE_SIZE = 100

# Accepts both the API spelling (createdAt) and the column name (created_at)
_SORT_ALIASES: dict[str, TaskSortField] = {
    "createdat": TaskSortField.CREATED_AT,
    "created_at": TaskSortField.CREATED_AT,
    "updatedat": TaskSortField.UPDATED_AT,
    "updated_at": TaskSortField.UPDATED_AT,
    "title": TaskSortField.TITLE,
    "status": TaskSortField.STATUS,
}


@dataclass(frozen=True)
class TaskListResult:
    """One page of tasks with paging metadata."""

    content: list[Task]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        if self.total_elements == 0:
            return 0
        return math.ceil(self.total_elements / self.size)


def parse_sort(sort_by: str, sort_dir: str) -> tuple[TaskSortField, bool]:
    """Resolve sort parameters to a column and a descending flag.

    Raises
    ------
    ValidationError
        If the column or direction is unknown
    """
    field_errors: dict[str, str] = {}
    sort_field = _SORT_ALIASES.get(sort_by.strip().lower())
    if sort_field is None:
        field_errors["sortBy"] = f"Cannot sort by: {sort_by}"

    direction = sort_dir.strip().lower()
    if direction not in ("asc", "desc"):
        field_errors["sortDir"] = "Sort direction must be 'asc' or 'desc'"

    if sort_field is None or field_errors:
        raise ValidationError(
            next(iter(field_errors.values())),
            field_errors=field_errors,
        )
    return sort_field, direction == "desc"


class ListTasksQuery:
    """List the authenticated user's tasks, newest first by default."""

    def __init__(self, task_repository: TaskRepository, current_user: UserContext):
        self._task_repo = task_repository
        self._user_id = current_user.user_id

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        current_user: UserContext,
    ) -> ListTasksQuery:
        return cls(
            task_repository=factory.task_repository(),
            current_user=current_user,
        )

    async def execute(
        self,
        page: int = 0,
        size: int = 10,
        sort_by: str = "createdAt",
        sort_dir: str = "desc",
    ) -> TaskListResult:
        if page < 0:
            raise ValidationError(
                "Page index must not be negative",
                field_errors={"page": "Page index must not be negative"},
            )
        if not 1 <= size <= MAX_PAGE_SIZE:
            msg = f"Page size must be between 1 and {MAX_PAGE_SIZE}"
            raise ValidationError(msg, field_errors={"size": msg})

        sort_field, descending = parse_sort(sort_by, sort_dir)

        result = await self._task_repo.list_by_owner(
            owner_id=self._user_id,
            page=page,
            size=size,
            sort_by=sort_field,
            descending=descending,
        )
        return TaskListResult(
            content=result.items,
            page=page,
            size=size,
            total_elements=result.total,
        )
