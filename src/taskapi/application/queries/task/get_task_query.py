"""Query to fetch a single task of the current user."""

from __future__ import annotations

from typing import TYPE_CHECKING

from taskapi.application.services.ownership import require_owner
from taskapi.domain.task import Task, TaskNotFoundError, TaskRepository

if TYPE_CHECKING:
    from taskapi.application.context import UserContext
    from taskapi.application.factories import RepositoryFactory


class GetTaskQuery:
    """Fetch one task; other users' tasks are denied, not hidden."""

    def __init__(self, task_repository: TaskRepository, current_user: UserContext):
        self._task_repo = task_repository
        self._current_user = current_user

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        current_user: UserContext,
    ) -> GetTaskQuery:
        return cls(
            task_repository=factory.task_repository(),
            current_user=current_user,
        )

    async def execute(self, task_id: int) -> Task:
        task = await self._task_repo.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)
        require_owner(self._current_user, task.owner_id)
        return task
