"""Update task fields."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from taskapi.application.services.ownership import require_owner
from taskapi.application.validation import validate_task_update
from taskapi.domain.shared.exceptions import ConcurrencyError
from taskapi.domain.task import Task, TaskNotFoundError, TaskRepository

if TYPE_CHECKING:
    from taskapi.application.context import UserContext
    from taskapi.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class UpdateTaskCommand:
    """Partially update a task owned by the current user.

    Fields left as None keep their stored value. When the caller sends the
    version it last saw, a mismatch is reported as a concurrency conflict
    instead of silently overwriting a newer change.
    """

    def __init__(self, task_repository: TaskRepository, current_user: UserContext):
        self._task_repo = task_repository
        self._current_user = current_user

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        current_user: UserContext,
    ) -> UpdateTaskCommand:
        return cls(
            task_repository=factory.task_repository(),
            current_user=current_user,
        )

    async def execute(  # noqa: PLR0913
        self,
        task_id: int,
        title: Optional[str] = None,
        description: Optional[str] = None,
        status: Optional[str] = None,
        expected_version: Optional[int] = None,
    ) -> Task:
        validate_task_update(title, description, status).raise_if_invalid()

        task = await self._task_repo.find_by_id(task_id)
        if task is None:
            raise TaskNotFoundError(task_id)

        require_owner(self._current_user, task.owner_id)

        if expected_version is not None and expected_version != task.version:
            raise ConcurrencyError(
                details={
                    "task_id": task_id,
                    "expected_version": expected_version,
                    "current_version": task.version,
                },
            )

        task.update(
            title=title.strip() if title is not None else None,
            description=description,
            status=status,
        )
        saved = await self._task_repo.save(task)
        logger.info("Task %s updated to version %s", saved.id, saved.version)
        return saved
