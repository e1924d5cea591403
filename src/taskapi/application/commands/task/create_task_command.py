"""Create a task for the current user."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from taskapi.application.validation import validate_task_create
from taskapi.domain.task import Task, TaskRepository, TaskStatus

if TYPE_CHECKING:
    from taskapi.application.context import UserContext
    from taskapi.application.factories import RepositoryFactory

logger = logging.getLogger(__name__)


class CreateTaskCommand:
    """Create a task owned by the authenticated user."""

    def __init__(self, task_repository: TaskRepository, current_user: UserContext):
        self._task_repo = task_repository
        self._user_id = current_user.user_id

    @classmethod
    def from_factory(
        cls,
        factory: RepositoryFactory,
        current_user: UserContext,
    ) -> CreateTaskCommand:
        return cls(
            task_repository=factory.task_repository(),
            current_user=current_user,
        )

    async def execute(
        self,
        title: Optional[str],
        description: Optional[str] = None,
        status: Optional[str] = None,
    ) -> Task:
        validate_task_create(title, description, status).raise_if_invalid()

        task = Task.create(
            owner_id=self._user_id,
            title=(title or "").strip(),
            description=description,
            status=status or TaskStatus.OPEN,
        )
        saved = await self._task_repo.save(task)
        logger.info("Task %s created by %s", saved.id, self._user_id)
        return saved
