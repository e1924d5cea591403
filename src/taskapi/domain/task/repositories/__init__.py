from taskapi.domain.task.repositories.task_repository import (
    TaskPage,
    TaskRepository,
    TaskSortField,
)

__all__ = ["TaskPage", "TaskRepository", "TaskSortField"]
