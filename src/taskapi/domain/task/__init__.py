"""Task domain - user-owned work items.

Design notes:
- Task ID is an integer assigned by the store
- Ownership is set once at creation and never reassigned
- Concurrent updates are detected through the version counter
"""

from taskapi.domain.task.aggregates import Task
from taskapi.domain.task.exceptions import TaskNotFoundError
from taskapi.domain.task.repositories import TaskPage, TaskRepository, TaskSortField
from taskapi.domain.task.value_objects import TaskStatus

__all__ = [
    "Task",
    "TaskNotFoundError",
    "TaskPage",
    "TaskRepository",
    "TaskSortField",
    "TaskStatus",
]
