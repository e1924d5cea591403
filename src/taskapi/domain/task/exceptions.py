"""Task domain exceptions."""

from taskapi.domain.shared.exceptions import EntityNotFoundError, ErrorCode


class TaskNotFoundError(EntityNotFoundError):
    """Raised when a task id does not resolve to a stored task."""

    def __init__(self, task_id: int) -> None:
        super().__init__(
            f"Task not found with id: {task_id}",
            code=ErrorCode.TASK_NOT_FOUND,
            details={"task_id": task_id},
        )
        self.task_id = task_id
