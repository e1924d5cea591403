from taskapi.domain.task.value_objects.task_status import TaskStatus

__all__ = ["TaskStatus"]
