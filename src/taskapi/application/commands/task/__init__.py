from taskapi.application.commands.task.create_task_command import CreateTaskCommand
from taskapi.application.commands.task.delete_task_command import DeleteTaskCommand
from taskapi.application.commands.task.update_task_command import UpdateTaskCommand

__all__ = ["CreateTaskCommand", "DeleteTaskCommand", "UpdateTaskCommand"]
