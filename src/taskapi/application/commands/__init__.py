"""Command layer - write operations that mutate state.

Commands represent user intentions to change system state. They validate
input first, then load, authorize and change aggregates through the
repositories. Commit and rollback stay with the presentation layer.
"""

from taskapi.application.commands.task import (
    CreateTaskCommand,
    DeleteTaskCommand,
    UpdateTaskCommand,
)

__all__ = ["CreateTaskCommand", "DeleteTaskCommand", "UpdateTaskCommand"]
