"""Query layer - read operations that never mutate state."""

from taskapi.application.queries.task import (
    GetTaskQuery,
    ListTasksQuery,
    TaskListResult,
)

__all__ = ["GetTaskQuery", "ListTasksQuery", "TaskListResult"]
