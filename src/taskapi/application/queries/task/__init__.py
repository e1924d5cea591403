from taskapi.application.queries.task.get_task_query import GetTaskQuery
from taskapi.application.queries.task.list_tasks_query import (
    ListTasksQuery,
    TaskListResult,
    parse_sort,
)

__all__ = ["GetTaskQuery", "ListTasksQuery", "TaskListResult", "parse_sort"]
