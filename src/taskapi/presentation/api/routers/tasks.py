"""Tasks router for the authenticated user's tasks."""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, status

from taskapi.application.commands.task import (
    CreateTaskCommand,
    DeleteTaskCommand,
    UpdateTaskCommand,
)
from taskapi.application.queries.task import GetTaskQuery, ListTasksQuery
from taskapi.presentation.api.dependencies import CurrentPrincipal, RepoFactory
from taskapi.presentation.api.schemas.common import ApiResponse, ErrorResponse
from taskapi.presentation.api.schemas.tasks import (
    TaskCreateRequest,
    TaskPageResponse,
    TaskResponse,
    TaskUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

# Type aliases for query parameters using Annotated (modern FastAPI pattern)
# Note: Don't set default in Query() when using Annotated - set it with = instead
PageParam = Annotated[int, Query(description="Zero-based page index")]
SizeParam = Annotated[int, Query(description="Page size (1-100)")]
SortByParam = Annotated[
    str,
    Query(alias="sortBy", description="createdAt, updatedAt, title or status"),
]
SortDirParam = Annotated[str, Query(alias="sortDir", description="asc or desc")]

_NOT_YOURS = {"model": ErrorResponse, "description": "Task belongs to another user"}
_NOT_FOUND = {"model": ErrorResponse, "description": "Task not found"}


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    responses={
        201: {"description": "Task created"},
        400: {"model": ErrorResponse, "description": "Invalid input"},
    },
)
async def create_task(
    request: TaskCreateRequest,
    principal: CurrentPrincipal,
    factory: RepoFactory,
) -> ApiResponse[TaskResponse]:
    """Create a task owned by the caller."""
    command = CreateTaskCommand.from_factory(factory, principal)

    try:
        task = await command.execute(
            title=request.title,
            description=request.description,
            status=request.status,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        # Let the global exception handler process domain exceptions
        raise

    return ApiResponse(
        message="Task Created Successfully",
        data=TaskResponse.from_domain(task),
    )


@router.get(
    "",
    summary="List tasks",
    responses={
        200: {"description": "One page of the caller's tasks"},
        400: {"model": ErrorResponse, "description": "Invalid paging or sorting"},
    },
)
async def list_tasks(  # noqa: PLR0913
    principal: CurrentPrincipal,
    factory: RepoFactory,
    page: PageParam = 0,
    size: SizeParam = 10,
    sort_by: SortByParam = "createdAt",
    sort_dir: SortDirParam = "desc",
) -> ApiResponse[TaskPageResponse]:
    """List the caller's tasks, newest first unless sorted otherwise."""
    query = ListTasksQuery.from_factory(factory, principal)
    result = await query.execute(page=page, size=size, sort_by=sort_by, sort_dir=sort_dir)

    return ApiResponse(
        message="Fetched Successfully",
        data=TaskPageResponse(
            content=[TaskResponse.from_domain(t) for t in result.content],
            page=result.page,
            size=result.size,
            total_elements=result.total_elements,
            total_pages=result.total_pages,
        ),
    )


@router.get(
    "/{task_id}",
    summary="Get task",
    responses={
        200: {"description": "The task"},
        403: _NOT_YOURS,
        404: _NOT_FOUND,
    },
)
async def get_task(
    task_id: int,
    principal: CurrentPrincipal,
    factory: RepoFactory,
) -> ApiResponse[TaskResponse]:
    query = GetTaskQuery.from_factory(factory, principal)
    task = await query.execute(task_id)
    return ApiResponse(
        message="Task Fetched Successfully",
        data=TaskResponse.from_domain(task),
    )


@router.put(
    "/{task_id}",
    summary="Update task",
    responses={
        200: {"description": "Task updated"},
        400: {"model": ErrorResponse, "description": "Invalid input"},
        403: _NOT_YOURS,
        404: _NOT_FOUND,
        409: {"model": ErrorResponse, "description": "Task changed concurrently"},
    },
)
async def update_task(
    task_id: int,
    request: TaskUpdateRequest,
    principal: CurrentPrincipal,
    factory: RepoFactory,
) -> ApiResponse[TaskResponse]:
    """
    Update the given fields of a task.

    Include ``version`` from the last read to get a 409 instead of
    overwriting a concurrent change.
    """
    command = UpdateTaskCommand.from_factory(factory, principal)

    try:
        task = await command.execute(
            task_id=task_id,
            title=request.title,
            description=request.description,
            status=request.status,
            expected_version=request.version,
        )
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    return ApiResponse(
        message="Task Updated Successfully",
        data=TaskResponse.from_domain(task),
    )


@router.delete(
    "/{task_id}",
    summary="Delete task",
    responses={
        200: {"description": "Task deleted"},
        403: _NOT_YOURS,
        404: _NOT_FOUND,
    },
)
async def delete_task(
    task_id: int,
    principal: CurrentPrincipal,
    factory: RepoFactory,
) -> ApiResponse[None]:
    command = DeleteTaskCommand.from_factory(factory, principal)

    try:
        await command.execute(task_id)
        await factory.session.commit()
    except Exception:
        await factory.session.rollback()
        raise

    logger.info("Task deleted: %s", task_id)
    return ApiResponse(message="Task Deleted Successfully")
