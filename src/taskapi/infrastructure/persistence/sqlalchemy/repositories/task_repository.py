"""SQLAlchemy implementation of TaskRepository."""

import logging
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from taskapi.domain.shared.exceptions import ConcurrencyError
from taskapi.domain.shared.time import ensure_tz_aware
from taskapi.domain.task import (
    Task,
    TaskNotFoundError,
    TaskPage,
    TaskRepository,
    TaskSortField,
)
from taskapi.infrastructure.persistence.sqlalchemy.models import TaskModel
from taskapi_auth.persistence.sqlalchemy import store_errors

logger = logging.getLogger(__name__)

_SORT_COLUMNS = {
    TaskSortField.CREATED_AT: TaskModel.created_at,
    TaskSortField.UPDATED_AT: TaskModel.updated_at,
    TaskSortField.TITLE: TaskModel.title,
    TaskSortField.STATUS: TaskModel.status,
}


class TaskRepositorySQLAlchemy(TaskRepository):
    """SQLAlchemy implementation of the TaskRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, task_id: int) -> Optional[Task]:
        model = await self._find_model_by_id(task_id)
        return self._map_to_domain(model) if model else None

    async def save(self, task: Task) -> Task:
        if task.id is None:
            model = self._map_to_model(task)
            self._session.add(model)
            with store_errors("task insert"):
                await self._session.flush()
            logger.debug("Inserted task: %s", model.id)
            return self._map_to_domain(model)

        model = await self._find_model_by_id(task.id)
        if model is None:
            raise TaskNotFoundError(task.id)
        if model.version != task.version:
            raise ConcurrencyError(
                details={"task_id": task.id, "stored_version": model.version},
            )

        model.title = task.title
        model.description = task.description
        model.status = task.status.value
        model.updated_at = task.updated_at

        try:
            with store_errors("task update"):
                await self._session.flush()
        except StaleDataError as e:
            raise ConcurrencyError(details={"task_id": task.id}) from e

        logger.debug("Updated task %s to version %s", model.id, model.version)
        return self._map_to_domain(model)

    async def delete(self, task: Task) -> None:
        if task.id is None:
            return
        model = await self._find_model_by_id(task.id)
        if model is None:
            return

        try:
            await self._session.delete(model)
            with store_errors("task delete"):
                await self._session.flush()
        except StaleDataError as e:
            raise ConcurrencyError(details={"task_id": task.id}) from e

    async def list_by_owner(
        self,
        owner_id: UUID,
        page: int,
        size: int,
        sort_by: TaskSortField = TaskSortField.CREATED_AT,
        descending: bool = True,
    ) -> TaskPage:
        column = _SORT_COLUMNS[sort_by]
        order = column.desc() if descending else column.asc()
        # id as tie-breaker keeps pages stable
        tie_breaker = TaskModel.id.desc() if descending else TaskModel.id.asc()

        count_stmt = (
            select(func.count())
            .select_from(TaskModel)
            .where(TaskModel.owner_id == owner_id)
        )
        page_stmt = (
            select(TaskModel)
            .where(TaskModel.owner_id == owner_id)
            .order_by(order, tie_breaker)
            .offset(page * size)
            .limit(size)
        )

        with store_errors("task listing"):
            total = (await self._session.execute(count_stmt)).scalar_one()
            models = (await self._session.execute(page_stmt)).scalars().all()

        return TaskPage(items=[self._map_to_domain(m) for m in models], total=total)

    async def _find_model_by_id(self, task_id: int) -> Optional[TaskModel]:
        stmt = select(TaskModel).where(TaskModel.id == task_id)
        with store_errors("task lookup"):
            result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: TaskModel) -> Task:
        return Task.reconstitute(
            id=model.id,
            owner_id=model.owner_id,
            title=model.title,
            description=model.description,
            status=model.status,
            version=model.version,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, task: Task) -> TaskModel:
        return TaskModel(
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )
