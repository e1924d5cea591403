"""Task schemas for request/response models."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from taskapi.domain.task import Task
from taskapi.presentation.api.schemas.common import CamelModel


class TaskCreateRequest(BaseModel):
    """Request schema for creating a task."""

    title: str | None = Field(default=None, description="Title (3-100 characters)")
    description: str | None = Field(
        default=None,
        description="Optional description (up to 500 characters)",
    )
    status: str | None = Field(default=None, description="OPEN or DONE")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Write release notes",
                "description": "Summarize the changes since 1.2",
                "status": "OPEN",
            },
        },
    )


class TaskUpdateRequest(BaseModel):
    """Request schema for a partial task update.

    Omitted fields keep their value. Send ``version`` to reject the update
    if someone else changed the task in the meantime.
    """

    title: str | None = None
    description: str | None = None
    status: str | None = None
    version: int | None = Field(default=None, description="Last version seen")


class TaskResponse(CamelModel):
    """A stored task."""

    id: int
    owner_id: UUID
    title: str
    description: str | None
    status: str
    version: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, task: Task) -> "TaskResponse":
        return cls(
            id=task.id,  # type: ignore[arg-type]
            owner_id=task.owner_id,
            title=task.title,
            description=task.description,
            status=task.status.value,
            version=task.version,
            created_at=task.created_at,
            updated_at=task.updated_at,
        )


class TaskPageResponse(CamelModel):
    """One page of tasks."""

    content: list[TaskResponse]
    page: int
    size: int
    total_elements: int
    total_pages: int
