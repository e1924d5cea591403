"""Common schemas shared across API endpoints."""

from datetime import UTC, datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


def _utc_now() -> datetime:
    """Return current UTC time (timezone-aware)."""
    return datetime.now(UTC)


class CamelModel(BaseModel):
    """Base for response bodies serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(BaseModel, Generic[T]):
    """Envelope for task endpoints: a human-readable message plus the payload."""

    message: str = Field(..., description="Outcome of the operation")
    data: T | None = Field(default=None, description="Operation result")


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    detail: str = Field(..., description="Error message")
    code: str = Field(..., description="Error code for programmatic handling")
    status: int = Field(..., description="HTTP status code")
    path: str = Field(..., description="Request path")
    timestamp: datetime = Field(
        default_factory=_utc_now,
        description="When the error occurred",
    )
    field_errors: dict[str, str] | None = Field(
        default=None,
        description="Per-field validation messages",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "detail": "Task not found with id: 999",
                "code": "TASK_NOT_FOUND",
                "status": 404,
                "path": "/api/v1/tasks/999",
                "timestamp": "2024-01-15T10:30:00Z",
            },
        },
    )


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(..., description="Health status")
    version: str = Field(..., description="API version")
