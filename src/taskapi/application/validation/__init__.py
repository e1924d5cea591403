"""Explicit input validators invoked at the top of each use case."""

from taskapi.application.validation.result import ValidationResult
from taskapi.application.validation.task_validation import (
    validate_task_create,
    validate_task_update,
)
from taskapi.application.validation.user_validation import (
    validate_login,
    validate_registration,
)

__all__ = [
    "ValidationResult",
    "validate_login",
    "validate_registration",
    "validate_task_create",
    "validate_task_update",
]
