"""Validation of task create and update input."""

import unicodedata

from taskapi.application.validation.result import ValidationResult
from taskapi.application.validation.text_rules import (
    find_unsafe_markup,
    special_character_count,
)
from taskapi.domain.task.value_objects import TaskStatus

MIN_TITLE_LENGTH = 3
MAX_TITLE_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500

# Letters, numbers, punctuation and separators
_TITLE_CATEGORIES = ("L", "N", "P", "Z")


def _check_title(result: ValidationResult, title: str | None) -> None:
    if title is None or not title.strip():
        result.add("title", "Title is required and cannot be empty")
        return

    title = title.strip()
    if len(title) < MIN_TITLE_LENGTH:
        result.add("title", f"Title must be at least {MIN_TITLE_LENGTH} characters long")
    elif len(title) > MAX_TITLE_LENGTH:
        result.add("title", f"Title cannot exceed {MAX_TITLE_LENGTH} characters")
    elif unsafe := find_unsafe_markup(title, "title"):
        result.add("title", unsafe)
    elif any(unicodedata.category(ch)[0] not in _TITLE_CATEGORIES for ch in title):
        result.add(
            "title",
            "Title contains invalid characters. Only letters, numbers, "
            "punctuation, and spaces are allowed",
        )
    elif special_character_count(title) > len(title) // 2:
        result.add("title", "Title contains too many special characters")


def _check_description(result: ValidationResult, description: str | None) -> None:
    if description is None or not description.strip():
        return

    if len(description) > MAX_DESCRIPTION_LENGTH:
        result.add(
            "description",
            f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters",
        )
    elif unsafe := find_unsafe_markup(description, "description"):
        result.add("description", unsafe)
    elif special_character_count(description.strip()) > len(description.strip()) // 2:
        result.add("description", "Description contains too many special characters")


def _check_status(result: ValidationResult, status: str | None) -> None:
    if status is None or not status.strip():
        result.add("status", "Task status is required")
    elif not TaskStatus.is_valid(status):
        allowed = ", ".join(s.value for s in TaskStatus)
        result.add("status", f"Invalid task status: {status}. Valid statuses are: {allowed}")


def validate_task_create(
    title: str | None,
    description: str | None,
    status: str | None,
) -> ValidationResult:
    """Validate the fields of a new task.

    The description is optional; title and status are required.
    """
    result = ValidationResult()
    _check_title(result, title)
    _check_description(result, description)
    _check_status(result, status)
    return result


def validate_task_update(
    title: str | None,
    description: str | None,
    status: str | None,
) -> ValidationResult:
    """Validate a partial task update.

    Only fields that are present are checked, using the creation rules.
    """
    result = ValidationResult()
    if title is not None:
        _check_title(result, title)
    if description is not None:
        _check_description(result, description)
    if status is not None:
        _check_status(result, status)
    return result
