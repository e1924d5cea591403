"""Unit tests for task validation."""

import pytest

from taskapi.application.validation import validate_task_create, validate_task_update
from taskapi.domain.shared.exceptions import ErrorCode


class TestValidateTaskCreate:
    """Tests for task creation rules."""

    def test_valid_task(self):
        result = validate_task_create("Buy milk", "Two litres, semi-skimmed.", "OPEN")
        assert result.is_valid

    def test_description_is_optional(self):
        assert validate_task_create("Buy milk", None, "OPEN").is_valid

    def test_status_is_required(self):
        result = validate_task_create("Buy milk", None, None)

        assert result.field_errors == {"status": "Task status is required"}

    def test_unknown_status(self):
        result = validate_task_create("Buy milk", None, "ARCHIVED")

        assert "Valid statuses are: OPEN, DONE" in result.field_errors["status"]

    def test_status_is_case_insensitive(self):
        assert validate_task_create("Buy milk", None, "done").is_valid

    @pytest.mark.parametrize("title", [None, "", "   "])
    def test_missing_title(self, title):
        result = validate_task_create(title, None, "OPEN")

        assert result.field_errors["title"] == "Title is required and cannot be empty"

    def test_short_title(self):
        result = validate_task_create("ab", None, "OPEN")

        assert "at least 3" in result.field_errors["title"]

    def test_long_title(self):
        result = validate_task_create("a" * 101, None, "OPEN")

        assert "cannot exceed 100" in result.field_errors["title"]

    def test_title_with_script_is_rejected(self):
        result = validate_task_create("<script>alert(1)</script>", None, "OPEN")

        assert "dangerous content" in result.field_errors["title"]

    def test_encoded_markup_is_rejected(self):
        result = validate_task_create("%3Cb%3Ebold%3C/b%3E", None, "OPEN")

        assert "title" in result.field_errors

    def test_title_mostly_symbols_is_rejected(self):
        result = validate_task_create("a!!!!!", None, "OPEN")

        assert result.field_errors["title"] == "Title contains too many special characters"

    def test_title_with_control_characters_is_rejected(self):
        result = validate_task_create("Buy\x07milk", None, "OPEN")

        assert "invalid characters" in result.field_errors["title"]

    def test_sql_keywords_are_allowed(self):
        """Ordinary words such as 'update' or 'select' are valid titles."""
        result = validate_task_create("Select and update the drop list", None, "OPEN")

        assert result.is_valid

    def test_long_description(self):
        result = validate_task_create("Buy milk", "a" * 501, "OPEN")

        assert "cannot exceed 500" in result.field_errors["description"]

    def test_errors_use_validation_failed_code(self):
        result = validate_task_create("", None, None)

        assert result.code is ErrorCode.VALIDATION_FAILED


class TestValidateTaskUpdate:
    """Tests for partial update rules."""

    def test_empty_update_is_valid(self):
        assert validate_task_update(None, None, None).is_valid

    def test_only_present_fields_are_checked(self):
        result = validate_task_update(None, None, "DONE")
        assert result.is_valid

    def test_present_title_uses_creation_rules(self):
        result = validate_task_update("ab", None, None)

        assert "title" in result.field_errors

    def test_blank_status_is_rejected_when_present(self):
        result = validate_task_update(None, None, " ")

        assert "status" in result.field_errors
