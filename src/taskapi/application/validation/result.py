"""Structured outcome of an input validation pass."""

from __future__ import annotations

from dataclasses import dataclass, field

from taskapi.domain.shared.exceptions import ErrorCode, ValidationError


@dataclass
class ValidationResult:
    """Collects field errors in the order they were found.

    The error code of the whole result is the code of the first error,
    so a request with a malformed email and a short password reports
    VALIDATION_FAILED, while one with only a short password reports
    WEAK_PASSWORD.
    """

    field_errors: dict[str, str] = field(default_factory=dict)
    code: ErrorCode | None = None

    @property
    def is_valid(self) -> bool:
        return not self.field_errors

    def add(
        self,
        field_name: str,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
    ) -> None:
        # Keep only the first problem per field
        if field_name in self.field_errors:
            return
        self.field_errors[field_name] = message
        if self.code is None:
            self.code = code

    def raise_if_invalid(self) -> None:
        """Raise ValidationError carrying every field error.

        Raises
        ------
        ValidationError
            If at least one field error was recorded
        """
        if self.is_valid:
            return
        first_message = next(iter(self.field_errors.values()))
        raise ValidationError(
            first_message,
            code=self.code or ErrorCode.VALIDATION_FAILED,
            field_errors=dict(self.field_errors),
        )
