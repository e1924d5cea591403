"""Validation of registration and login input."""

import logging

from taskapi.application.validation.result import ValidationResult
from taskapi.application.validation.text_rules import find_unsafe_markup
from taskapi.domain.shared.exceptions import ErrorCode
from taskapi.domain.user.value_objects.email import (
    EMAIL_PATTERN,
    MAX_EMAIL_LENGTH,
    mask_email,
    normalize_email,
)

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
MAX_PASSWORD_LENGTH = 128
MAX_PASSWORD_BYTES = 72  # bcrypt input limit
MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 100
MAX_NAME_WORDS = 10


def _check_email(result: ValidationResult, email: str | None) -> None:
    if email is None or not email.strip():
        result.add("email", "Email is required")
        return

    normalized = normalize_email(email)
    if len(normalized) > MAX_EMAIL_LENGTH:
        result.add("email", f"Email cannot exceed {MAX_EMAIL_LENGTH} characters")
    elif not EMAIL_PATTERN.match(normalized):
        result.add("email", "Invalid email format")
    elif unsafe := find_unsafe_markup(normalized, "email"):
        result.add("email", unsafe)


def _check_password_strength(result: ValidationResult, password: str | None) -> None:
    if not password:
        result.add("password", "Password is required")
        return

    weak = ErrorCode.WEAK_PASSWORD
    if len(password) < MIN_PASSWORD_LENGTH:
        result.add(
            "password",
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
            weak,
        )
    elif len(password) > MAX_PASSWORD_LENGTH:
        result.add(
            "password",
            f"Password cannot exceed {MAX_PASSWORD_LENGTH} characters",
            weak,
        )
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        result.add(
            "password",
            f"Password cannot exceed {MAX_PASSWORD_BYTES} bytes",
            weak,
        )


def _is_name_character(ch: str) -> bool:
    return ch.isalpha() or ch.isspace() or ch in "-'"


def _check_name(result: ValidationResult, name: str | None) -> None:
    if name is None or not name.strip():
        result.add("name", "Name is required")
        return

    name = name.strip()
    if len(name) < MIN_NAME_LENGTH:
        result.add("name", f"Name must be at least {MIN_NAME_LENGTH} characters long")
    elif len(name) > MAX_NAME_LENGTH:
        result.add("name", f"Name cannot exceed {MAX_NAME_LENGTH} characters")
    elif unsafe := find_unsafe_markup(name, "name"):
        result.add("name", unsafe)
    elif not all(_is_name_character(ch) for ch in name):
        result.add(
            "name",
            "Name can only contain letters, spaces, hyphens, and apostrophes",
        )
    elif len(name.split()) > MAX_NAME_WORDS:
        result.add("name", f"Name cannot contain more than {MAX_NAME_WORDS} words")
    elif sum(1 for ch in name if ch in "-'") > len(name) // 3:
        result.add("name", "Name contains too many special characters")


def validate_registration(
    email: str | None,
    password: str | None,
    name: str | None,
) -> ValidationResult:
    """Validate a registration request.

    Parameters
    ----------
    email
        Login email, compared case-insensitively
    password
        Plaintext password, 8-128 characters and at most 72 bytes
    name
        Display name, 2-100 letters, spaces, hyphens or apostrophes

    Returns
    -------
    ValidationResult with one entry per rejected field
    """
    result = ValidationResult()
    _check_email(result, email)
    _check_password_strength(result, password)
    _check_name(result, name)

    if not result.is_valid:
        logger.debug(
            "Registration input rejected for %s: %s",
            mask_email(email),
            sorted(result.field_errors),
        )
    return result


def validate_login(email: str | None, password: str | None) -> ValidationResult:
    """Validate the shape of a login request.

    Password strength is not checked here; a wrong password is reported
    by the authenticator as invalid credentials.
    """
    result = ValidationResult()
    _check_email(result, email)

    if not password:
        result.add("password", "Password is required")
    elif len(password) > MAX_PASSWORD_LENGTH:
        result.add("password", "Password is too long")

    return result
