"""Email value object.

Provides validated, normalized email addresses for user identification.
"""

import re
from dataclasses import dataclass

from taskapi.domain.user.exceptions import InvalidEmailError

EMAIL_PATTERN = re.compile(
    r"^[a-zA-Z0-9_+&*-]+(?:\.[a-zA-Z0-9_+&*-]+)*@(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,7}$",
)
MAX_EMAIL_LENGTH = 255


def normalize_email(value: str) -> str:
    """Lowercase and trim an email for lookups and storage."""
    return value.strip().lower()


def mask_email(value: str | None) -> str:
    """Mask an email for log output: ``jdoe@example.com`` -> ``j***e@example.com``."""
    if not value or "@" not in value:
        return "***@***.***"

    local, domain = value.split("@", 1)
    if len(local) > 2:
        local = f"{local[0]}***{local[-1]}"
    else:
        local = "***"
    return f"{local}@{domain}"


@dataclass(frozen=True)
class Email:
    """Value object representing a validated email address."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            msg = "Email cannot be empty"
            raise InvalidEmailError(msg)

        normalized = normalize_email(self.value)

        if len(normalized) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(normalized):
            msg = f"Invalid email format: {self.value}"
            raise InvalidEmailError(msg)

        # Replace value with normalized version (frozen dataclass workaround)
        object.__setattr__(self, "value", normalized)

    @property
    def local_part(self) -> str:
        return self.value.split("@", 1)[0]

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email('{self.value}')"
