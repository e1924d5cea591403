"""Username derivation from an email address."""

import re

from taskapi.domain.user.value_objects.email import Email

_DISALLOWED = re.compile(r"[^a-zA-Z0-9._-]")
MIN_USERNAME_LENGTH = 3
MAX_USERNAME_LENGTH = 50


def username_from_email(email: Email) -> str:
    """Build a URL-safe username from the local part of an email.

    Characters outside ``[a-zA-Z0-9._-]`` are dropped, short results are
    padded with ``123`` and the result is capped at 50 characters.
    """
    username = _DISALLOWED.sub("", email.local_part)
    if len(username) < MIN_USERNAME_LENGTH:
        username = f"{username}123"
    return username[:MAX_USERNAME_LENGTH].lower()


def with_suffix(username: str, suffix: int) -> str:
    """Append a numeric suffix while staying within the length limit."""
    tail = str(suffix)
    return f"{username[: MAX_USERNAME_LENGTH - len(tail)]}{tail}"
