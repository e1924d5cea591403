"""User domain - manages user identity and profile.

Design notes:
- User ID is a random UUID4 generated at creation (opaque, unpredictable)
- Email is the unique login key, always stored lowercase
- Username is derived from the email local part at registration
- Repository interface defined here, implementation in infrastructure
"""

from taskapi.domain.user.aggregates import User
from taskapi.domain.user.exceptions import (
    AccountDisabledError,
    InvalidCredentialsError,
    InvalidEmailError,
    UserAlreadyExistsError,
    UserNotFoundError,
)
from taskapi.domain.user.repositories import UserRepository
from taskapi.domain.user.value_objects import (
    MAX_EMAIL_LENGTH,
    Email,
    mask_email,
    normalize_email,
    username_from_email,
    with_suffix,
)

__all__ = [
    "MAX_EMAIL_LENGTH",
    "AccountDisabledError",
    "Email",
    "InvalidCredentialsError",
    "InvalidEmailError",
    "User",
    "UserAlreadyExistsError",
    "UserNotFoundError",
    "UserRepository",
    "mask_email",
    "normalize_email",
    "username_from_email",
    "with_suffix",
]
