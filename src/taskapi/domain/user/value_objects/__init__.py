from taskapi.domain.user.value_objects.email import (
    MAX_EMAIL_LENGTH,
    Email,
    mask_email,
    normalize_email,
)
from taskapi.domain.user.value_objects.username import (
    username_from_email,
    with_suffix,
)

__all__ = [
    "MAX_EMAIL_LENGTH",
    "Email",
    "mask_email",
    "normalize_email",
    "username_from_email",
    "with_suffix",
]
