"""Process-wide signing key resolution."""

import logging
import secrets
from functools import lru_cache

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _generated_signing_key() -> str:
    logger.warning(
        "JWT_SECRET_KEY is not configured; generated a random signing key. "
        "Tokens will not survive a restart or work across instances.",
    )
    return secrets.token_urlsafe(64)


def load_signing_key(configured: str | None) -> str:
    """Return the configured signing key, or one generated for this process.

    The generated key is created on first use and reused for the rest of
    the process lifetime.
    """
    if configured:
        return configured
    return _generated_signing_key()
