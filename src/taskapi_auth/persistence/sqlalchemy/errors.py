"""Translation of connectivity failures into StoreUnavailableError."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError

from taskapi_auth.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)

CONNECTIVITY_ERRORS = (
    OperationalError,
    InterfaceError,
    PoolTimeoutError,
    TimeoutError,
    OSError,
)


@contextmanager
def store_errors(operation: str) -> Iterator[None]:
    """Re-raise connection and timeout failures as StoreUnavailableError."""
    try:
        yield
    except CONNECTIVITY_ERRORS as e:
        logger.error("Store unavailable during %s: %s", operation, e)
        raise StoreUnavailableError from e
