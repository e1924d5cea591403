"""Resource ownership authorization."""

import logging
from uuid import UUID

from taskapi.application.context import UserContext
from taskapi.domain.shared.exceptions import AccessDeniedError

logger = logging.getLogger(__name__)


def require_owner(principal: UserContext, owner_id: UUID) -> None:
    """Ensure the principal owns the resource it is about to change.

    Callers load the resource first and report a missing resource before
    calling this, so "not found" is never masked as "not yours".

    Raises
    ------
    AccessDeniedError
        If the principal is not the owner
    """
    if principal.user_id != owner_id:
        logger.warning(
            "User %s denied access to resource owned by %s",
            principal.user_id,
            owner_id,
        )
        raise AccessDeniedError(details={"owner_id": str(owner_id)})
