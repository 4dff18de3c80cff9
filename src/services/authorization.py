"""Ownership and role rules for task access."""

import logging
from enum import Enum

from src.exceptions import Forbidden
from src.models.enums import Role
from src.models.user import User

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Outcome of an authorization check."""

    ALLOWED = "allowed"
    DENIED = "denied"


def authorize(principal: User, owner_id: int | None) -> Decision:
    """Decide whether the principal may read, update or delete a resource.

    The owner is always allowed; roles that override ownership are allowed
    for every owner, including owners that no longer exist. The role comes
    from the loaded user row, never from token claims.
    """
    if owner_id is not None and principal.id == owner_id:
        return Decision.ALLOWED
    if Role(principal.role).can_override_ownership():
        return Decision.ALLOWED
    return Decision.DENIED


def ensure_allowed(principal: User, owner_id: int | None) -> None:
    """Raise Forbidden unless the principal may act on the resource."""
    if authorize(principal, owner_id) is Decision.DENIED:
        logger.info(f"User {principal.id} denied access to resource owned by {owner_id}")
        raise Forbidden()


def list_scope(principal: User, include_all: bool = False) -> int | None:
    """Return the owner id a list query must be filtered by.

    ``None`` means the query is unscoped. Only roles that override ownership
    can get an unscoped view, and only when they ask for it.
    """
    if include_all and Role(principal.role).can_override_ownership():
        return None
    return principal.id
