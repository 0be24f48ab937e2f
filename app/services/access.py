"""
Access Guard

Restricts match details to the owner of the source entity or a member of
its owning organization. Identity itself comes from the external identity
subsystem; it may supply its own AuthorizationCheck.
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from app.services.matching.errors import AccessDeniedError


@dataclass(frozen=True)
class Principal:
    """The authenticated caller."""
    user_id: str
    organization_id: Optional[str] = None
    user_type: Optional[str] = None  # client, vendor, admin


AuthorizationCheck = Callable[[Principal, Any], bool]


def owner_or_organization_member(principal: Principal, entity: Any) -> bool:
    """Caller created the entity, or belongs to the entity's organization."""
    if entity.created_by is not None and str(entity.created_by) == str(principal.user_id):
        return True
    return (
        entity.organization_id is not None
        and principal.organization_id is not None
        and str(entity.organization_id) == str(principal.organization_id)
    )


def require_access(
    principal: Principal,
    entity: Any,
    kind: str,
    check: AuthorizationCheck = owner_or_organization_member
) -> None:
    """
    Raises:
        AccessDeniedError: check(principal, entity) is False
    """
    if not check(principal, entity):
        raise AccessDeniedError(kind, entity.id)
