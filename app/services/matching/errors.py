"""
Matching Engine Errors

Single-entity operations raise these; batch operations catch them per item
and report them on the item's result instead.
"""


class MatchingError(Exception):
    """Base class for matching engine errors."""


class EntityNotFoundError(MatchingError):
    """Source entity id does not exist in the entity store."""

    def __init__(self, kind: str, entity_id: str):
        kind = getattr(kind, "value", kind)
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind.capitalize()} not found: {entity_id}")


class AccessDeniedError(MatchingError):
    """Caller is neither the owner nor a member of the owning organization."""

    def __init__(self, kind: str, entity_id: str):
        kind = getattr(kind, "value", kind)
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(
            f"Access denied - you can only view matches for your own {kind}s "
            f"or {kind}s in your organization"
        )


class InvalidArgumentError(MatchingError):
    """Request parameters are out of bounds (batch size, pagination)."""
