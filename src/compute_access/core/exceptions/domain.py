"""Domain-specific exceptions for compute-access.

These relate to identifiers, scopes and grants rather than to the
backends that store them.
"""

from typing import Optional

from .base import ComputeAccessError


# Input Errors
class InvalidInputError(ComputeAccessError):
    """Raised when an identifier or request value is empty or malformed."""
    pass


class InvalidKindError(InvalidInputError):
    """Raised when an entity kind is not one of user, team or workspace."""

    def __init__(self, kind: object):
        self.kind = kind
        super().__init__(
            f"Unknown entity kind: {kind!r}",
            details={"kind": str(kind)}
        )


# Scope Errors
class ScopeViolationError(ComputeAccessError):
    """Raised when a grant is incompatible with the node's current scope."""

    def __init__(
        self,
        message: str,
        node_uuid: Optional[str] = None,
        scope: Optional[str] = None,
    ):
        details = {}
        if node_uuid is not None:
            details["node_uuid"] = node_uuid
        if scope is not None:
            details["scope"] = scope
        super().__init__(message, details=details)
        self.node_uuid = node_uuid
        self.scope = scope


class OwnerGrantError(ScopeViolationError):
    """Raised on an attempt to revoke or replace a node's owner grant."""
    pass


class OrganizationIndependentNodeError(ScopeViolationError):
    """Raised when a node without an organization is widened past private."""
    pass


# Lookup Errors
class NotFoundError(ComputeAccessError):
    """Raised when a lookup misses."""
    pass


class NodeNotFoundError(NotFoundError):
    """Raised when a node has no scope record."""

    def __init__(self, node_uuid: str):
        self.node_uuid = node_uuid
        super().__init__(
            f"Compute node {node_uuid} not found",
            details={"node_uuid": node_uuid}
        )


# Authorization Errors
class PermissionDeniedError(ComputeAccessError):
    """Raised when the requester may not change a node's permissions."""
    pass
