"""Constants and enums for compute-access.

This module defines the vocabulary shared by the node access store, the
scope controller and the resolution engine. Enum values are the exact
tokens persisted in the node access tables.
"""

from enum import Enum
from typing import Final


# Identifier format
class IdentifierFormat:
    """Canonical identifier format tokens."""

    SEPARATOR: Final[str] = "#"
    NODE_PREFIX: Final[str] = "node"


# Database Schema and Table Names
class DatabaseTables:
    """Default schema and table names."""

    ACCESS_SCHEMA: Final[str] = "compute"
    NODE_ACCESS: Final[str] = "node_access"
    NODE_SCOPE: Final[str] = "node_access_scope"
    DIRECTORY_SCHEMA: Final[str] = "pennsieve"


class EntityType(str, Enum):
    """Principal kinds that can hold a grant on a node."""

    USER = "user"
    TEAM = "team"
    WORKSPACE = "workspace"


class AccessType(str, Enum):
    """Kind of grant stored for an (entity, node) pair."""

    OWNER = "owner"
    SHARED = "shared"
    WORKSPACE = "workspace"


class AccessScope(str, Enum):
    """Node-level sharing policy.

    Scopes are nested: private < workspace < shared. Each scope permits
    every grant kind permitted by the narrower ones.
    """

    PRIVATE = "private"
    WORKSPACE = "workspace"
    SHARED = "shared"

    @property
    def permitted_access_types(self) -> frozenset:
        """Grant kinds that are meaningful under this scope."""
        return _PERMITTED_ACCESS_TYPES[self]

    def permits(self, access_type: AccessType) -> bool:
        """Check if a grant kind is meaningful under this scope."""
        return access_type in self.permitted_access_types

    def is_narrower_than(self, other: "AccessScope") -> bool:
        """Check if this scope permits strictly fewer grant kinds than other."""
        return self.permitted_access_types < other.permitted_access_types


_PERMITTED_ACCESS_TYPES = {
    AccessScope.PRIVATE: frozenset({AccessType.OWNER}),
    AccessScope.WORKSPACE: frozenset({AccessType.OWNER, AccessType.WORKSPACE}),
    AccessScope.SHARED: frozenset({AccessType.OWNER, AccessType.WORKSPACE, AccessType.SHARED}),
}


class AccessSource(str, Enum):
    """Provenance of a resolution decision."""

    DIRECT = "direct"
    WORKSPACE = "workspace"
    TEAM = "team"
    NONE = "none"
