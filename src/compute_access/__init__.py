"""compute-access - permission resolution and access scope enforcement for compute nodes.

Decides whether a user may use a compute node (direct grants, workspace
grants, team grants) and keeps stored grants consistent with each node's
access scope.
"""

# Initialize logging configuration on import
from .config.logging_config import setup_logging
setup_logging()

from .__version__ import __version__

from .config import (
    AccessScope,
    AccessSource,
    AccessType,
    EntityType,
    ComputeAccessSettings,
    get_settings,
)

from .core.exceptions import (
    ComputeAccessError,
    InvalidInputError,
    InvalidKindError,
    ScopeViolationError,
    OwnerGrantError,
    OrganizationIndependentNodeError,
    NotFoundError,
    NodeNotFoundError,
    PermissionDeniedError,
    ConfigurationError,
    StoreFailureError,
)

from .core.value_objects import EntityId, NodeId, format_entity_id, format_node_id

from .features.node_access import (
    AccessGrant,
    NodeAccessStore,
    NodeScopeStore,
    InMemoryNodeAccessStore,
    InMemoryNodeScopeStore,
    AsyncPGNodeAccessStore,
    AsyncPGNodeScopeStore,
)

from .features.teams import TeamDirectory, TeamLookup, OrganizationLookup

from .features.permissions import (
    AccessDecision,
    NodePermissions,
    AccessScopeController,
    PermissionResolver,
    PermissionService,
)

__all__ = [
    "__version__",
    "AccessScope",
    "AccessSource",
    "AccessType",
    "EntityType",
    "ComputeAccessSettings",
    "get_settings",
    "ComputeAccessError",
    "InvalidInputError",
    "InvalidKindError",
    "ScopeViolationError",
    "OwnerGrantError",
    "OrganizationIndependentNodeError",
    "NotFoundError",
    "NodeNotFoundError",
    "PermissionDeniedError",
    "ConfigurationError",
    "StoreFailureError",
    "EntityId",
    "NodeId",
    "format_entity_id",
    "format_node_id",
    "AccessGrant",
    "NodeAccessStore",
    "NodeScopeStore",
    "InMemoryNodeAccessStore",
    "InMemoryNodeScopeStore",
    "AsyncPGNodeAccessStore",
    "AsyncPGNodeScopeStore",
    "TeamDirectory",
    "TeamLookup",
    "OrganizationLookup",
    "AccessDecision",
    "NodePermissions",
    "AccessScopeController",
    "PermissionResolver",
    "PermissionService",
]
