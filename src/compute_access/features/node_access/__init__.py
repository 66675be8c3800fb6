"""Node access feature.

Grant records keyed by (entity, node) and the per-node access scope.
"""

from .entities import AccessGrant, NodeAccessStore, NodeScopeStore
from .repositories import (
    InMemoryNodeAccessStore,
    InMemoryNodeScopeStore,
    AsyncPGNodeAccessStore,
    AsyncPGNodeScopeStore,
)

__all__ = [
    "AccessGrant",
    "NodeAccessStore",
    "NodeScopeStore",
    "InMemoryNodeAccessStore",
    "InMemoryNodeScopeStore",
    "AsyncPGNodeAccessStore",
    "AsyncPGNodeScopeStore",
]
