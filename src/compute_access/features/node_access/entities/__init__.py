"""Node access entities and protocols."""

from .access_grant import AccessGrant
from .protocols import NodeAccessStore, NodeScopeStore

__all__ = [
    "AccessGrant",
    "NodeAccessStore",
    "NodeScopeStore",
]
