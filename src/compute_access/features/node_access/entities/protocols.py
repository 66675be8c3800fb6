"""Protocol interfaces for node access persistence.

All identifiers are passed as already-canonicalized strings
('user#42', 'node#<uuid>').
"""

from abc import abstractmethod
from typing import Protocol, runtime_checkable, Optional, List, Iterable

from ....config.constants import AccessScope
from .access_grant import AccessGrant


@runtime_checkable
class NodeAccessStore(Protocol):
    """Grant records keyed by (entity id, node id)."""

    @abstractmethod
    async def grant(self, grant: AccessGrant) -> None:
        """Upsert a grant, overwriting any grant for the same pair."""
        ...

    @abstractmethod
    async def grant_many(self, grants: Iterable[AccessGrant]) -> None:
        """Upsert several grants."""
        ...

    @abstractmethod
    async def revoke(self, entity_id: str, node_id: str) -> None:
        """Remove a grant. Revoking a missing grant is not an error."""
        ...

    @abstractmethod
    async def has_access(self, entity_id: str, node_id: str) -> bool:
        """Check if a grant exists for the pair."""
        ...

    @abstractmethod
    async def list_by_node(self, node_id: str) -> List[AccessGrant]:
        """All grants on a node, in no particular order."""
        ...

    @abstractmethod
    async def list_by_entity(self, entity_id: str) -> List[AccessGrant]:
        """All grants held by one entity across nodes."""
        ...

    @abstractmethod
    async def list_workspace_nodes(self, organization_id: str) -> List[AccessGrant]:
        """Workspace-type grants held by an organization's workspace."""
        ...

    @abstractmethod
    async def purge_node(self, node_id: str) -> None:
        """Remove every grant on a node. Not atomic across records."""
        ...

    @abstractmethod
    async def batch_check(self, entity_ids: Iterable[str], node_id: str) -> bool:
        """True if any of the entities holds a grant on the node."""
        ...


@runtime_checkable
class NodeScopeStore(Protocol):
    """Current access scope per node."""

    @abstractmethod
    async def get_scope(self, node_id: str) -> Optional[AccessScope]:
        """Get a node's scope, or None when the node is unknown."""
        ...

    @abstractmethod
    async def set_scope(self, node_id: str, scope: AccessScope) -> None:
        ...

    @abstractmethod
    async def delete_scope(self, node_id: str) -> None:
        ...
