"""In-memory node access store.

Used for development, tests and single-process deployments.
"""

import asyncio
import logging
from typing import Dict, Iterable, List, Tuple

from ....config.constants import AccessType, EntityType
from ....core.value_objects import format_entity_id
from ..entities.access_grant import AccessGrant

logger = logging.getLogger(__name__)


class InMemoryNodeAccessStore:
    """Grant records held in a dict keyed by (entity id, node id)."""

    def __init__(self):
        self._grants: Dict[Tuple[str, str], AccessGrant] = {}
        self._lock = asyncio.Lock()

    async def grant(self, grant: AccessGrant) -> None:
        async with self._lock:
            self._grants[grant.key] = grant
        logger.debug(f"Stored {grant.access_type.value} grant {grant.entity_id} -> {grant.node_id}")

    async def grant_many(self, grants: Iterable[AccessGrant]) -> None:
        async with self._lock:
            for grant in grants:
                self._grants[grant.key] = grant

    async def revoke(self, entity_id: str, node_id: str) -> None:
        async with self._lock:
            self._grants.pop((entity_id, node_id), None)

    async def has_access(self, entity_id: str, node_id: str) -> bool:
        return (entity_id, node_id) in self._grants

    async def list_by_node(self, node_id: str) -> List[AccessGrant]:
        return [grant for (_, node), grant in self._grants.items() if node == node_id]

    async def list_by_entity(self, entity_id: str) -> List[AccessGrant]:
        return [grant for (entity, _), grant in self._grants.items() if entity == entity_id]

    async def list_workspace_nodes(self, organization_id: str) -> List[AccessGrant]:
        workspace_id = format_entity_id(EntityType.WORKSPACE, organization_id)
        return [
            grant for grant in await self.list_by_entity(workspace_id)
            if grant.access_type == AccessType.WORKSPACE
        ]

    async def purge_node(self, node_id: str) -> None:
        # One record at a time, like the database-backed store
        for grant in await self.list_by_node(node_id):
            await self.revoke(grant.entity_id.value, node_id)

    async def batch_check(self, entity_ids: Iterable[str], node_id: str) -> bool:
        return any((entity_id, node_id) in self._grants for entity_id in entity_ids)

    def __len__(self) -> int:
        return len(self._grants)
