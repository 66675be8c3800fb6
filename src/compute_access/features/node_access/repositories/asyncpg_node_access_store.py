"""AsyncPG implementation of NodeAccessStore."""

import logging
from typing import Iterable, List, Optional

from ....config.constants import AccessType, EntityType
from ....config.settings import get_settings
from ....core.value_objects import format_entity_id
from ....database.connection import DatabaseManager
from ....database.error_handling import store_operation
from ..entities.access_grant import AccessGrant
from ..utils.queries import (
    NODE_ACCESS_CREATE_TABLE,
    NODE_ACCESS_CREATE_NODE_INDEX,
    NODE_ACCESS_UPSERT,
    NODE_ACCESS_DELETE,
    NODE_ACCESS_EXISTS,
    NODE_ACCESS_EXISTS_ANY,
    NODE_ACCESS_LIST_BY_NODE,
    NODE_ACCESS_LIST_BY_ENTITY,
    NODE_ACCESS_LIST_WORKSPACE_NODES,
)

logger = logging.getLogger(__name__)


class AsyncPGNodeAccessStore:
    """PostgreSQL node access store.

    One row per (entity_id, node_id). Writes are upserts, so the last write
    for a pair wins. purge_node deletes row by row without a transaction:
    a grant racing a purge may survive it.
    """

    def __init__(self, database: DatabaseManager, table: Optional[str] = None):
        """Initialize with a database manager.

        Args:
            database: Shared DatabaseManager
            table: Qualified table name (defaults to the configured relation)
        """
        self._db = database
        self._table = table or get_settings().node_access_relation

    @property
    def table(self) -> str:
        return self._table

    @store_operation("ensure_schema")
    async def ensure_schema(self) -> None:
        """Create the grant table and its node index if missing."""
        index_name = f"{self._table.replace('.', '_')}_node_idx"
        await self._db.execute(NODE_ACCESS_CREATE_TABLE.format(table=self._table))
        await self._db.execute(
            NODE_ACCESS_CREATE_NODE_INDEX.format(table=self._table, index_name=index_name)
        )

    def _params(self, grant: AccessGrant) -> tuple:
        return (
            grant.entity_id.value,
            grant.node_id.value,
            grant.entity_id.kind.value,
            grant.entity_id.raw_id,
            grant.node_id.uuid,
            grant.access_type.value,
            grant.organization_id,
            grant.granted_at,
            grant.granted_by.value,
        )

    @store_operation("grant")
    async def grant(self, grant: AccessGrant) -> None:
        query = NODE_ACCESS_UPSERT.format(table=self._table)
        await self._db.execute(query, *self._params(grant))
        logger.info(
            f"Granted {grant.access_type.value} access on {grant.node_id} to {grant.entity_id}"
        )

    @store_operation("grant_many")
    async def grant_many(self, grants: Iterable[AccessGrant]) -> None:
        rows = [self._params(grant) for grant in grants]
        if not rows:
            return
        query = NODE_ACCESS_UPSERT.format(table=self._table)
        await self._db.executemany(query, rows)
        logger.info(f"Granted {len(rows)} access records")

    @store_operation("revoke")
    async def revoke(self, entity_id: str, node_id: str) -> None:
        query = NODE_ACCESS_DELETE.format(table=self._table)
        await self._db.execute(query, entity_id, node_id)
        logger.info(f"Revoked access on {node_id} from {entity_id}")

    @store_operation("has_access")
    async def has_access(self, entity_id: str, node_id: str) -> bool:
        query = NODE_ACCESS_EXISTS.format(table=self._table)
        return bool(await self._db.fetchval(query, entity_id, node_id))

    @store_operation("list_by_node")
    async def list_by_node(self, node_id: str) -> List[AccessGrant]:
        query = NODE_ACCESS_LIST_BY_NODE.format(table=self._table)
        rows = await self._db.fetch(query, node_id)
        return [AccessGrant.from_record(row) for row in rows]

    @store_operation("list_by_entity")
    async def list_by_entity(self, entity_id: str) -> List[AccessGrant]:
        query = NODE_ACCESS_LIST_BY_ENTITY.format(table=self._table)
        rows = await self._db.fetch(query, entity_id)
        return [AccessGrant.from_record(row) for row in rows]

    @store_operation("list_workspace_nodes")
    async def list_workspace_nodes(self, organization_id: str) -> List[AccessGrant]:
        query = NODE_ACCESS_LIST_WORKSPACE_NODES.format(table=self._table)
        workspace_id = format_entity_id(EntityType.WORKSPACE, organization_id)
        rows = await self._db.fetch(query, workspace_id, AccessType.WORKSPACE.value)
        return [AccessGrant.from_record(row) for row in rows]

    @store_operation("purge_node")
    async def purge_node(self, node_id: str) -> None:
        grants = await self.list_by_node(node_id)
        query = NODE_ACCESS_DELETE.format(table=self._table)
        for grant in grants:
            await self._db.execute(query, grant.entity_id.value, node_id)
        logger.info(f"Purged {len(grants)} access records from {node_id}")

    @store_operation("batch_check")
    async def batch_check(self, entity_ids: Iterable[str], node_id: str) -> bool:
        entity_ids = list(entity_ids)
        if not entity_ids:
            return False
        query = NODE_ACCESS_EXISTS_ANY.format(table=self._table)
        return bool(await self._db.fetchval(query, entity_ids, node_id))
