"""AsyncPG implementation of NodeScopeStore."""

import logging
from typing import Optional

from ....config.constants import AccessScope
from ....config.settings import get_settings
from ....database.connection import DatabaseManager
from ....database.error_handling import store_operation
from ..utils.queries import (
    NODE_SCOPE_CREATE_TABLE,
    NODE_SCOPE_GET,
    NODE_SCOPE_UPSERT,
    NODE_SCOPE_DELETE,
)

logger = logging.getLogger(__name__)


class AsyncPGNodeScopeStore:
    """PostgreSQL store holding one scope row per node."""

    def __init__(self, database: DatabaseManager, table: Optional[str] = None):
        self._db = database
        self._table = table or get_settings().node_scope_relation

    @store_operation("ensure_schema")
    async def ensure_schema(self) -> None:
        await self._db.execute(NODE_SCOPE_CREATE_TABLE.format(table=self._table))

    @store_operation("get_scope")
    async def get_scope(self, node_id: str) -> Optional[AccessScope]:
        query = NODE_SCOPE_GET.format(table=self._table)
        value = await self._db.fetchval(query, node_id)
        return AccessScope(value) if value else None

    @store_operation("set_scope")
    async def set_scope(self, node_id: str, scope: AccessScope) -> None:
        query = NODE_SCOPE_UPSERT.format(table=self._table)
        await self._db.execute(query, node_id, AccessScope(scope).value)
        logger.info(f"Set access scope of {node_id} to {AccessScope(scope).value}")

    @store_operation("delete_scope")
    async def delete_scope(self, node_id: str) -> None:
        query = NODE_SCOPE_DELETE.format(table=self._table)
        await self._db.execute(query, node_id)
