"""AsyncPG implementation of OrganizationLookup."""

import logging
from typing import Optional

from ....config.settings import get_settings
from ....core.exceptions import NotFoundError
from ....database.connection import DatabaseManager
from ....database.error_handling import store_operation
from ..utils.queries import (
    USER_GET_ID_BY_NODE_ID,
    ORGANIZATION_GET_ID_BY_NODE_ID,
    USER_EXISTS_BY_NODE_ID,
)

logger = logging.getLogger(__name__)


class AsyncPGOrganizationLookup:
    """Resolves external user and organization ids to internal ids."""

    def __init__(self, database: DatabaseManager, schema: Optional[str] = None):
        self._db = database
        self._schema = schema or get_settings().directory_schema

    @store_operation("get_user_id_by_external_id")
    async def get_user_id_by_external_id(self, user_id: str) -> int:
        query = USER_GET_ID_BY_NODE_ID.format(schema=self._schema)
        internal_id = await self._db.fetchval(query, user_id)
        if internal_id is None:
            raise NotFoundError(f"User {user_id} not found", details={"user_id": user_id})
        return internal_id

    @store_operation("get_organization_id_by_external_id")
    async def get_organization_id_by_external_id(self, organization_id: str) -> int:
        query = ORGANIZATION_GET_ID_BY_NODE_ID.format(schema=self._schema)
        internal_id = await self._db.fetchval(query, organization_id)
        if internal_id is None:
            raise NotFoundError(
                f"Organization {organization_id} not found",
                details={"organization_id": organization_id}
            )
        return internal_id

    @store_operation("user_exists")
    async def user_exists(self, user_id: str) -> bool:
        query = USER_EXISTS_BY_NODE_ID.format(schema=self._schema)
        return bool(await self._db.fetchval(query, user_id))
