"""AsyncPG implementation of TeamLookup."""

import logging
from typing import List, Optional

from ....config.settings import get_settings
from ....database.connection import DatabaseManager
from ....database.error_handling import store_operation
from ..entities.team import Team, UserTeam
from ..utils.queries import (
    TEAM_LIST_BY_USER_AND_ORGANIZATION,
    TEAM_GET_BY_NODE_ID,
)

logger = logging.getLogger(__name__)


class AsyncPGTeamLookup:
    """Reads team memberships from the platform directory schema."""

    def __init__(self, database: DatabaseManager, schema: Optional[str] = None):
        self._db = database
        self._schema = schema or get_settings().directory_schema

    @store_operation("get_user_teams")
    async def get_user_teams(self, user_internal_id: int, org_internal_id: int) -> List[UserTeam]:
        query = TEAM_LIST_BY_USER_AND_ORGANIZATION.format(schema=self._schema)
        rows = await self._db.fetch(query, user_internal_id, org_internal_id)
        logger.debug(f"User {user_internal_id} belongs to {len(rows)} teams in organization {org_internal_id}")
        return [
            UserTeam(
                team_id=row["team_id"],
                team_external_id=row["team_node_id"],
                team_name=row["team_name"],
                user_id=row["user_id"],
                organization_id=row["organization_id"],
            )
            for row in rows
        ]

    @store_operation("get_team_by_external_id")
    async def get_team_by_external_id(self, external_id: str) -> Optional[Team]:
        query = TEAM_GET_BY_NODE_ID.format(schema=self._schema)
        row = await self._db.fetchrow(query, external_id)
        if row is None:
            return None
        return Team(
            id=row["id"],
            external_id=row["node_id"],
            name=row["name"],
            organization_id=row["organization_id"],
        )
