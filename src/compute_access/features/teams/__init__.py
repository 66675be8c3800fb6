"""Team directory feature.

Read-only access to team memberships and user/organization ids, used by
the team resolution path.
"""

from typing import Optional

from ...config.settings import get_settings
from ...database.connection import DatabaseManager
from .entities import Team, UserTeam, TeamLookup, OrganizationLookup, TeamDirectory
from .repositories import AsyncPGTeamLookup, AsyncPGOrganizationLookup


def create_team_directory(database: Optional[DatabaseManager]) -> TeamDirectory:
    """Build the directory handle from settings.

    Returns an unavailable handle when team lookup is disabled or no
    database is configured.
    """
    settings = get_settings()
    if database is None or not settings.team_lookup_enabled:
        return TeamDirectory.unavailable()
    return TeamDirectory.available(
        teams=AsyncPGTeamLookup(database),
        organizations=AsyncPGOrganizationLookup(database),
    )


__all__ = [
    "Team",
    "UserTeam",
    "TeamLookup",
    "OrganizationLookup",
    "TeamDirectory",
    "AsyncPGTeamLookup",
    "AsyncPGOrganizationLookup",
    "create_team_directory",
]
