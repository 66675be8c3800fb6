"""Team directory repositories (read-only, asyncpg)."""

from .asyncpg_team_lookup import AsyncPGTeamLookup
from .asyncpg_organization_lookup import AsyncPGOrganizationLookup

__all__ = [
    "AsyncPGTeamLookup",
    "AsyncPGOrganizationLookup",
]
