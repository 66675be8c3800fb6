"""Team directory entities and protocols."""

from .team import Team, UserTeam
from .protocols import TeamLookup, OrganizationLookup
from .directory import TeamDirectory

__all__ = [
    "Team",
    "UserTeam",
    "TeamLookup",
    "OrganizationLookup",
    "TeamDirectory",
]
