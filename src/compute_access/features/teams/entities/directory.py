"""Team directory handle.

The directory is an optional collaborator. Callers check is_available
instead of testing individual lookups for None.
"""

from dataclasses import dataclass
from typing import Optional

from ....core.exceptions import ConfigurationError
from .protocols import TeamLookup, OrganizationLookup


@dataclass(frozen=True)
class TeamDirectory:
    """Available/unavailable handle bundling the team and organization lookups."""
    teams: Optional[TeamLookup] = None
    organizations: Optional[OrganizationLookup] = None

    @classmethod
    def available(cls, teams: TeamLookup, organizations: OrganizationLookup) -> "TeamDirectory":
        if teams is None or organizations is None:
            raise ConfigurationError("Both team and organization lookups are required")
        return cls(teams=teams, organizations=organizations)

    @classmethod
    def unavailable(cls) -> "TeamDirectory":
        return cls()

    @property
    def is_available(self) -> bool:
        return self.teams is not None and self.organizations is not None

    def __repr__(self) -> str:
        state = "available" if self.is_available else "unavailable"
        return f"TeamDirectory({state})"
