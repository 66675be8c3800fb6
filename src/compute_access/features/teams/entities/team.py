"""Team directory entities.

Teams live in the relational directory owned by the platform; this package
only reads them.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class Team:
    """A team and the organization it belongs to."""
    id: int
    external_id: str
    name: str
    organization_id: Optional[int] = None


@dataclass(frozen=True)
class UserTeam:
    """One team membership of a user within an organization."""
    team_id: int
    team_external_id: str
    team_name: str
    user_id: Optional[int] = None
    organization_id: Optional[int] = None
