"""Protocol interfaces for the team and organization directory."""

from abc import abstractmethod
from typing import Protocol, runtime_checkable, List, Optional

from .team import Team, UserTeam


@runtime_checkable
class TeamLookup(Protocol):
    """Team membership lookup."""

    @abstractmethod
    async def get_user_teams(self, user_internal_id: int, org_internal_id: int) -> List[UserTeam]:
        """Teams the user belongs to within the organization, in lookup order."""
        ...

    @abstractmethod
    async def get_team_by_external_id(self, external_id: str) -> Optional[Team]:
        """Team with the given external id, or None."""
        ...


@runtime_checkable
class OrganizationLookup(Protocol):
    """External id to internal id resolution for users and organizations."""

    @abstractmethod
    async def get_user_id_by_external_id(self, user_id: str) -> int:
        """Internal id of a user. Raises NotFoundError on a miss."""
        ...

    @abstractmethod
    async def get_organization_id_by_external_id(self, organization_id: str) -> int:
        """Internal id of an organization. Raises NotFoundError on a miss."""
        ...

    @abstractmethod
    async def user_exists(self, user_id: str) -> bool:
        ...
