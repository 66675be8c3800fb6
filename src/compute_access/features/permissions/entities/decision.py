"""Resolution request and decision entities."""

from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from ....config.constants import AccessScope, AccessSource, AccessType


@dataclass(frozen=True)
class ResolutionRequest:
    """Inputs of one access resolution.

    Identifiers are external ids; an empty organization id means no
    organizational context.
    """
    user_id: str
    node_uuid: str
    organization_id: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return bool(self.user_id) and bool(self.node_uuid)

    @property
    def has_organization(self) -> bool:
        return bool(self.organization_id)


@dataclass(frozen=True)
class AccessDecision:
    """Outcome of a resolution with its provenance."""
    has_access: bool
    access_source: AccessSource = AccessSource.NONE
    access_type: Optional[AccessType] = None
    team_id: Optional[str] = None

    @classmethod
    def denied(cls) -> "AccessDecision":
        return cls(has_access=False, access_source=AccessSource.NONE)

    @classmethod
    def direct(cls, access_type: AccessType) -> "AccessDecision":
        return cls(True, AccessSource.DIRECT, access_type)

    @classmethod
    def workspace(cls) -> "AccessDecision":
        return cls(True, AccessSource.WORKSPACE, AccessType.WORKSPACE)

    @classmethod
    def team(cls, team_id: str) -> "AccessDecision":
        return cls(True, AccessSource.TEAM, AccessType.SHARED, team_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "has_access": self.has_access,
            "access_type": self.access_type.value if self.access_type else None,
            "access_source": self.access_source.value,
            "team_id": self.team_id,
        }


@dataclass
class NodePermissions:
    """Permission summary of one node."""
    node_uuid: str
    access_scope: AccessScope
    owner: Optional[str] = None
    organization_id: Optional[str] = None
    workspace_id: Optional[str] = None
    shared_with_users: List[str] = field(default_factory=list)
    shared_with_teams: List[str] = field(default_factory=list)

    @property
    def is_organization_independent(self) -> bool:
        return not self.organization_id
