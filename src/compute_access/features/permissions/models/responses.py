"""Permission response models."""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from ....config.constants import AccessScope, AccessSource, AccessType
from ...node_access.entities import AccessGrant
from ..entities.decision import AccessDecision, NodePermissions


class BaseResponse(BaseModel):
    """Base response serialized with camelCase aliases."""

    model_config = ConfigDict(
        populate_by_name=True,
        use_enum_values=True,
    )


class CheckAccessResponse(BaseResponse):
    """Resolution decision with its provenance."""

    has_access: bool = Field(..., alias="hasAccess")
    access_type: Optional[AccessType] = Field(None, alias="accessType")
    access_source: AccessSource = Field(AccessSource.NONE, alias="accessSource")
    team_id: Optional[str] = Field(None, alias="teamId")
    user_node_id: str = Field("", alias="userNodeId")
    node_uuid: str = Field("", alias="nodeUuid")
    organization_id: Optional[str] = Field(None, alias="organizationId")

    @classmethod
    def from_decision(
        cls,
        decision: AccessDecision,
        user_node_id: str,
        node_uuid: str,
        organization_id: Optional[str] = None,
    ) -> "CheckAccessResponse":
        return cls(
            has_access=decision.has_access,
            access_type=decision.access_type,
            access_source=decision.access_source,
            team_id=decision.team_id,
            user_node_id=user_node_id,
            node_uuid=node_uuid,
            organization_id=organization_id,
        )


class NodePermissionsResponse(BaseResponse):
    """Permission summary of a node."""

    node_uuid: str = Field(..., alias="nodeUuid")
    access_scope: AccessScope = Field(..., alias="accessScope")
    owner: Optional[str] = None
    shared_with_users: List[str] = Field(default_factory=list, alias="sharedWithUsers")
    shared_with_teams: List[str] = Field(default_factory=list, alias="sharedWithTeams")
    organization_id: Optional[str] = Field(None, alias="organizationId")
    workspace_id: Optional[str] = Field(None, alias="workspaceId")
    organization_independent: bool = Field(False, alias="organizationIndependent")

    @classmethod
    def from_entity(cls, permissions: NodePermissions) -> "NodePermissionsResponse":
        return cls(
            node_uuid=permissions.node_uuid,
            access_scope=permissions.access_scope,
            owner=permissions.owner,
            shared_with_users=list(permissions.shared_with_users),
            shared_with_teams=list(permissions.shared_with_teams),
            organization_id=permissions.organization_id,
            workspace_id=permissions.workspace_id,
            organization_independent=permissions.is_organization_independent,
        )


class AccessGrantResponse(BaseResponse):
    """A single stored grant."""

    entity_id: str = Field(..., alias="entityId")
    node_uuid: str = Field(..., alias="nodeUuid")
    access_type: AccessType = Field(..., alias="accessType")
    granted_by: str = Field(..., alias="grantedBy")
    granted_at: datetime = Field(..., alias="grantedAt")
    organization_id: Optional[str] = Field(None, alias="organizationId")

    @classmethod
    def from_entity(cls, grant: AccessGrant) -> "AccessGrantResponse":
        return cls(
            entity_id=grant.entity_id.value,
            node_uuid=grant.node_id.uuid,
            access_type=grant.access_type,
            granted_by=grant.granted_by.value,
            granted_at=grant.granted_at,
            organization_id=grant.organization_id,
        )


class AccessScopeResponse(BaseResponse):
    node_uuid: str = Field(..., alias="nodeUuid")
    access_scope: AccessScope = Field(..., alias="accessScope")
    previous_scope: AccessScope = Field(..., alias="previousScope")
