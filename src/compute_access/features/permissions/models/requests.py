"""Permission request models.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ....config.constants import AccessScope


class BaseRequest(BaseModel):
    """Base request with camelCase aliases."""

    model_config = ConfigDict(
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class CheckAccessRequest(BaseRequest):
    """Internal access check."""

    user_node_id: str = Field("", alias="userNodeId", description="External user id")
    node_uuid: str = Field("", alias="nodeUuid", description="Compute node uuid")
    organization_id: Optional[str] = Field(
        None, alias="organizationId", description="Organization context of the caller"
    )


class NodePermissionsRequest(BaseRequest):
    """Replace a node's scope and share list."""

    access_scope: AccessScope = Field(..., alias="accessScope")
    shared_with_users: List[str] = Field(default_factory=list, alias="sharedWithUsers")
    shared_with_teams: List[str] = Field(default_factory=list, alias="sharedWithTeams")

    @field_validator("shared_with_users", "shared_with_teams")
    @classmethod
    def validate_ids(cls, value: List[str]) -> List[str]:
        """Reject blank ids."""
        if any(not item or not item.strip() for item in value):
            raise ValueError("ids must not be empty")
        return value


class ShareWithUserRequest(BaseRequest):
    user_id: str = Field(..., min_length=1, alias="userId")


class ShareWithTeamRequest(BaseRequest):
    team_id: str = Field(..., min_length=1, alias="teamId")


class WorkspaceAccessRequest(BaseRequest):
    """Expose a node to a workspace (the organization's workspace id)."""

    organization_id: str = Field(..., min_length=1, alias="organizationId")


class AccessScopeRequest(BaseRequest):
    access_scope: AccessScope = Field(..., alias="accessScope")


class AttachOrganizationRequest(BaseRequest):
    """Attach an organization-independent node to an organization."""

    organization_id: str = Field(..., min_length=1, alias="organizationId")
