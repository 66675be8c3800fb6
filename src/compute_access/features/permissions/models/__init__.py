"""Permission request and response models."""

from .requests import (
    CheckAccessRequest,
    NodePermissionsRequest,
    ShareWithUserRequest,
    ShareWithTeamRequest,
    WorkspaceAccessRequest,
    AccessScopeRequest,
    AttachOrganizationRequest,
)
from .responses import (
    CheckAccessResponse,
    NodePermissionsResponse,
    AccessGrantResponse,
    AccessScopeResponse,
)

__all__ = [
    "CheckAccessRequest",
    "NodePermissionsRequest",
    "ShareWithUserRequest",
    "ShareWithTeamRequest",
    "WorkspaceAccessRequest",
    "AccessScopeRequest",
    "AttachOrganizationRequest",
    "CheckAccessResponse",
    "NodePermissionsResponse",
    "AccessGrantResponse",
    "AccessScopeResponse",
]
