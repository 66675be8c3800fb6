"""Compute node permission router.

Ready-to-use FastAPI router exposing access checks and permission
management for compute nodes.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, Path, status

from ....config.constants import AccessType, EntityType
from ....core.exceptions import ComputeAccessError, create_error_response, get_http_status_code
from ..models.requests import (
    AccessScopeRequest,
    AttachOrganizationRequest,
    CheckAccessRequest,
    NodePermissionsRequest,
    ShareWithTeamRequest,
    ShareWithUserRequest,
    WorkspaceAccessRequest,
)
from ..models.responses import (
    AccessGrantResponse,
    AccessScopeResponse,
    CheckAccessResponse,
    NodePermissionsResponse,
)
from ..services.permission_service import PermissionService
from .dependencies import get_current_user_id, get_permission_service

logger = logging.getLogger(__name__)


router = APIRouter(
    prefix="/compute-nodes",
    tags=["Compute Node Permissions"],
    responses={
        400: {"description": "Invalid input or scope violation"},
        403: {"description": "Only the node owner may change permissions"},
        404: {"description": "Compute node not found"},
        503: {"description": "Access store unavailable, retry later"},
    }
)


def to_http_exception(error: ComputeAccessError) -> HTTPException:
    """Translate a compute-access error into an HTTPException."""
    status_code = get_http_status_code(error)
    if status_code >= 500:
        logger.error(f"{error.error_code}: {error.message}")
    return HTTPException(
        status_code=status_code,
        detail=create_error_response(error)["error"],
    )


async def _require_owner(service: PermissionService, node_uuid: str, user_id: str) -> None:
    permissions = await service.get_node_permissions(node_uuid)
    if permissions.owner != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"Only the owner can change permissions of node {node_uuid}",
        )


@router.post(
    "/check-access",
    response_model=CheckAccessResponse,
    summary="Check node access",
    description="Resolve whether a user may use a compute node. Missing access is not an error.",
)
async def check_access(
    request: CheckAccessRequest,
    service: PermissionService = Depends(get_permission_service),
) -> CheckAccessResponse:
    decision = await service.resolve(
        request.user_node_id, request.node_uuid, request.organization_id
    )
    return CheckAccessResponse.from_decision(
        decision, request.user_node_id, request.node_uuid, request.organization_id
    )


@router.get(
    "/{node_uuid}/permissions",
    response_model=NodePermissionsResponse,
    summary="Get node permissions",
)
async def get_node_permissions(
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> NodePermissionsResponse:
    """Permission summary, visible to anyone with access to the node."""
    try:
        permissions = await service.get_node_permissions(node_uuid)
        if not await service.check_access(user_id, node_uuid, permissions.organization_id):
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=f"No access to node {node_uuid}",
            )
        return NodePermissionsResponse.from_entity(permissions)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.put(
    "/{node_uuid}/permissions",
    response_model=NodePermissionsResponse,
    summary="Replace node permissions",
)
async def set_node_permissions(
    request: NodePermissionsRequest,
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> NodePermissionsResponse:
    try:
        permissions = await service.set_node_permissions(
            node_uuid,
            request.access_scope,
            users=request.shared_with_users,
            teams=request.shared_with_teams,
            requested_by=user_id,
        )
        return NodePermissionsResponse.from_entity(permissions)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.post(
    "/{node_uuid}/permissions/users",
    response_model=AccessGrantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Share node with a user",
)
async def share_with_user(
    request: ShareWithUserRequest,
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> AccessGrantResponse:
    try:
        await _require_owner(service, node_uuid, user_id)
        grant = await service.grant(
            EntityType.USER, request.user_id, node_uuid, AccessType.SHARED, user_id
        )
        return AccessGrantResponse.from_entity(grant)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.delete(
    "/{node_uuid}/permissions/users/{target_user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Stop sharing node with a user",
)
async def unshare_with_user(
    node_uuid: str = Path(..., description="Compute node uuid"),
    target_user_id: str = Path(..., description="User to remove"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> None:
    try:
        await _require_owner(service, node_uuid, user_id)
        await service.revoke(EntityType.USER, target_user_id, node_uuid)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.post(
    "/{node_uuid}/permissions/teams",
    response_model=AccessGrantResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Share node with a team",
)
async def share_with_team(
    request: ShareWithTeamRequest,
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> AccessGrantResponse:
    try:
        await _require_owner(service, node_uuid, user_id)
        grant = await service.grant(
            EntityType.TEAM, request.team_id, node_uuid, AccessType.SHARED, user_id
        )
        return AccessGrantResponse.from_entity(grant)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.delete(
    "/{node_uuid}/permissions/teams/{team_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Stop sharing node with a team",
)
async def unshare_with_team(
    node_uuid: str = Path(..., description="Compute node uuid"),
    team_id: str = Path(..., description="Team to remove"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> None:
    try:
        await _require_owner(service, node_uuid, user_id)
        await service.revoke(EntityType.TEAM, team_id, node_uuid)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.put(
    "/{node_uuid}/permissions/workspace",
    response_model=AccessGrantResponse,
    summary="Expose node to a workspace",
)
async def set_workspace_access(
    request: WorkspaceAccessRequest,
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> AccessGrantResponse:
    try:
        await _require_owner(service, node_uuid, user_id)
        grant = await service.grant(
            EntityType.WORKSPACE, request.organization_id, node_uuid, AccessType.WORKSPACE, user_id
        )
        return AccessGrantResponse.from_entity(grant)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.patch(
    "/{node_uuid}/access-scope",
    response_model=AccessScopeResponse,
    summary="Change node access scope",
)
async def set_access_scope(
    request: AccessScopeRequest,
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> AccessScopeResponse:
    try:
        await _require_owner(service, node_uuid, user_id)
        previous = await service.set_scope(node_uuid, request.access_scope)
        return AccessScopeResponse(
            node_uuid=node_uuid,
            access_scope=request.access_scope,
            previous_scope=previous,
        )
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.post(
    "/{node_uuid}/organization",
    response_model=NodePermissionsResponse,
    summary="Attach node to an organization",
)
async def attach_to_organization(
    request: AttachOrganizationRequest,
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> NodePermissionsResponse:
    """Attach an organization-independent node. Owner only."""
    try:
        await service.attach_to_organization(node_uuid, request.organization_id, requested_by=user_id)
        permissions = await service.get_node_permissions(node_uuid)
        return NodePermissionsResponse.from_entity(permissions)
    except ComputeAccessError as e:
        raise to_http_exception(e)


@router.delete(
    "/{node_uuid}/organization",
    response_model=NodePermissionsResponse,
    summary="Detach node from its organization",
)
async def detach_from_organization(
    node_uuid: str = Path(..., description="Compute node uuid"),
    user_id: str = Depends(get_current_user_id),
    service: PermissionService = Depends(get_permission_service),
) -> NodePermissionsResponse:
    """Detach a node from its organization; it becomes private to its owner."""
    try:
        await service.detach_from_organization(node_uuid, requested_by=user_id)
        permissions = await service.get_node_permissions(node_uuid)
        return NodePermissionsResponse.from_entity(permissions)
    except ComputeAccessError as e:
        raise to_http_exception(e)
