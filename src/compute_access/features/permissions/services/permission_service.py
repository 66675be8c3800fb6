"""Permission service.

Entry points used by request handlers: resolution queries, grant and revoke
dispatch, scope changes, node lifecycle and the permission summary/replace
operations behind the permissions endpoints.

Mutations propagate every failure to the caller. Queries other than resolve
propagate store failures too; resolve never raises for them.
"""

import logging
from typing import Iterable, List, Optional, Set

from ....config.constants import AccessScope, AccessType, EntityType
from ....core.exceptions import (
    InvalidInputError,
    NodeNotFoundError,
    NotFoundError,
    OrganizationIndependentNodeError,
    PermissionDeniedError,
    ScopeViolationError,
    StoreFailureError,
)
from ....core.value_objects import EntityId, NodeId, coerce_entity_type, format_entity_id, format_node_id
from ...node_access.entities import AccessGrant, NodeAccessStore, NodeScopeStore
from ...teams.entities import TeamDirectory
from ..entities.decision import AccessDecision, NodePermissions
from .permission_resolver import PermissionResolver
from .scope_controller import AccessScopeController

logger = logging.getLogger(__name__)


def _coerce_scope(scope) -> AccessScope:
    try:
        return AccessScope(scope)
    except ValueError:
        raise InvalidInputError(f"Unknown access scope: {scope!r}") from None


def _coerce_access_type(access_type) -> AccessType:
    try:
        return AccessType(access_type)
    except ValueError:
        raise InvalidInputError(f"Unknown access type: {access_type!r}") from None


class PermissionService:
    """Facade over the scope controller and the resolution engine."""

    def __init__(
        self,
        access_store: NodeAccessStore,
        scope_store: NodeScopeStore,
        directory: Optional[TeamDirectory] = None,
    ):
        self.directory = directory or TeamDirectory.unavailable()
        self.controller = AccessScopeController(access_store, scope_store)
        self.resolver = PermissionResolver(access_store, self.directory)
        self._access = access_store

    # Queries

    async def resolve(
        self,
        user_id: str,
        node_uuid: str,
        organization_id: Optional[str] = None,
    ) -> AccessDecision:
        return await self.resolver.resolve(user_id, node_uuid, organization_id)

    async def check_access(
        self,
        user_id: str,
        node_uuid: str,
        organization_id: Optional[str] = None,
    ) -> bool:
        return await self.resolver.check_access(user_id, node_uuid, organization_id)

    async def get_node_permissions(self, node_uuid: str) -> NodePermissions:
        """Summarize a node's scope, owner and shares."""
        scope = await self.controller.get_scope(node_uuid)
        permissions = NodePermissions(node_uuid=node_uuid, access_scope=scope)

        for grant in await self._access.list_by_node(format_node_id(node_uuid)):
            kind = grant.entity_id.kind
            if grant.is_owner:
                permissions.owner = grant.entity_id.raw_id
                permissions.organization_id = grant.organization_id
            elif grant.access_type == AccessType.WORKSPACE:
                permissions.workspace_id = grant.entity_id.raw_id
            elif kind == EntityType.USER:
                permissions.shared_with_users.append(grant.entity_id.raw_id)
            elif kind == EntityType.TEAM:
                permissions.shared_with_teams.append(grant.entity_id.raw_id)

        permissions.shared_with_users.sort()
        permissions.shared_with_teams.sort()
        return permissions

    async def get_accessible_nodes(
        self,
        user_id: str,
        organization_id: Optional[str] = None,
    ) -> List[str]:
        """Uuids of nodes the user reaches directly, via the workspace or via a team."""
        if not user_id:
            raise InvalidInputError("Empty user id")

        node_uuids: Set[str] = set()
        for grant in await self._access.list_by_entity(format_entity_id(EntityType.USER, user_id)):
            node_uuids.add(grant.node_id.uuid)

        if organization_id:
            for grant in await self._access.list_workspace_nodes(organization_id):
                node_uuids.add(grant.node_id.uuid)
            node_uuids.update(await self._team_accessible_nodes(user_id, organization_id))

        return sorted(node_uuids)

    async def _team_accessible_nodes(self, user_id: str, organization_id: str) -> Set[str]:
        if not self.directory.is_available:
            return set()

        try:
            user_internal_id = await self.directory.organizations.get_user_id_by_external_id(user_id)
            org_internal_id = await self.directory.organizations.get_organization_id_by_external_id(
                organization_id
            )
            teams = await self.directory.teams.get_user_teams(user_internal_id, org_internal_id)
        except (NotFoundError, StoreFailureError) as e:
            logger.warning(f"Skipping team nodes for user {user_id}: {e}")
            return set()

        node_uuids: Set[str] = set()
        for team in teams:
            entity_id = format_entity_id(EntityType.TEAM, team.team_external_id)
            try:
                grants = await self._access.list_by_entity(entity_id)
            except StoreFailureError as e:
                logger.warning(f"Skipping nodes of team {team.team_external_id}: {e}")
                continue
            node_uuids.update(grant.node_id.uuid for grant in grants)
        return node_uuids

    # Mutations

    async def register_node(
        self,
        node_uuid: str,
        owner_id: str,
        organization_id: Optional[str] = None,
    ) -> AccessGrant:
        return await self.controller.register_node(node_uuid, owner_id, organization_id)

    async def grant(
        self,
        entity_kind,
        raw_id: str,
        node_uuid: str,
        access_type,
        granted_by: str,
    ) -> AccessGrant:
        """Grant access, dispatching on (kind, access type).

        Accepted combinations: user+shared, team+shared, workspace+workspace.
        Owner grants are only created by register_node.
        """
        kind = coerce_entity_type(entity_kind)
        access_type = _coerce_access_type(access_type)

        if access_type == AccessType.OWNER:
            raise InvalidInputError("Owner grants are created with the node")
        if kind == EntityType.USER and access_type == AccessType.SHARED:
            return await self.controller.grant_user(node_uuid, raw_id, granted_by)
        if kind == EntityType.TEAM and access_type == AccessType.SHARED:
            return await self.controller.grant_team(node_uuid, raw_id, granted_by)
        if kind == EntityType.WORKSPACE and access_type == AccessType.WORKSPACE:
            return await self.controller.grant_workspace(node_uuid, raw_id, granted_by)
        raise InvalidInputError(
            f"Cannot grant {access_type.value} access to a {kind.value}",
            details={"entity_kind": kind.value, "access_type": access_type.value},
        )

    async def revoke(self, entity_kind, raw_id: str, node_uuid: str) -> None:
        await self.controller.revoke(node_uuid, coerce_entity_type(entity_kind), raw_id)

    async def set_scope(self, node_uuid: str, scope) -> AccessScope:
        """Change a node's scope. Returns the previous scope."""
        return await self.controller.set_scope(node_uuid, _coerce_scope(scope))

    async def purge_node(self, node_uuid: str) -> None:
        """Drop every grant and the scope of a deleted node."""
        await self.controller.remove_node(node_uuid)

    async def set_node_permissions(
        self,
        node_uuid: str,
        scope,
        users: Iterable[str] = (),
        teams: Iterable[str] = (),
        requested_by: str = "",
    ) -> NodePermissions:
        """Replace a node's scope and share list. Only the owner may do this."""
        scope = _coerce_scope(scope)
        users = list(dict.fromkeys(users))
        teams = list(dict.fromkeys(teams))

        owner = await self.controller.get_owner_grant(node_uuid)
        if owner is None:
            raise NodeNotFoundError(node_uuid)
        if owner.entity_id.raw_id != requested_by:
            raise PermissionDeniedError(
                f"Only the owner can change permissions of node {node_uuid}",
                details={"node_uuid": node_uuid},
            )

        organization_id = owner.organization_id
        if not organization_id and (scope != AccessScope.PRIVATE or users or teams):
            raise OrganizationIndependentNodeError(
                f"Node {node_uuid} has no organization and can only be private",
                node_uuid=node_uuid,
                scope=scope.value,
            )
        if scope != AccessScope.SHARED and (users or teams):
            raise ScopeViolationError(
                f"Users and teams can only be added to shared nodes, not {scope.value}",
                node_uuid=node_uuid,
                scope=scope.value,
            )

        await self._validate_principals(users, teams)

        desired = {owner.entity_id.value: owner}
        granted_by = EntityId.user(requested_by)
        node_id = NodeId(node_uuid)

        def _grant(entity_id: EntityId, access_type: AccessType) -> AccessGrant:
            return AccessGrant(
                entity_id=entity_id,
                node_id=node_id,
                access_type=access_type,
                granted_by=granted_by,
                organization_id=organization_id,
            )

        if scope == AccessScope.WORKSPACE:
            workspace = _grant(EntityId.workspace(organization_id), AccessType.WORKSPACE)
            desired[workspace.entity_id.value] = workspace
        for user_id in users:
            grant = _grant(EntityId.user(user_id), AccessType.SHARED)
            desired.setdefault(grant.entity_id.value, grant)
        for team_id in teams:
            grant = _grant(EntityId.team(team_id), AccessType.SHARED)
            desired.setdefault(grant.entity_id.value, grant)

        await self.controller.set_scope(node_uuid, scope)

        current = {grant.entity_id.value for grant in await self._access.list_by_node(node_id.value)}
        for entity_id in current - set(desired):
            await self._access.revoke(entity_id, node_id.value)
        await self._access.grant_many(
            grant for entity_id, grant in desired.items() if entity_id not in current
        )

        logger.info(
            f"Set permissions of node {node_uuid}: scope={scope.value} "
            f"users={len(users)} teams={len(teams)}"
        )
        return await self.get_node_permissions(node_uuid)

    async def _validate_principals(self, users: List[str], teams: List[str]) -> None:
        if not self.directory.is_available:
            return
        for user_id in users:
            if not await self.directory.organizations.user_exists(user_id):
                raise NotFoundError(f"User {user_id} does not exist", details={"user_id": user_id})
        for team_id in teams:
            if await self.directory.teams.get_team_by_external_id(team_id) is None:
                raise NotFoundError(f"Team {team_id} does not exist", details={"team_id": team_id})

    async def attach_to_organization(
        self,
        node_uuid: str,
        organization_id: str,
        requested_by: str,
    ) -> AccessGrant:
        """Attach an organization-independent node to an organization."""
        if not organization_id:
            raise InvalidInputError("Empty organization id")
        owner = await self.controller.get_owner_grant(node_uuid)
        if owner is None:
            raise NodeNotFoundError(node_uuid)
        if owner.entity_id.raw_id != requested_by:
            raise PermissionDeniedError(
                f"Only the owner can attach node {node_uuid}",
                details={"node_uuid": node_uuid},
            )
        if owner.organization_id:
            raise ScopeViolationError(
                f"Node {node_uuid} already belongs to organization {owner.organization_id}",
                node_uuid=node_uuid,
            )
        grant = await self.controller.reassign_owner_organization(node_uuid, organization_id)
        logger.info(f"Attached node {node_uuid} to organization {organization_id}")
        return grant

    async def detach_from_organization(
        self,
        node_uuid: str,
        requested_by: Optional[str] = None,
    ) -> AccessGrant:
        """Detach a node from its organization, leaving it private to its owner."""
        owner = await self.controller.get_owner_grant(node_uuid)
        if owner is None:
            raise NodeNotFoundError(node_uuid)
        if requested_by is not None and owner.entity_id.raw_id != requested_by:
            raise PermissionDeniedError(
                f"Only the owner can detach node {node_uuid}",
                details={"node_uuid": node_uuid},
            )
        if not owner.organization_id:
            raise OrganizationIndependentNodeError(
                f"Node {node_uuid} is not attached to an organization",
                node_uuid=node_uuid,
            )
        await self.controller.set_scope(node_uuid, AccessScope.PRIVATE)
        grant = await self.controller.reassign_owner_organization(node_uuid, None)
        logger.info(f"Detached node {node_uuid} from organization {owner.organization_id}")
        return grant
