"""Access scope controller.

Keeps stored grants consistent with each node's scope:

    private    owner only
    workspace  owner + one workspace grant
    shared     owner + workspace grant + per-user/per-team shared grants

Scope changes are two-phase: the new scope is written first, then grants it
no longer permits are revoked one by one. A failure between or during those
steps leaves stale grants behind and surfaces as StoreFailureError; calling
set_scope again with the same scope finishes the cleanup.
"""

import logging
from typing import Optional, List

from ....config.constants import AccessScope, AccessType, EntityType
from ....core.exceptions import (
    InvalidInputError,
    NodeNotFoundError,
    OrganizationIndependentNodeError,
    OwnerGrantError,
    ScopeViolationError,
)
from ....core.value_objects import EntityId, NodeId, format_entity_id, format_node_id
from ...node_access.entities import AccessGrant, NodeAccessStore, NodeScopeStore

logger = logging.getLogger(__name__)


class AccessScopeController:
    """Scope state machine and scope-checked grant operations."""

    def __init__(self, access_store: NodeAccessStore, scope_store: NodeScopeStore):
        self._access = access_store
        self._scopes = scope_store

    @property
    def access_store(self) -> NodeAccessStore:
        return self._access

    @property
    def scope_store(self) -> NodeScopeStore:
        return self._scopes

    async def get_scope(self, node_uuid: str) -> AccessScope:
        """Current scope of a node. Raises NodeNotFoundError for unknown nodes."""
        scope = await self._scopes.get_scope(format_node_id(node_uuid))
        if scope is None:
            raise NodeNotFoundError(node_uuid)
        return scope

    async def get_owner_grant(self, node_uuid: str) -> Optional[AccessGrant]:
        for grant in await self._access.list_by_node(format_node_id(node_uuid)):
            if grant.is_owner:
                return grant
        return None

    async def _require_owner_grant(self, node_uuid: str) -> AccessGrant:
        owner = await self.get_owner_grant(node_uuid)
        if owner is None:
            raise NodeNotFoundError(node_uuid)
        return owner

    # Node lifecycle

    async def register_node(
        self,
        node_uuid: str,
        owner_id: str,
        organization_id: Optional[str] = None,
    ) -> AccessGrant:
        """Create the owner grant and a private scope for a new node.

        Raises OwnerGrantError if the node already has a scope record or an
        owner grant.
        """
        owner = EntityId.user(owner_id)
        grant = AccessGrant(
            entity_id=owner,
            node_id=NodeId(node_uuid),
            access_type=AccessType.OWNER,
            granted_by=owner,
            organization_id=organization_id or None,
        )
        existing_scope = await self._scopes.get_scope(grant.node_id.value)
        if existing_scope is not None or await self.get_owner_grant(node_uuid) is not None:
            raise OwnerGrantError(
                f"Node {node_uuid} is already registered",
                node_uuid=node_uuid,
                scope=existing_scope.value if existing_scope else None,
            )
        await self._access.grant(grant)
        await self._scopes.set_scope(grant.node_id.value, AccessScope.PRIVATE)
        logger.info(f"Registered node {node_uuid} owned by {owner_id}")
        return grant

    async def remove_node(self, node_uuid: str) -> None:
        """Remove every grant on a node, owner included, then its scope."""
        node_id = format_node_id(node_uuid)
        await self._access.purge_node(node_id)
        await self._scopes.delete_scope(node_id)
        logger.info(f"Removed node {node_uuid}")

    # Scope transitions

    async def set_scope(self, node_uuid: str, new_scope: AccessScope) -> AccessScope:
        """Move a node to a new scope, revoking grants it no longer permits.

        Returns the previous scope.
        """
        new_scope = AccessScope(new_scope)
        current = await self.get_scope(node_uuid)

        if new_scope != AccessScope.PRIVATE:
            owner = await self._require_owner_grant(node_uuid)
            if not owner.organization_id:
                raise OrganizationIndependentNodeError(
                    f"Node {node_uuid} has no organization and can only be private",
                    node_uuid=node_uuid,
                    scope=new_scope.value,
                )

        node_id = format_node_id(node_uuid)
        await self._scopes.set_scope(node_id, new_scope)
        logger.info(f"Node {node_uuid} scope {current.value} -> {new_scope.value}")

        if not current.is_narrower_than(new_scope):
            await self.purge_stale_grants(node_uuid, new_scope)
        return current

    async def purge_stale_grants(self, node_uuid: str, scope: AccessScope) -> List[AccessGrant]:
        """Revoke grants the scope does not permit. The owner grant always stays."""
        node_id = format_node_id(node_uuid)
        stale = [
            grant for grant in await self._access.list_by_node(node_id)
            if not grant.is_owner and not scope.permits(grant.access_type)
        ]
        for grant in stale:
            await self._access.revoke(grant.entity_id.value, node_id)
        if stale:
            logger.info(f"Purged {len(stale)} stale grants from node {node_uuid} ({scope.value})")
        return stale

    # Scope-checked grants

    async def _require_scope(self, node_uuid: str, access_type: AccessType) -> AccessScope:
        scope = await self.get_scope(node_uuid)
        if not scope.permits(access_type):
            raise ScopeViolationError(
                f"Cannot grant {access_type.value} access on node {node_uuid} with scope {scope.value}",
                node_uuid=node_uuid,
                scope=scope.value,
            )
        return scope

    async def _grant_shared(
        self,
        node_uuid: str,
        entity_id: EntityId,
        granted_by: str,
    ) -> AccessGrant:
        await self._require_scope(node_uuid, AccessType.SHARED)
        owner = await self._require_owner_grant(node_uuid)
        if owner.entity_id == entity_id:
            raise OwnerGrantError(
                f"{entity_id} already owns node {node_uuid}",
                node_uuid=node_uuid,
            )
        grant = AccessGrant(
            entity_id=entity_id,
            node_id=NodeId(node_uuid),
            access_type=AccessType.SHARED,
            granted_by=EntityId.user(granted_by),
            organization_id=owner.organization_id,
        )
        await self._access.grant(grant)
        return grant

    async def grant_user(self, node_uuid: str, user_id: str, granted_by: str) -> AccessGrant:
        """Share a node with one user. Requires shared scope."""
        return await self._grant_shared(node_uuid, EntityId.user(user_id), granted_by)

    async def grant_team(self, node_uuid: str, team_id: str, granted_by: str) -> AccessGrant:
        """Share a node with one team. Requires shared scope."""
        return await self._grant_shared(node_uuid, EntityId.team(team_id), granted_by)

    async def grant_workspace(self, node_uuid: str, workspace_id: str, granted_by: str) -> AccessGrant:
        """Expose a node to a workspace, replacing any other workspace grant.

        Requires workspace or shared scope.
        """
        await self._require_scope(node_uuid, AccessType.WORKSPACE)
        owner = await self._require_owner_grant(node_uuid)
        entity_id = EntityId.workspace(workspace_id)
        node_id = format_node_id(node_uuid)

        grant = AccessGrant(
            entity_id=entity_id,
            node_id=NodeId(node_uuid),
            access_type=AccessType.WORKSPACE,
            granted_by=EntityId.user(granted_by),
            organization_id=owner.organization_id,
        )
        # Write before revoking: the node always keeps one workspace grant
        await self._access.grant(grant)

        for existing in await self._access.list_by_node(node_id):
            if existing.access_type == AccessType.WORKSPACE and existing.entity_id != entity_id:
                await self._access.revoke(existing.entity_id.value, node_id)
                logger.info(f"Replaced workspace grant {existing.entity_id} on node {node_uuid}")
        return grant

    async def revoke(self, node_uuid: str, kind: EntityType, raw_id: str) -> None:
        """Revoke one grant. Idempotent; the owner grant cannot be revoked."""
        entity_id = format_entity_id(kind, raw_id)
        node_id = format_node_id(node_uuid)
        owner = await self.get_owner_grant(node_uuid)
        if owner is not None and owner.entity_id.value == entity_id:
            raise OwnerGrantError(
                f"Cannot revoke owner access on node {node_uuid}",
                node_uuid=node_uuid,
            )
        await self._access.revoke(entity_id, node_id)

    async def reassign_owner_organization(
        self,
        node_uuid: str,
        organization_id: Optional[str],
    ) -> AccessGrant:
        """Rewrite the owner grant with a new organization (None detaches)."""
        owner = await self._require_owner_grant(node_uuid)
        if organization_id is not None and not organization_id:
            raise InvalidInputError("Empty organization id")
        grant = AccessGrant(
            entity_id=owner.entity_id,
            node_id=owner.node_id,
            access_type=AccessType.OWNER,
            granted_by=owner.entity_id,
            organization_id=organization_id,
        )
        await self._access.grant(grant)
        return grant
