"""Tests for the permission service facade."""

import pytest

from compute_access.config.constants import AccessScope, AccessSource, AccessType, EntityType
from compute_access.core.exceptions import (
    InvalidInputError,
    InvalidKindError,
    NodeNotFoundError,
    NotFoundError,
    OrganizationIndependentNodeError,
    OwnerGrantError,
    PermissionDeniedError,
    ScopeViolationError,
)
from compute_access.features.permissions import PermissionService
from compute_access.features.node_access import InMemoryNodeAccessStore, InMemoryNodeScopeStore


NODE = "3f1c9a52-6d0e-4b7a-9c1e-2a8d5f4b7e10"
NODE_ID = f"node#{NODE}"
OWNER = "N:user:owner"
OTHER = "N:user:other"
ORG = "N:organization:acme"
TEAM = "N:team:analysts"


@pytest.fixture
def service(permission_service):
    return permission_service


async def entities_on_node(access_store):
    return {grant.entity_id.value: grant.access_type for grant in await access_store.list_by_node(NODE_ID)}


class TestGrantDispatch:

    @pytest.mark.asyncio
    async def test_user_shared(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_scope(NODE, "shared")

        grant = await service.grant("user", OTHER, NODE, "shared", OWNER)

        assert grant.entity_id.kind == EntityType.USER
        assert await access_store.has_access(f"user#{OTHER}", NODE_ID)

    @pytest.mark.asyncio
    async def test_team_shared(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_scope(NODE, AccessScope.SHARED)

        await service.grant(EntityType.TEAM, TEAM, NODE, AccessType.SHARED, OWNER)

        assert await access_store.has_access(f"team#{TEAM}", NODE_ID)

    @pytest.mark.asyncio
    async def test_workspace(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_scope(NODE, AccessScope.WORKSPACE)

        await service.grant("workspace", ORG, NODE, "workspace", OWNER)

        assert await access_store.has_access(f"workspace#{ORG}", NODE_ID)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind,access_type", [
        ("user", "workspace"),
        ("team", "workspace"),
        ("workspace", "shared"),
        ("user", "owner"),
    ])
    async def test_invalid_combinations(self, service, kind, access_type):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_scope(NODE, AccessScope.SHARED)

        with pytest.raises(InvalidInputError):
            await service.grant(kind, OTHER, NODE, access_type, OWNER)

    @pytest.mark.asyncio
    async def test_unknown_kind_and_type(self, service):
        with pytest.raises(InvalidKindError):
            await service.grant("group", "g1", NODE, "shared", OWNER)
        with pytest.raises(InvalidInputError):
            await service.grant("user", OTHER, NODE, "admin", OWNER)

    @pytest.mark.asyncio
    async def test_revoke(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_scope(NODE, AccessScope.SHARED)
        await service.grant("user", OTHER, NODE, "shared", OWNER)

        await service.revoke("user", OTHER, NODE)

        assert not await access_store.has_access(f"user#{OTHER}", NODE_ID)

    @pytest.mark.asyncio
    async def test_unknown_scope(self, service):
        await service.register_node(NODE, OWNER, ORG)

        with pytest.raises(InvalidInputError):
            await service.set_scope(NODE, "public")


class TestSetNodePermissions:

    @pytest.mark.asyncio
    async def test_shared_with_users_and_teams(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)

        permissions = await service.set_node_permissions(
            NODE, "shared", users=[OTHER, OTHER], teams=[TEAM], requested_by=OWNER,
        )

        assert permissions.access_scope == AccessScope.SHARED
        assert permissions.owner == OWNER
        assert permissions.shared_with_users == [OTHER]
        assert permissions.shared_with_teams == [TEAM]
        assert await entities_on_node(access_store) == {
            f"user#{OWNER}": AccessType.OWNER,
            f"user#{OTHER}": AccessType.SHARED,
            f"team#{TEAM}": AccessType.SHARED,
        }

    @pytest.mark.asyncio
    async def test_replaces_previous_shares(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_node_permissions(NODE, "shared", users=[OTHER], teams=[TEAM], requested_by=OWNER)

        permissions = await service.set_node_permissions(
            NODE, "shared", teams=[TEAM], requested_by=OWNER,
        )

        assert permissions.shared_with_users == []
        assert not await access_store.has_access(f"user#{OTHER}", NODE_ID)
        assert await access_store.has_access(f"team#{TEAM}", NODE_ID)

    @pytest.mark.asyncio
    async def test_workspace_scope_adds_workspace_grant(self, service):
        await service.register_node(NODE, OWNER, ORG)

        permissions = await service.set_node_permissions(NODE, "workspace", requested_by=OWNER)

        assert permissions.access_scope == AccessScope.WORKSPACE
        assert permissions.workspace_id == ORG

    @pytest.mark.asyncio
    async def test_back_to_private_keeps_only_owner(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_node_permissions(NODE, "shared", users=[OTHER], requested_by=OWNER)

        await service.set_node_permissions(NODE, "private", requested_by=OWNER)

        assert await entities_on_node(access_store) == {f"user#{OWNER}": AccessType.OWNER}

    @pytest.mark.asyncio
    async def test_owner_only(self, service):
        await service.register_node(NODE, OWNER, ORG)

        with pytest.raises(PermissionDeniedError):
            await service.set_node_permissions(NODE, "shared", requested_by=OTHER)

    @pytest.mark.asyncio
    async def test_unknown_node(self, service):
        with pytest.raises(NodeNotFoundError):
            await service.set_node_permissions(NODE, "private", requested_by=OWNER)

    @pytest.mark.asyncio
    async def test_organization_independent_node(self, service):
        await service.register_node(NODE, OWNER)

        with pytest.raises(OrganizationIndependentNodeError):
            await service.set_node_permissions(NODE, "workspace", requested_by=OWNER)

        permissions = await service.set_node_permissions(NODE, "private", requested_by=OWNER)
        assert permissions.is_organization_independent

    @pytest.mark.asyncio
    async def test_users_need_shared_scope(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)

        with pytest.raises(ScopeViolationError):
            await service.set_node_permissions(NODE, "workspace", users=[OTHER], requested_by=OWNER)
        assert await entities_on_node(access_store) == {f"user#{OWNER}": AccessType.OWNER}

    @pytest.mark.asyncio
    async def test_missing_user(self, service):
        await service.register_node(NODE, OWNER, ORG)

        with pytest.raises(NotFoundError) as exc_info:
            await service.set_node_permissions(NODE, "shared", users=["N:user:ghost"], requested_by=OWNER)
        assert exc_info.value.details == {"user_id": "N:user:ghost"}

    @pytest.mark.asyncio
    async def test_missing_team(self, service):
        await service.register_node(NODE, OWNER, ORG)

        with pytest.raises(NotFoundError):
            await service.set_node_permissions(NODE, "shared", teams=["N:team:ghost"], requested_by=OWNER)

    @pytest.mark.asyncio
    async def test_without_directory_principals_are_not_validated(self):
        service = PermissionService(InMemoryNodeAccessStore(), InMemoryNodeScopeStore())
        await service.register_node(NODE, OWNER, ORG)

        permissions = await service.set_node_permissions(
            NODE, "shared", users=["N:user:anyone"], requested_by=OWNER,
        )

        assert permissions.shared_with_users == ["N:user:anyone"]


class TestQueries:

    @pytest.mark.asyncio
    async def test_get_node_permissions(self, service):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_scope(NODE, AccessScope.SHARED)
        await service.grant("workspace", ORG, NODE, "workspace", OWNER)
        await service.grant("user", "N:user:b", NODE, "shared", OWNER)
        await service.grant("user", "N:user:a", NODE, "shared", OWNER)

        permissions = await service.get_node_permissions(NODE)

        assert permissions.owner == OWNER
        assert permissions.organization_id == ORG
        assert permissions.workspace_id == ORG
        assert permissions.shared_with_users == ["N:user:a", "N:user:b"]
        assert permissions.shared_with_teams == []

    @pytest.mark.asyncio
    async def test_get_node_permissions_unknown_node(self, service):
        with pytest.raises(NodeNotFoundError):
            await service.get_node_permissions(NODE)

    @pytest.mark.asyncio
    async def test_resolve_delegates(self, service):
        await service.register_node(NODE, OWNER, ORG)

        decision = await service.resolve(OWNER, NODE, ORG)

        assert decision.access_source == AccessSource.DIRECT
        assert await service.check_access(OWNER, NODE)
        assert not await service.check_access(OTHER, NODE)

    @pytest.mark.asyncio
    async def test_get_accessible_nodes(self, service):
        await service.register_node("n-owned", OTHER, ORG)
        await service.register_node("n-workspace", OWNER, ORG)
        await service.set_scope("n-workspace", AccessScope.WORKSPACE)
        await service.grant("workspace", ORG, "n-workspace", "workspace", OWNER)
        await service.register_node("n-team", OWNER, ORG)
        await service.set_scope("n-team", AccessScope.SHARED)
        await service.grant("team", TEAM, "n-team", "shared", OWNER)
        await service.register_node("n-private", OWNER, ORG)

        assert await service.get_accessible_nodes(OTHER, ORG) == ["n-owned", "n-team", "n-workspace"]
        assert await service.get_accessible_nodes(OTHER) == ["n-owned"]

    @pytest.mark.asyncio
    async def test_get_accessible_nodes_requires_user(self, service):
        with pytest.raises(InvalidInputError):
            await service.get_accessible_nodes("")


class TestOrganizationMembership:

    @pytest.mark.asyncio
    async def test_attach(self, service):
        await service.register_node(NODE, OWNER)

        grant = await service.attach_to_organization(NODE, ORG, requested_by=OWNER)

        assert grant.organization_id == ORG
        await service.set_scope(NODE, AccessScope.SHARED)

    @pytest.mark.asyncio
    async def test_attach_rejections(self, service):
        await service.register_node(NODE, OWNER)

        with pytest.raises(InvalidInputError):
            await service.attach_to_organization(NODE, "", requested_by=OWNER)
        with pytest.raises(PermissionDeniedError):
            await service.attach_to_organization(NODE, ORG, requested_by=OTHER)
        with pytest.raises(NodeNotFoundError):
            await service.attach_to_organization("missing", ORG, requested_by=OWNER)

        await service.attach_to_organization(NODE, ORG, requested_by=OWNER)
        with pytest.raises(ScopeViolationError):
            await service.attach_to_organization(NODE, "N:organization:other", requested_by=OWNER)

    @pytest.mark.asyncio
    async def test_detach_makes_node_private(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_node_permissions(NODE, "shared", users=[OTHER], requested_by=OWNER)

        grant = await service.detach_from_organization(NODE, requested_by=OWNER)

        assert grant.organization_id is None
        assert await service.controller.get_scope(NODE) == AccessScope.PRIVATE
        assert await entities_on_node(access_store) == {f"user#{OWNER}": AccessType.OWNER}

    @pytest.mark.asyncio
    async def test_detach_organization_independent_node(self, service):
        await service.register_node(NODE, OWNER)

        with pytest.raises(OrganizationIndependentNodeError):
            await service.detach_from_organization(NODE)


class TestRegisterNode:

    @pytest.mark.asyncio
    async def test_second_registration_is_rejected(self, service):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_node_permissions(NODE, "shared", users=[OTHER], requested_by=OWNER)

        with pytest.raises(OwnerGrantError):
            await service.register_node(NODE, OTHER, ORG)

        permissions = await service.get_node_permissions(NODE)
        assert permissions.owner == OWNER
        assert permissions.access_scope == AccessScope.SHARED
        assert permissions.shared_with_users == [OTHER]


class TestPurgeNode:

    @pytest.mark.asyncio
    async def test_purge_node(self, service, access_store):
        await service.register_node(NODE, OWNER, ORG)
        await service.set_node_permissions(NODE, "shared", users=[OTHER], teams=[TEAM], requested_by=OWNER)

        await service.purge_node(NODE)

        assert await access_store.list_by_node(NODE_ID) == []
        assert not await service.check_access(OWNER, NODE)
        with pytest.raises(NodeNotFoundError):
            await service.get_node_permissions(NODE)
