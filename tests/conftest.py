"""Pytest configuration and fixtures for compute-access tests."""

from typing import Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from compute_access.core.exceptions import NotFoundError
from compute_access.features.node_access import InMemoryNodeAccessStore, InMemoryNodeScopeStore
from compute_access.features.permissions.services import (
    AccessScopeController,
    PermissionResolver,
    PermissionService,
)
from compute_access.features.teams import Team, TeamDirectory, UserTeam


NODE_UUID = "3f1c9a52-6d0e-4b7a-9c1e-2a8d5f4b7e10"
OWNER_ID = "N:user:owner"
OTHER_USER_ID = "N:user:other"
ORG_ID = "N:organization:acme"
TEAM_ID = "N:team:analysts"


class StaticTeamLookup:
    """Team lookup backed by a dict of (user internal id, org internal id) -> teams."""

    def __init__(self, memberships: Optional[Dict[tuple, List[UserTeam]]] = None,
                 teams: Optional[Dict[str, Team]] = None):
        self.memberships = memberships or {}
        self.teams = teams or {}
        self.calls = []

    async def get_user_teams(self, user_internal_id: int, org_internal_id: int) -> List[UserTeam]:
        self.calls.append((user_internal_id, org_internal_id))
        return list(self.memberships.get((user_internal_id, org_internal_id), []))

    async def get_team_by_external_id(self, external_id: str) -> Optional[Team]:
        return self.teams.get(external_id)


class StaticOrganizationLookup:
    """Organization lookup backed by dicts of external -> internal ids."""

    def __init__(self, users: Optional[Dict[str, int]] = None,
                 organizations: Optional[Dict[str, int]] = None):
        self.users = users or {}
        self.organizations = organizations or {}

    async def get_user_id_by_external_id(self, user_id: str) -> int:
        if user_id not in self.users:
            raise NotFoundError(f"User {user_id} not found")
        return self.users[user_id]

    async def get_organization_id_by_external_id(self, organization_id: str) -> int:
        if organization_id not in self.organizations:
            raise NotFoundError(f"Organization {organization_id} not found")
        return self.organizations[organization_id]

    async def user_exists(self, user_id: str) -> bool:
        return user_id in self.users


def make_user_team(team_external_id: str, team_id: int = 1) -> UserTeam:
    return UserTeam(team_id=team_id, team_external_id=team_external_id, team_name=team_external_id)


@pytest.fixture
def access_store():
    """In-memory node access store."""
    return InMemoryNodeAccessStore()


@pytest.fixture
def scope_store():
    """In-memory node scope store."""
    return InMemoryNodeScopeStore()


@pytest.fixture
def team_lookup():
    """Team lookup where OTHER_USER_ID belongs to TEAM_ID in ORG_ID."""
    return StaticTeamLookup(
        memberships={(2, 100): [make_user_team(TEAM_ID, team_id=7)]},
        teams={TEAM_ID: Team(id=7, external_id=TEAM_ID, name="Analysts", organization_id=100)},
    )


@pytest.fixture
def organization_lookup():
    return StaticOrganizationLookup(
        users={OWNER_ID: 1, OTHER_USER_ID: 2},
        organizations={ORG_ID: 100},
    )


@pytest.fixture
def team_directory(team_lookup, organization_lookup):
    return TeamDirectory.available(team_lookup, organization_lookup)


@pytest.fixture
def controller(access_store, scope_store):
    return AccessScopeController(access_store, scope_store)


@pytest.fixture
def resolver(access_store, team_directory):
    return PermissionResolver(access_store, team_directory)


@pytest.fixture
def permission_service(access_store, scope_store, team_directory):
    return PermissionService(access_store, scope_store, team_directory)


@pytest.fixture
def mock_database():
    """Mock DatabaseManager for asyncpg repository tests."""
    mock_db = AsyncMock()
    mock_db.execute = AsyncMock(return_value="OK")
    mock_db.executemany = AsyncMock(return_value=None)
    mock_db.fetch = AsyncMock(return_value=[])
    mock_db.fetchrow = AsyncMock(return_value=None)
    mock_db.fetchval = AsyncMock(return_value=None)
    return mock_db
