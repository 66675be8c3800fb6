"""Permission resolution engine.

Answers "may this user use this node?" by trying, in order:

    1. direct     a grant held by the user (owner or shared)
    2. workspace  a workspace grant for the caller's organization
    3. team       a shared grant held by one of the user's teams

The first step that matches decides. Steps run sequentially because the
order also determines the reported access source.

Backend read failures during a step are logged and the step counts as no
match; resolution itself never raises for them.
"""

import logging
from typing import Awaitable, Callable, List, Optional, Tuple

from ....config.constants import EntityType
from ....core.exceptions import NotFoundError, StoreFailureError
from ....core.value_objects import format_entity_id, format_node_id
from ...node_access.entities import NodeAccessStore
from ...teams.entities import TeamDirectory, UserTeam
from ..entities.decision import AccessDecision, ResolutionRequest

logger = logging.getLogger(__name__)

ResolverStep = Callable[[ResolutionRequest], Awaitable[Optional[AccessDecision]]]


class PermissionResolver:
    """Read-only resolution over a node access store and an optional team directory."""

    def __init__(self, access_store: NodeAccessStore, directory: Optional[TeamDirectory] = None):
        self._access = access_store
        self._directory = directory or TeamDirectory.unavailable()
        self._steps: Tuple[ResolverStep, ...] = (
            self._check_direct,
            self._check_workspace,
            self._check_team,
        )

    @property
    def directory(self) -> TeamDirectory:
        return self._directory

    async def resolve(
        self,
        user_id: str,
        node_uuid: str,
        organization_id: Optional[str] = None,
    ) -> AccessDecision:
        """Resolve a user's access to a node."""
        request = ResolutionRequest(user_id, node_uuid, organization_id)
        if not request.is_complete:
            logger.debug("Denied access: missing user id or node uuid")
            return AccessDecision.denied()

        for step in self._steps:
            decision = await step(request)
            if decision is not None:
                logger.debug(
                    f"User {user_id} granted access to node {node_uuid} "
                    f"via {decision.access_source.value}"
                )
                return decision

        logger.debug(f"User {user_id} has no access to node {node_uuid}")
        return AccessDecision.denied()

    async def check_access(
        self,
        user_id: str,
        node_uuid: str,
        organization_id: Optional[str] = None,
    ) -> bool:
        decision = await self.resolve(user_id, node_uuid, organization_id)
        return decision.has_access

    async def _check_direct(self, request: ResolutionRequest) -> Optional[AccessDecision]:
        entity_id = format_entity_id(EntityType.USER, request.user_id)
        node_id = format_node_id(request.node_uuid)
        try:
            if not await self._access.has_access(entity_id, node_id):
                return None
            grants = await self._access.list_by_node(node_id)
        except StoreFailureError as e:
            logger.warning(f"Direct access check failed for {entity_id} on {node_id}: {e}")
            return None

        for grant in grants:
            if grant.entity_id.value == entity_id:
                return AccessDecision.direct(grant.access_type)

        # Revoked between the two reads
        logger.warning(f"Grant for {entity_id} on {node_id} vanished during resolution")
        return None

    async def _check_workspace(self, request: ResolutionRequest) -> Optional[AccessDecision]:
        if not request.has_organization:
            return None
        entity_id = format_entity_id(EntityType.WORKSPACE, request.organization_id)
        node_id = format_node_id(request.node_uuid)
        try:
            if await self._access.has_access(entity_id, node_id):
                return AccessDecision.workspace()
        except StoreFailureError as e:
            logger.warning(f"Workspace access check failed for {entity_id} on {node_id}: {e}")
        return None

    async def _check_team(self, request: ResolutionRequest) -> Optional[AccessDecision]:
        if not self._directory.is_available or not request.has_organization:
            return None

        teams = await self._lookup_teams(request)
        if not teams:
            return None

        node_id = format_node_id(request.node_uuid)
        team_entities = [
            (team, format_entity_id(EntityType.TEAM, team.team_external_id))
            for team in teams
        ]
        try:
            if not await self._access.batch_check([entity for _, entity in team_entities], node_id):
                return None
        except StoreFailureError as e:
            logger.warning(f"Team batch check failed on {node_id}: {e}")
            return None

        for team, entity_id in team_entities:
            try:
                if await self._access.has_access(entity_id, node_id):
                    return AccessDecision.team(team.team_external_id)
            except StoreFailureError as e:
                logger.warning(f"Team access check failed for {entity_id} on {node_id}: {e}")
        return None

    async def _lookup_teams(self, request: ResolutionRequest) -> List[UserTeam]:
        organizations = self._directory.organizations
        try:
            user_internal_id = await organizations.get_user_id_by_external_id(request.user_id)
            org_internal_id = await organizations.get_organization_id_by_external_id(
                request.organization_id
            )
            return await self._directory.teams.get_user_teams(user_internal_id, org_internal_id)
        except NotFoundError as e:
            logger.debug(f"Skipping team resolution for user {request.user_id}: {e}")
        except StoreFailureError as e:
            logger.error(f"Team lookup failed for user {request.user_id}: {e}")
        return []
