"""Tests for the asyncpg node access and scope stores."""

from datetime import datetime, timezone
from unittest.mock import call

import pytest

from compute_access.config.constants import AccessScope, AccessType
from compute_access.core.exceptions import StoreFailureError
from compute_access.core.value_objects import EntityId, NodeId
from compute_access.features.node_access import (
    AccessGrant,
    AsyncPGNodeAccessStore,
    AsyncPGNodeScopeStore,
)


TABLE = "compute.node_access"
SCOPE_TABLE = "compute.node_access_scope"
GRANTED_AT = datetime(2024, 5, 1, tzinfo=timezone.utc)


def grant_row(entity_id: str, node_id: str = "node#n1", access_type: str = "shared",
              organization_id: str = "org-1") -> dict:
    return {
        "entity_id": entity_id,
        "node_id": node_id,
        "access_type": access_type,
        "organization_id": organization_id,
        "granted_at": GRANTED_AT,
        "granted_by": "user#owner",
    }


class TestAsyncPGNodeAccessStore:

    @pytest.fixture
    def store(self, mock_database):
        return AsyncPGNodeAccessStore(mock_database, table=TABLE)

    @pytest.mark.asyncio
    async def test_grant_upserts(self, store, mock_database):
        grant = AccessGrant(
            entity_id=EntityId.user("u1"),
            node_id=NodeId("n1"),
            access_type=AccessType.SHARED,
            granted_by=EntityId.user("owner"),
            granted_at=GRANTED_AT,
            organization_id="org-1",
        )

        await store.grant(grant)

        query, *params = mock_database.execute.call_args[0]
        assert f"INSERT INTO {TABLE}" in query
        assert "ON CONFLICT (entity_id, node_id) DO UPDATE" in query
        assert params == [
            "user#u1", "node#n1", "user", "u1", "n1", "shared", "org-1", GRANTED_AT, "user#owner",
        ]

    @pytest.mark.asyncio
    async def test_grant_many_uses_executemany(self, store, mock_database):
        grants = [
            AccessGrant(EntityId.user(f"u{i}"), NodeId("n1"), AccessType.SHARED, EntityId.user("owner"))
            for i in range(3)
        ]

        await store.grant_many(grants)

        query, rows = mock_database.executemany.call_args[0]
        assert f"INSERT INTO {TABLE}" in query
        assert len(rows) == 3

    @pytest.mark.asyncio
    async def test_grant_many_empty_is_noop(self, store, mock_database):
        await store.grant_many([])
        mock_database.executemany.assert_not_called()

    @pytest.mark.asyncio
    async def test_revoke(self, store, mock_database):
        await store.revoke("user#u1", "node#n1")

        query, entity_id, node_id = mock_database.execute.call_args[0]
        assert f"DELETE FROM {TABLE}" in query
        assert (entity_id, node_id) == ("user#u1", "node#n1")

    @pytest.mark.asyncio
    async def test_has_access(self, store, mock_database):
        mock_database.fetchval.return_value = True
        assert await store.has_access("user#u1", "node#n1") is True

        mock_database.fetchval.return_value = False
        assert await store.has_access("user#u1", "node#n1") is False

    @pytest.mark.asyncio
    async def test_list_by_node_maps_rows(self, store, mock_database):
        mock_database.fetch.return_value = [
            grant_row("user#owner", access_type="owner"),
            grant_row("team#t1", organization_id=None),
        ]

        grants = await store.list_by_node("node#n1")

        assert [grant.entity_id for grant in grants] == [EntityId.user("owner"), EntityId.team("t1")]
        assert grants[0].access_type == AccessType.OWNER
        assert grants[1].organization_id is None
        assert grants[0].granted_by == EntityId.user("owner")

    @pytest.mark.asyncio
    async def test_list_workspace_nodes_filters_by_type(self, store, mock_database):
        mock_database.fetch.return_value = [grant_row("workspace#org-1", access_type="workspace")]

        grants = await store.list_workspace_nodes("org-1")

        query, entity_id, access_type = mock_database.fetch.call_args[0]
        assert (entity_id, access_type) == ("workspace#org-1", "workspace")
        assert grants[0].access_type == AccessType.WORKSPACE

    @pytest.mark.asyncio
    async def test_batch_check_single_round_trip(self, store, mock_database):
        mock_database.fetchval.return_value = True

        assert await store.batch_check({"team#t1"}, "node#n1")

        query, entity_ids, node_id = mock_database.fetchval.call_args[0]
        assert "ANY($1::text[])" in query
        assert entity_ids == ["team#t1"]
        assert mock_database.fetchval.call_count == 1

    @pytest.mark.asyncio
    async def test_batch_check_empty_skips_query(self, store, mock_database):
        assert not await store.batch_check([], "node#n1")
        mock_database.fetchval.assert_not_called()

    @pytest.mark.asyncio
    async def test_purge_node_deletes_record_by_record(self, store, mock_database):
        mock_database.fetch.return_value = [
            grant_row("user#owner", access_type="owner"),
            grant_row("user#u1"),
        ]

        await store.purge_node("node#n1")

        delete_query = mock_database.execute.call_args_list[0][0][0]
        assert mock_database.execute.call_args_list == [
            call(delete_query, "user#owner", "node#n1"),
            call(delete_query, "user#u1", "node#n1"),
        ]

    @pytest.mark.asyncio
    async def test_backend_error_becomes_store_failure(self, store, mock_database):
        backend_error = ConnectionError("connection reset")
        mock_database.execute.side_effect = backend_error

        with pytest.raises(StoreFailureError) as exc_info:
            await store.revoke("user#u1", "node#n1")

        assert exc_info.value.operation == "revoke"
        assert exc_info.value.__cause__ is backend_error

    @pytest.mark.asyncio
    async def test_ensure_schema(self, store, mock_database):
        await store.ensure_schema()

        queries = [args[0][0] for args in mock_database.execute.call_args_list]
        assert f"CREATE TABLE IF NOT EXISTS {TABLE}" in queries[0]
        assert "compute_node_access_node_idx" in queries[1]

    def test_default_table_from_settings(self, mock_database):
        assert AsyncPGNodeAccessStore(mock_database).table == "compute.node_access"


class TestAsyncPGNodeScopeStore:

    @pytest.fixture
    def store(self, mock_database):
        return AsyncPGNodeScopeStore(mock_database, table=SCOPE_TABLE)

    @pytest.mark.asyncio
    async def test_get_scope(self, store, mock_database):
        mock_database.fetchval.return_value = "workspace"
        assert await store.get_scope("node#n1") == AccessScope.WORKSPACE

    @pytest.mark.asyncio
    async def test_get_scope_missing(self, store, mock_database):
        mock_database.fetchval.return_value = None
        assert await store.get_scope("node#n1") is None

    @pytest.mark.asyncio
    async def test_set_scope(self, store, mock_database):
        await store.set_scope("node#n1", AccessScope.SHARED)

        query, node_id, scope = mock_database.execute.call_args[0]
        assert f"INSERT INTO {SCOPE_TABLE}" in query
        assert (node_id, scope) == ("node#n1", "shared")

    @pytest.mark.asyncio
    async def test_delete_scope_failure(self, store, mock_database):
        mock_database.execute.side_effect = OSError("down")

        with pytest.raises(StoreFailureError):
            await store.delete_scope("node#n1")
