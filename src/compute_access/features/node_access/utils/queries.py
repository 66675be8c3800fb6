"""Node access SQL query constants.

All queries are parameterized by the qualified table name ({table}),
e.g. compute.node_access.
"""

# Schema
NODE_ACCESS_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS {table} (
        entity_id TEXT NOT NULL,
        node_id TEXT NOT NULL,
        entity_type TEXT NOT NULL,
        entity_raw_id TEXT NOT NULL,
        node_uuid TEXT NOT NULL,
        access_type TEXT NOT NULL,
        organization_id TEXT,
        granted_at TIMESTAMPTZ NOT NULL DEFAULT NOW(),
        granted_by TEXT NOT NULL,
        PRIMARY KEY (entity_id, node_id)
    )
"""

NODE_ACCESS_CREATE_NODE_INDEX = """
    CREATE INDEX IF NOT EXISTS {index_name} ON {table} (node_id)
"""

NODE_SCOPE_CREATE_TABLE = """
    CREATE TABLE IF NOT EXISTS {table} (
        node_id TEXT PRIMARY KEY,
        access_scope TEXT NOT NULL,
        updated_at TIMESTAMPTZ NOT NULL DEFAULT NOW()
    )
"""

# Grant queries
NODE_ACCESS_UPSERT = """
    INSERT INTO {table} (
        entity_id, node_id, entity_type, entity_raw_id, node_uuid,
        access_type, organization_id, granted_at, granted_by
    ) VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9)
    ON CONFLICT (entity_id, node_id) DO UPDATE SET
        entity_type = EXCLUDED.entity_type,
        entity_raw_id = EXCLUDED.entity_raw_id,
        node_uuid = EXCLUDED.node_uuid,
        access_type = EXCLUDED.access_type,
        organization_id = EXCLUDED.organization_id,
        granted_at = EXCLUDED.granted_at,
        granted_by = EXCLUDED.granted_by
"""

NODE_ACCESS_DELETE = """
    DELETE FROM {table}
    WHERE entity_id = $1 AND node_id = $2
"""

NODE_ACCESS_EXISTS = """
    SELECT EXISTS(
        SELECT 1 FROM {table}
        WHERE entity_id = $1 AND node_id = $2
    )
"""

NODE_ACCESS_EXISTS_ANY = """
    SELECT EXISTS(
        SELECT 1 FROM {table}
        WHERE entity_id = ANY($1::text[]) AND node_id = $2
    )
"""

NODE_ACCESS_LIST_BY_NODE = """
    SELECT entity_id, node_id, access_type, organization_id, granted_at, granted_by
    FROM {table}
    WHERE node_id = $1
"""

NODE_ACCESS_LIST_BY_ENTITY = """
    SELECT entity_id, node_id, access_type, organization_id, granted_at, granted_by
    FROM {table}
    WHERE entity_id = $1
"""

NODE_ACCESS_LIST_WORKSPACE_NODES = """
    SELECT entity_id, node_id, access_type, organization_id, granted_at, granted_by
    FROM {table}
    WHERE entity_id = $1 AND access_type = $2
"""

# Scope queries
NODE_SCOPE_GET = """
    SELECT access_scope FROM {table}
    WHERE node_id = $1
"""

NODE_SCOPE_UPSERT = """
    INSERT INTO {table} (node_id, access_scope, updated_at)
    VALUES ($1, $2, NOW())
    ON CONFLICT (node_id) DO UPDATE SET
        access_scope = EXCLUDED.access_scope,
        updated_at = EXCLUDED.updated_at
"""

NODE_SCOPE_DELETE = """
    DELETE FROM {table}
    WHERE node_id = $1
"""
