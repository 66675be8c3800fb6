"""Team directory SQL query constants (parameterized by {schema})."""

TEAM_LIST_BY_USER_AND_ORGANIZATION = """
    SELECT
        t.id AS team_id,
        t.node_id AS team_node_id,
        t.name AS team_name,
        tu.user_id,
        ot.organization_id
    FROM {schema}.teams t
    JOIN {schema}.team_user tu ON tu.team_id = t.id
    JOIN {schema}.organization_team ot ON ot.team_id = t.id
    WHERE tu.user_id = $1
      AND ot.organization_id = $2
"""

TEAM_GET_BY_NODE_ID = """
    SELECT
        t.id,
        t.name,
        t.node_id,
        ot.organization_id
    FROM {schema}.teams t
    JOIN {schema}.organization_team ot ON ot.team_id = t.id
    WHERE t.node_id = $1
"""

USER_GET_ID_BY_NODE_ID = """
    SELECT id FROM {schema}.users
    WHERE node_id = $1
"""

ORGANIZATION_GET_ID_BY_NODE_ID = """
    SELECT id FROM {schema}.organizations
    WHERE node_id = $1
"""

USER_EXISTS_BY_NODE_ID = """
    SELECT EXISTS(
        SELECT 1 FROM {schema}.users
        WHERE node_id = $1
    )
"""
