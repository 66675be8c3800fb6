"""Feature modules: node_access, teams, permissions."""
