"""Node access repositories.

In-memory implementations for tests and single-process use, asyncpg
implementations for PostgreSQL.
"""

from .memory_node_access_store import InMemoryNodeAccessStore
from .memory_node_scope_store import InMemoryNodeScopeStore
from .asyncpg_node_access_store import AsyncPGNodeAccessStore
from .asyncpg_node_scope_store import AsyncPGNodeScopeStore

__all__ = [
    "InMemoryNodeAccessStore",
    "InMemoryNodeScopeStore",
    "AsyncPGNodeAccessStore",
    "AsyncPGNodeScopeStore",
]
