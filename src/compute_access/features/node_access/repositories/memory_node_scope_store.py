"""In-memory node scope store."""

from typing import Dict, Optional

from ....config.constants import AccessScope


class InMemoryNodeScopeStore:
    """Current access scope per node, held in a dict."""

    def __init__(self):
        self._scopes: Dict[str, AccessScope] = {}

    async def get_scope(self, node_id: str) -> Optional[AccessScope]:
        return self._scopes.get(node_id)

    async def set_scope(self, node_id: str, scope: AccessScope) -> None:
        self._scopes[node_id] = AccessScope(scope)

    async def delete_scope(self, node_id: str) -> None:
        self._scopes.pop(node_id, None)
