"""Access grant entity.

One record per (entity, node) pair. Inserting a grant for an existing pair
overwrites it.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional, Dict, Any

from ....config.constants import AccessType
from ....core.value_objects import EntityId, NodeId


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class AccessGrant:
    """A stored authorization of one principal on one compute node."""
    entity_id: EntityId
    node_id: NodeId
    access_type: AccessType
    granted_by: EntityId
    granted_at: datetime = field(default_factory=_utc_now)
    organization_id: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.access_type, AccessType):
            object.__setattr__(self, "access_type", AccessType(self.access_type))

    @property
    def key(self) -> tuple:
        """Storage key (entity id, node id) in canonical form."""
        return (self.entity_id.value, self.node_id.value)

    @property
    def is_owner(self) -> bool:
        return self.access_type == AccessType.OWNER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a flat dictionary keyed like the stored record."""
        return {
            "entity_id": self.entity_id.value,
            "node_id": self.node_id.value,
            "entity_type": self.entity_id.kind.value,
            "entity_raw_id": self.entity_id.raw_id,
            "node_uuid": self.node_id.uuid,
            "access_type": self.access_type.value,
            "organization_id": self.organization_id,
            "granted_at": self.granted_at,
            "granted_by": self.granted_by.value,
        }

    @classmethod
    def from_record(cls, record: Dict[str, Any]) -> "AccessGrant":
        """Build a grant from a stored record (asyncpg Record or dict)."""
        return cls(
            entity_id=EntityId.parse(record["entity_id"]),
            node_id=NodeId.parse(record["node_id"]),
            access_type=AccessType(record["access_type"]),
            granted_by=EntityId.parse(record["granted_by"]),
            granted_at=record["granted_at"],
            organization_id=record["organization_id"] or None,
        )
