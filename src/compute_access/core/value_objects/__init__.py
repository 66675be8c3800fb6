"""Value objects for compute-access."""

from .identifiers import (
    EntityId,
    NodeId,
    coerce_entity_type,
    format_entity_id,
    format_node_id,
    split_identifier,
)

__all__ = [
    "EntityId",
    "NodeId",
    "coerce_entity_type",
    "format_entity_id",
    "format_node_id",
    "split_identifier",
]
