"""Value objects for node access identifiers.

Principals and nodes are stored under canonical string keys:

    user#<raw id>, team#<raw id>, workspace#<raw id>, node#<uuid>

Raw ids are opaque; the only assumption is uniqueness within their kind.
"""

from dataclasses import dataclass
from typing import Union

from ...config.constants import EntityType, IdentifierFormat
from ..exceptions import InvalidInputError, InvalidKindError


EntityKind = Union[EntityType, str]


def coerce_entity_type(kind: EntityKind) -> EntityType:
    """Convert a kind token to EntityType, rejecting unknown kinds."""
    if isinstance(kind, EntityType):
        return kind
    try:
        return EntityType(kind)
    except ValueError:
        raise InvalidKindError(kind) from None


def format_entity_id(kind: EntityKind, raw_id: str) -> str:
    """Format the canonical key for a principal."""
    entity_type = coerce_entity_type(kind)
    if not raw_id:
        raise InvalidInputError(f"Empty {entity_type.value} id")
    return f"{entity_type.value}{IdentifierFormat.SEPARATOR}{raw_id}"


def format_node_id(node_uuid: str) -> str:
    """Format the canonical key for a compute node."""
    if not node_uuid:
        raise InvalidInputError("Empty node uuid")
    return f"{IdentifierFormat.NODE_PREFIX}{IdentifierFormat.SEPARATOR}{node_uuid}"


def split_identifier(value: str) -> tuple:
    """Split a canonical key on the first separator into (tag, raw id)."""
    tag, separator, raw_id = value.partition(IdentifierFormat.SEPARATOR)
    if not separator or not tag or not raw_id:
        raise InvalidInputError(f"Malformed identifier: {value!r}")
    return tag, raw_id


@dataclass(frozen=True)
class EntityId:
    """Principal identifier (user, team or workspace)."""
    kind: EntityType
    raw_id: str

    def __post_init__(self):
        object.__setattr__(self, "kind", coerce_entity_type(self.kind))
        if not self.raw_id:
            raise InvalidInputError(f"Empty {self.kind.value} id")

    @classmethod
    def user(cls, raw_id: str) -> "EntityId":
        return cls(EntityType.USER, raw_id)

    @classmethod
    def team(cls, raw_id: str) -> "EntityId":
        return cls(EntityType.TEAM, raw_id)

    @classmethod
    def workspace(cls, raw_id: str) -> "EntityId":
        return cls(EntityType.WORKSPACE, raw_id)

    @classmethod
    def parse(cls, value: str) -> "EntityId":
        """Parse a canonical key such as 'team#42'."""
        tag, raw_id = split_identifier(value)
        return cls(coerce_entity_type(tag), raw_id)

    @property
    def value(self) -> str:
        """Canonical string form."""
        return format_entity_id(self.kind, self.raw_id)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"EntityId(value={self.value!r})"


@dataclass(frozen=True)
class NodeId:
    """Compute node identifier."""
    uuid: str

    def __post_init__(self):
        if not self.uuid:
            raise InvalidInputError("Empty node uuid")

    @classmethod
    def parse(cls, value: str) -> "NodeId":
        """Parse a canonical key such as 'node#<uuid>'."""
        tag, raw_id = split_identifier(value)
        if tag != IdentifierFormat.NODE_PREFIX:
            raise InvalidInputError(f"Not a node identifier: {value!r}")
        return cls(raw_id)

    @property
    def value(self) -> str:
        """Canonical string form."""
        return format_node_id(self.uuid)

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"NodeId(value={self.value!r})"
