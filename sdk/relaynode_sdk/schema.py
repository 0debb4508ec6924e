"""
Schema types for the relaynode SDK.

This module provides the in-memory schema model consumed by nodes:
- FieldDef: Scalar field of a node type
- RelationDef: Relation field linking a node type to a related type
- NodeTypeDef: Definition of a node type

Schemas are produced upstream (parsed and validated elsewhere) and are
only read here. A relation is declared with its own field name, the
inverse field name on the related type, the related type name and an
optional edge type carrying edge attributes.

Invariants:
    - Type names are identifier tokens
    - Field names are unique across scalars and relations of a type
    - edge_type is None unless the relation carries edge attributes

Example:
    >>> Post = NodeTypeDef(
    ...     name="Post",
    ...     fields=(field("text", "str"),),
    ...     relations=(relation("comments", "Comment", "commentOn"),),
    ... )
"""

from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field as dataclass_field
from enum import Enum
from typing import Any

from .global_id import is_type_name


class FieldKind(Enum):
    """Supported scalar field types."""

    ID = "id"
    STRING = "str"
    INTEGER = "int"
    FLOAT = "float"
    BOOLEAN = "bool"
    TIMESTAMP = "timestamp"
    JSON = "json"

    @classmethod
    def from_str(cls, value: str) -> FieldKind:
        """Convert string to FieldKind."""
        for kind in cls:
            if kind.value == value:
                return kind
        valid = [k.value for k in cls]
        raise ValueError(f"Invalid field kind '{value}'. Valid kinds: {valid}")


@dataclass(frozen=True)
class FieldDef:
    """Scalar field definition within a node type.

    Attributes:
        name: Field name
        kind: Data type
        required: Whether field is required
        description: Documentation
    """

    name: str
    kind: FieldKind
    required: bool = False
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Field name cannot be empty")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {"name": self.name, "kind": self.kind.value}
        if self.required:
            result["required"] = True
        if self.description:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> FieldDef:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            kind=FieldKind.from_str(data["kind"]),
            required=data.get("required", False),
            description=data.get("description", ""),
        )


@dataclass(frozen=True)
class RelationDef:
    """Relation field definition within a node type.

    Attributes:
        name: Own field name on the declaring type
        related_type: Name of the type on the other end
        inverse_field: Field name of the other end on related_type
        edge_type: Type of edge attributes, or None
        description: Documentation
    """

    name: str
    related_type: str
    inverse_field: str
    edge_type: str | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Relation name cannot be empty")
        if not is_type_name(self.related_type):
            raise ValueError(
                f"Relation '{self.name}' has invalid related type {self.related_type!r}"
            )
        if not self.inverse_field:
            raise ValueError(f"Relation '{self.name}' needs an inverse field")
        if self.edge_type is not None and not is_type_name(self.edge_type):
            raise ValueError(f"Relation '{self.name}' has invalid edge type {self.edge_type!r}")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        result: dict[str, Any] = {
            "name": self.name,
            "related_type": self.related_type,
            "inverse_field": self.inverse_field,
        }
        if self.edge_type is not None:
            result["edge_type"] = self.edge_type
        if self.description:
            result["description"] = self.description
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> RelationDef:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            related_type=data["related_type"],
            inverse_field=data["inverse_field"],
            edge_type=data.get("edge_type"),
            description=data.get("description", ""),
        )


def field(
    name: str,
    kind: str | FieldKind,
    *,
    required: bool = False,
    description: str = "",
) -> FieldDef:
    """Convenience function to create a FieldDef.

    Example:
        >>> text = field("text", "str", required=True)
    """
    if isinstance(kind, str):
        kind = FieldKind.from_str(kind)
    return FieldDef(name=name, kind=kind, required=required, description=description)


def relation(
    name: str,
    related_type: str,
    inverse_field: str,
    *,
    edge_type: str | None = None,
    description: str = "",
) -> RelationDef:
    """Convenience function to create a RelationDef.

    Example:
        >>> comments = relation("comments", "Comment", "commentOn")
    """
    return RelationDef(
        name=name,
        related_type=related_type,
        inverse_field=inverse_field,
        edge_type=edge_type,
        description=description,
    )


@dataclass(frozen=True)
class NodeTypeDef:
    """Definition of a node type.

    Attributes:
        name: Type name, also the type component of global ids
        fields: Scalar field definitions
        relations: Relation field definitions
        description: Documentation
    """

    name: str
    fields: tuple[FieldDef, ...] = dataclass_field(default_factory=tuple)
    relations: tuple[RelationDef, ...] = dataclass_field(default_factory=tuple)
    description: str = ""

    def __post_init__(self) -> None:
        """Validate node type definition."""
        if not self.name:
            raise ValueError("Node type name cannot be empty")
        if not is_type_name(self.name):
            raise ValueError(f"Invalid node type name {self.name!r}")

        names = [f.name for f in self.fields] + [r.name for r in self.relations]
        if len(names) != len(set(names)):
            raise ValueError(f"Duplicate field name in node type '{self.name}'")

    def get_field(self, name: str) -> FieldDef | None:
        """Get scalar field by name."""
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def get_relation(self, name: str) -> RelationDef | None:
        """Get relation field by name."""
        for r in self.relations:
            if r.name == name:
                return r
        return None

    def field_names(self) -> list[str]:
        """Get list of scalar field names."""
        return [f.name for f in self.fields]

    def relation_names(self) -> list[str]:
        """Get list of relation field names."""
        return [r.name for r in self.relations]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
            "relations": [r.to_dict() for r in self.relations],
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> NodeTypeDef:
        """Create from dictionary."""
        return cls(
            name=data["name"],
            fields=tuple(FieldDef.from_dict(f) for f in data.get("fields", ())),
            relations=tuple(RelationDef.from_dict(r) for r in data.get("relations", ())),
            description=data.get("description", ""),
        )

    def __hash__(self) -> int:
        return hash(self.name)
