"""
Schema model for the relaynode SDK.

This module provides the SchemaModel registry nodes read from:
- Registering node types
- Type, scalar field and relation lookup by name
- Schema fingerprinting

The model is normally built once from an upstream, already validated
schema and frozen. Nodes only ever read it.

Example:
    >>> schema = SchemaModel()
    >>> schema.register_node_type(Post)
    >>> schema.freeze()
    >>> schema.get_relation("Post", "comments").inverse_field
    'commentOn'
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections.abc import Iterable, Iterator
from typing import Any

from .errors import DuplicateRegistrationError, RegistryFrozenError, SchemaLookupError
from .schema import FieldDef, NodeTypeDef, RelationDef

logger = logging.getLogger(__name__)


class SchemaModel:
    """In-memory schema model.

    Stores node type definitions by name. Unknown types and fields are
    reported with SchemaLookupError.

    Example:
        >>> schema = SchemaModel([Post, Comment])
        >>> schema.scalar_field_names("Post")
        ['id', 'text']
    """

    def __init__(self, node_types: Iterable[NodeTypeDef] = ()) -> None:
        """Initialize registry, optionally with node types."""
        self._node_types: dict[str, NodeTypeDef] = {}
        self._frozen = False
        self._fingerprint: str | None = None
        self._lock = threading.Lock()

        for node_type in node_types:
            self.register_node_type(node_type)

    @property
    def frozen(self) -> bool:
        """Whether the model is frozen."""
        return self._frozen

    @property
    def fingerprint(self) -> str | None:
        """Schema fingerprint (available after freeze)."""
        return self._fingerprint

    def register_node_type(self, node_type: NodeTypeDef) -> None:
        """Register a node type.

        Args:
            node_type: NodeTypeDef to register

        Raises:
            RegistryFrozenError: If model is frozen
            DuplicateRegistrationError: If the name is already registered
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Cannot register: schema model is frozen")

            if node_type.name in self._node_types:
                raise DuplicateRegistrationError(
                    f"Node type '{node_type.name}' already registered",
                    type_name=node_type.name,
                )

            self._node_types[node_type.name] = node_type

    def has_type(self, type_name: str) -> bool:
        """Whether a node type with this name is declared."""
        return type_name in self._node_types

    def type_names(self) -> list[str]:
        """Names of all declared node types."""
        return list(self._node_types)

    def node_types(self) -> Iterator[NodeTypeDef]:
        """Iterate over all node types."""
        yield from self._node_types.values()

    def get_node_type(self, type_name: str) -> NodeTypeDef:
        """Get node type by name.

        Raises:
            SchemaLookupError: If the type is not declared
        """
        try:
            return self._node_types[type_name]
        except KeyError:
            raise SchemaLookupError(
                f"Unknown node type '{type_name}'", type_name=type_name
            ) from None

    def scalar_field_names(self, type_name: str) -> list[str]:
        """Get scalar field names declared on a type."""
        return self.get_node_type(type_name).field_names()

    def get_field(self, type_name: str, field_name: str) -> FieldDef:
        """Get one scalar field definition.

        Raises:
            SchemaLookupError: If the type or the field is not declared
        """
        field_def = self.get_node_type(type_name).get_field(field_name)
        if field_def is None:
            raise SchemaLookupError(
                f"Type '{type_name}' has no scalar field '{field_name}'",
                type_name=type_name,
                field_name=field_name,
            )
        return field_def

    def relations(self, type_name: str) -> tuple[RelationDef, ...]:
        """Get relation field definitions declared on a type."""
        return self.get_node_type(type_name).relations

    def get_relation(self, type_name: str, field_name: str) -> RelationDef:
        """Get one relation field definition.

        Raises:
            SchemaLookupError: If the type or the relation is not declared
        """
        relation = self.get_node_type(type_name).get_relation(field_name)
        if relation is None:
            raise SchemaLookupError(
                f"Type '{type_name}' has no relation field '{field_name}'",
                type_name=type_name,
                field_name=field_name,
            )
        return relation

    def freeze(self) -> str:
        """Freeze model and compute fingerprint.

        Returns:
            Schema fingerprint

        Raises:
            RegistryFrozenError: If already frozen
        """
        with self._lock:
            if self._frozen:
                raise RegistryFrozenError("Schema model is already frozen")

            self._fingerprint = self._compute_fingerprint()
            self._frozen = True

        logger.info(
            "Schema model frozen",
            extra={"fingerprint": self._fingerprint, "type_count": len(self._node_types)},
        )
        return self._fingerprint

    def _compute_fingerprint(self) -> str:
        """Compute SHA-256 fingerprint."""
        canonical = json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
        hash_bytes = hashlib.sha256(canonical.encode("utf-8")).hexdigest()
        return f"sha256:{hash_bytes}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "node_types": [
                self._node_types[name].to_dict() for name in sorted(self._node_types)
            ],
        }

    def to_json(self, indent: int | None = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, freeze: bool = True) -> SchemaModel:
        """Build a model from its dictionary form.

        Args:
            data: Output of to_dict() or an equivalent upstream export
            freeze: Freeze the model after loading

        Returns:
            SchemaModel
        """
        model = cls(NodeTypeDef.from_dict(t) for t in data.get("node_types", ()))
        if freeze:
            model.freeze()
        return model

    def __contains__(self, type_name: object) -> bool:
        return type_name in self._node_types

    def __repr__(self) -> str:
        return f"SchemaModel(types={sorted(self._node_types)}, frozen={self._frozen})"
