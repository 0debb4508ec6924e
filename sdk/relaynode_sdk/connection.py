"""
Node connections for the relaynode SDK.

A NodeConnection describes one declared relation of one node: the node
it starts from, the field it is addressed by, the inverse field on the
related type, the related type and the optional edge type. It holds no
related records; resolving and paginating a connection is left to the
component that receives it.

Invariants:
    - Connections are derived from schema metadata only
    - Building connections never calls the backend
    - node_field and related_field are the two ends of one relation
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

from .global_id import GlobalId
from .registry import SchemaModel
from .schema import RelationDef


@dataclass(frozen=True)
class NodeConnection:
    """Descriptor of one relation of one node.

    Attributes:
        node_id: Global id of the node the connection starts from
        node_field: Relation field name on the node's type
        related_field: Inverse field name on the related type
        node_type: Related type name
        edge_type: Edge type name, or None for relations without edge data
    """

    node_id: GlobalId
    node_field: str
    related_field: str
    node_type: str
    edge_type: str | None = None

    @classmethod
    def from_relation(cls, node_id: GlobalId, relation: RelationDef) -> NodeConnection:
        """Create a connection for node_id from a relation definition."""
        return cls(
            node_id=node_id,
            node_field=relation.name,
            related_field=relation.inverse_field,
            node_type=relation.related_type,
            edge_type=relation.edge_type,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "node_id": self.node_id,
            "node_field": self.node_field,
            "related_field": self.related_field,
            "node_type": self.node_type,
            "edge_type": self.edge_type,
        }


def build_connections(
    schema: SchemaModel,
    type_name: str,
    node_id: GlobalId,
) -> Mapping[str, NodeConnection]:
    """Build the connection registry of one node.

    Args:
        schema: Schema model declaring type_name
        type_name: Node type name
        node_id: Global id of the node

    Returns:
        Read-only mapping from relation field name to NodeConnection

    Raises:
        SchemaLookupError: If type_name is not declared
    """
    return MappingProxyType(
        {
            relation.name: NodeConnection.from_relation(node_id, relation)
            for relation in schema.relations(type_name)
        }
    )
