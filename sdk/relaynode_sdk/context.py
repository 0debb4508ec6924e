"""
Request context for node operations.

A RequestContext bundles everything a Node needs for one logical
operation: the schema, the CRUD adapter, the mutation metadata and the
type and global id of the node. It is immutable for the lifetime of
that operation.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from .global_id import GlobalId, type_from_global_id

if TYPE_CHECKING:
    from .crud import CrudAdapter
    from .registry import SchemaModel


@dataclass(frozen=True)
class MutationInfo:
    """Metadata of the mutation a node operation belongs to.

    Passed through to downstream consumers; nodes never interpret it.

    Attributes:
        name: Mutation name
        client_mutation_id: Client supplied correlation id
        global_ids: Other global ids involved in the mutation
        extra: Any further metadata from the transport layer, read-only
    """

    name: str
    client_mutation_id: str | None = None
    global_ids: tuple[GlobalId, ...] = ()
    extra: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        # Frozen: store a private read-only copy
        object.__setattr__(self, "extra", MappingProxyType(dict(self.extra)))


@dataclass(frozen=True)
class RequestContext:
    """Everything a Node needs for one operation.

    Attributes:
        schema: Schema model declaring the node type
        crud: Adapter performing storage operations
        mutation: Mutation metadata, or None outside mutations
        type: Node type name
        id: Global id of the node
    """

    schema: SchemaModel
    crud: CrudAdapter
    mutation: MutationInfo | None
    type: str
    id: GlobalId

    @classmethod
    def for_global_id(
        cls,
        schema: SchemaModel,
        crud: CrudAdapter,
        mutation: MutationInfo | None,
        global_id: GlobalId,
    ) -> RequestContext:
        """Create a context whose type is read from the global id.

        Raises:
            MalformedIdError: If global_id cannot be decoded
        """
        return cls(
            schema=schema,
            crud=crud,
            mutation=mutation,
            type=type_from_global_id(global_id),
            id=global_id,
        )
