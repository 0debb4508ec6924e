"""
relaynode SDK - Relay-style node identity and mutation layer.

This SDK translates between opaque client-facing global ids and
backend-facing (type, key) pairs:
- Global id codec (encode, decode, type_from_global_id)
- Schema model with per-type fields and relations
- Node / NodeObject delegating CRUD to a pluggable adapter
- NodeConnection descriptors derived from relation metadata

Example:
    >>> from relaynode_sdk import (
    ...     InMemoryCrud, MutationInfo, Node, NodeTypeDef, SchemaModel, field, relation,
    ... )
    >>>
    >>> Post = NodeTypeDef(
    ...     name="Post",
    ...     fields=(field("id", "id"), field("text", "str")),
    ...     relations=(relation("comments", "Comment", "commentOn"),),
    ... )
    >>> schema = SchemaModel([Post, Comment])
    >>> crud = InMemoryCrud()
    >>> post_id = await crud.create_node("Post", {"text": "Great post!"})
    >>>
    >>> post = await Node.for_global_id(schema, crud, MutationInfo("edit"), post_id).get()
    >>> post.text
    'Great post!'

Invariants:
    - decode(encode(type, key)) == (type, key)
    - Validation failures never reach the backend
    - Backend errors propagate unchanged

Version: 1.0.0
"""

__version__ = "1.0.0"

from .config import Settings, get_settings, setup_logging
from .connection import NodeConnection, build_connections
from .context import MutationInfo, RequestContext
from .crud import CrudAdapter, InMemoryCrud
from .errors import (
    UPDATE_EXPRESSION_ERROR,
    DuplicateRegistrationError,
    MalformedIdError,
    RegistryFrozenError,
    RelayNodeError,
    SchemaLookupError,
    UnknownFieldError,
    ValidationError,
)
from .global_id import (
    DecodedGlobalId,
    GlobalId,
    decode,
    encode,
    is_global_id,
    new_global_id,
    type_from_global_id,
)
from .node import Node, NodeObject
from .registry import SchemaModel
from .schema import (
    FieldDef,
    FieldKind,
    NodeTypeDef,
    RelationDef,
    field,
    relation,
)

__all__ = [
    # Version
    "__version__",
    # Global ids
    "GlobalId",
    "DecodedGlobalId",
    "encode",
    "decode",
    "type_from_global_id",
    "new_global_id",
    "is_global_id",
    # Schema
    "NodeTypeDef",
    "FieldDef",
    "FieldKind",
    "RelationDef",
    "field",
    "relation",
    "SchemaModel",
    # Nodes
    "Node",
    "NodeObject",
    "NodeConnection",
    "build_connections",
    "RequestContext",
    "MutationInfo",
    # Adapters
    "CrudAdapter",
    "InMemoryCrud",
    # Config
    "Settings",
    "get_settings",
    "setup_logging",
    # Errors
    "UPDATE_EXPRESSION_ERROR",
    "RelayNodeError",
    "MalformedIdError",
    "SchemaLookupError",
    "ValidationError",
    "UnknownFieldError",
    "RegistryFrozenError",
    "DuplicateRegistrationError",
]
