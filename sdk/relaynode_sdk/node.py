"""
Nodes for the relaynode SDK.

This module provides the identity and mutation layer over the CRUD
adapter:
- Node: Identity of one entity (type + global id) bound to a context
- NodeObject: A Node plus the record fetched for it

Every storage operation awaits exactly one adapter call with exactly
(type, id[, expression]). Results are typed: absence is None or False,
never an exception. Adapter errors propagate unchanged.

Example:
    >>> ctx = RequestContext.for_global_id(schema, crud, mutation, post_id)
    >>> post = await Node(ctx).get()
    >>> post.text
    'Great post!'
    >>> post.get_connection("comments").node_type
    'Comment'

Invariants:
    - type and id never change after construction
    - Operations return new Node/NodeObject instances, never mutate self
    - Connections come from schema metadata without backend calls
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Any, Iterator, Mapping

from .config import get_settings
from .connection import NodeConnection, build_connections
from .context import MutationInfo, RequestContext
from .crud import CrudAdapter
from .errors import MalformedIdError, SchemaLookupError
from .global_id import GlobalId, decode
from .registry import SchemaModel
from .validate import validate_update_expression, validate_update_fields

logger = logging.getLogger(__name__)


class Node:
    """Identity of one entity, bound to a request context.

    Args:
        context: Request context carrying schema, adapter, type and id
        strict: Reject updates naming undeclared fields. Defaults to
            the strict_updates setting.

    Raises:
        MalformedIdError: If context.id does not decode to context.type
        SchemaLookupError: If context.type is not declared in the schema
    """

    def __init__(self, context: RequestContext, *, strict: bool | None = None) -> None:
        decoded = decode(context.id)
        if decoded.type != context.type:
            raise MalformedIdError(
                f"Global id {context.id!r} identifies a '{decoded.type}', "
                f"not a '{context.type}'",
                global_id=context.id,
            )
        context.schema.get_node_type(context.type)

        self._context = context
        self._strict = get_settings().strict_updates if strict is None else strict
        self._connections: Mapping[str, NodeConnection] | None = None

    @classmethod
    def for_global_id(
        cls,
        schema: SchemaModel,
        crud: CrudAdapter,
        mutation: MutationInfo | None,
        global_id: GlobalId,
        *,
        strict: bool | None = None,
    ) -> Node:
        """Create a Node for a global id, reading its type from the id."""
        context = RequestContext.for_global_id(schema, crud, mutation, global_id)
        return Node(context, strict=strict)

    @property
    def context(self) -> RequestContext:
        return self._context

    @property
    def type(self) -> str:
        return self._context.type

    @property
    def id(self) -> GlobalId:
        return self._context.id

    @property
    def connections(self) -> Mapping[str, NodeConnection]:
        """Connections for every relation field declared on the type."""
        if self._connections is None:
            self._connections = build_connections(self._context.schema, self.type, self.id)
        return self._connections

    def get_connection(self, field_name: str) -> NodeConnection:
        """Get the connection of one relation field.

        Raises:
            SchemaLookupError: If the type declares no such relation
        """
        try:
            return self.connections[field_name]
        except KeyError:
            raise SchemaLookupError(
                f"Type '{self.type}' has no relation field '{field_name}'",
                type_name=self.type,
                field_name=field_name,
            ) from None

    async def exists(self) -> bool:
        """Check whether the node exists in the backend."""
        logger.debug("Checking node existence", extra={"node_type": self.type, "node_id": self.id})
        return bool(await self._context.crud.exists_node(self.type, self.id))

    async def get(self) -> NodeObject | None:
        """Fetch the node.

        Returns:
            NodeObject with the fetched record, or None if not found
        """
        logger.debug("Fetching node", extra={"node_type": self.type, "node_id": self.id})
        record = await self._context.crud.get_node(self.type, self.id)
        if not record:
            return None

        attributes = dict(record)
        attributes["id"] = self.id
        return NodeObject(self._context, attributes, strict=self._strict)

    async def delete(self) -> GlobalId | None:
        """Delete the node.

        Existence is not checked first; the backend reports whether
        anything was deleted.

        Returns:
            The node's id if deleted, None otherwise
        """
        logger.debug("Deleting node", extra={"node_type": self.type, "node_id": self.id})
        deleted = await self._context.crud.delete_node(self.type, self.id)
        return self.id if deleted else None

    async def update(self, expression: Mapping[str, Any] | None = None) -> Node | None:
        """Apply a field map to the node.

        Args:
            expression: Mapping from field name to new value

        Returns:
            A new Node for the same entity if updated, None otherwise

        Raises:
            ValidationError: If expression is not a field map. The
                backend is not called.
            UnknownFieldError: In strict mode, if expression names a
                field the type does not declare
        """
        payload = validate_update_expression(expression)
        if self._strict:
            validate_update_fields(self._context.schema.get_node_type(self.type), payload)

        logger.debug(
            "Updating node",
            extra={"node_type": self.type, "node_id": self.id, "fields": sorted(payload)},
        )
        updated = await self._context.crud.update_node(self.type, self.id, payload)
        if not updated:
            return None
        return Node(self._context, strict=self._strict)

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} type={self.type} id={self.id}>"


class NodeObject(Node):
    """A Node together with its fetched record.

    Record fields are readable as attributes and by key. The public
    members (type, id, context, connections, attributes and the methods)
    take precedence over fields of the same name; use ``obj["name"]`` to
    reach such fields. Other settings are kept private so they never
    shadow a field.

    Only Node.get() creates NodeObjects.
    """

    def __init__(
        self,
        context: RequestContext,
        attributes: Mapping[str, Any],
        *,
        strict: bool | None = None,
    ) -> None:
        super().__init__(context, strict=strict)
        self._attributes = MappingProxyType(dict(attributes))

    @property
    def attributes(self) -> Mapping[str, Any]:
        """Read-only view of the fetched record."""
        return self._attributes

    def __getattr__(self, name: str) -> Any:
        # Only called when normal lookup fails
        if name.startswith("_"):
            raise AttributeError(name)
        attributes = self.__dict__.get("_attributes", {})
        try:
            return attributes[name]
        except KeyError:
            raise AttributeError(
                f"'{self.__class__.__name__}' of type '{self.type}' has no field '{name}'"
            ) from None

    def __getitem__(self, name: str) -> Any:
        return self._attributes[name]

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self._attributes)

    def to_dict(self) -> dict[str, Any]:
        """Copy of the fetched record."""
        return dict(self._attributes)
