"""
CRUD adapter protocol and in-memory implementation.

This module defines the CrudAdapter protocol a hosting system supplies
to nodes, along with an in-memory adapter for tests and local
development.

Adapters are schema-unaware: every call is keyed by (type, id) and an
optional field map. Nodes call them with exactly these arguments, in
this order.

Contract:
    - exists_node returns True or False
    - get_node returns a record mapping, or None when absent
    - delete_node and update_node return whether the change applied
    - Errors raised by an adapter reach the caller unchanged

How to change safely:
    - Protocol changes require updating all implementations
    - Keep InMemoryCrud behavior in line with the protocol contract
"""

from __future__ import annotations

import asyncio
import logging
from abc import abstractmethod
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple, runtime_checkable

from .global_id import GlobalId, new_global_id

logger = logging.getLogger(__name__)


@runtime_checkable
class CrudAdapter(Protocol):
    """Protocol for storage backends behind nodes.

    Example:
        >>> crud = InMemoryCrud()
        >>> node_id = await crud.create_node("Post", {"text": "Hi"})
        >>> await crud.exists_node("Post", node_id)
        True
    """

    @abstractmethod
    async def exists_node(self, node_type: str, node_id: GlobalId) -> bool:
        """Check whether a node exists."""
        ...

    @abstractmethod
    async def get_node(self, node_type: str, node_id: GlobalId) -> Optional[Mapping[str, Any]]:
        """Fetch a node record, or None if it does not exist."""
        ...

    @abstractmethod
    async def delete_node(self, node_type: str, node_id: GlobalId) -> bool:
        """Delete a node. Returns whether anything was deleted."""
        ...

    @abstractmethod
    async def update_node(
        self,
        node_type: str,
        node_id: GlobalId,
        expression: Mapping[str, Any],
    ) -> bool:
        """Apply a field map to a node. Returns whether it was applied."""
        ...


class InMemoryCrud:
    """In-memory implementation of CrudAdapter.

    Records live in a dictionary keyed by (type, id) and are lost when
    the adapter is discarded. Records are copied on the way in and out,
    so callers never share state with the store.

    Thread safety:
        Uses an asyncio lock. Safe to use from multiple coroutines.

    Example:
        >>> crud = InMemoryCrud()
        >>> node_id = await crud.create_node("Post", {"text": "Great post!"})
        >>> await crud.get_node("Post", node_id)
        {'text': 'Great post!', 'id': '...'}
    """

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._records: Dict[Tuple[str, str], Dict[str, Any]] = {}
        self._lock = asyncio.Lock()

    async def exists_node(self, node_type: str, node_id: GlobalId) -> bool:
        """Check whether a node exists."""
        async with self._lock:
            return (node_type, node_id) in self._records

    async def get_node(self, node_type: str, node_id: GlobalId) -> Optional[Dict[str, Any]]:
        """Fetch a copy of a node record."""
        async with self._lock:
            record = self._records.get((node_type, node_id))
            return dict(record) if record is not None else None

    async def delete_node(self, node_type: str, node_id: GlobalId) -> bool:
        """Delete a node record."""
        async with self._lock:
            record = self._records.pop((node_type, node_id), None)

        if record is None:
            logger.debug(
                "Node to delete not found", extra={"node_type": node_type, "node_id": node_id}
            )
            return False
        return True

    async def update_node(
        self,
        node_type: str,
        node_id: GlobalId,
        expression: Mapping[str, Any],
    ) -> bool:
        """Merge a field map into a node record.

        The id field is never overwritten.
        """
        async with self._lock:
            record = self._records.get((node_type, node_id))
            if record is None:
                logger.debug(
                    "Node to update not found",
                    extra={"node_type": node_type, "node_id": node_id},
                )
                return False
            record.update({k: v for k, v in expression.items() if k != "id"})
            return True

    async def create_node(self, node_type: str, record: Mapping[str, Any]) -> GlobalId:
        """Store a new node record under a fresh global id.

        Args:
            node_type: Node type name
            record: Field values

        Returns:
            Global id of the new node
        """
        node_id = new_global_id(node_type)
        await self.put_node(node_type, node_id, record)
        return node_id

    async def put_node(self, node_type: str, node_id: GlobalId, record: Mapping[str, Any]) -> None:
        """Store a node record under a known global id, replacing any existing one."""
        async with self._lock:
            stored = dict(record)
            stored["id"] = node_id
            self._records[(node_type, node_id)] = stored

    def count(self, node_type: Optional[str] = None) -> int:
        """Number of stored records, optionally for one type."""
        if node_type is None:
            return len(self._records)
        return sum(1 for record_type, _ in self._records if record_type == node_type)

    def clear(self) -> None:
        """Remove all records."""
        self._records.clear()
