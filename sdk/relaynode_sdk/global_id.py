"""
Global id codec for the relaynode SDK.

A global id is an opaque string handed to clients. It encodes the node
type name and the backend-native key of one entity:

    GlobalId = urlsafe_b64encode("<type>:<key>") with padding stripped

Invariants:
    - decode(encode(type, key)) == (type, key)
    - Type names are identifier tokens and never contain the separator
    - Keys are strings (possibly empty) and may contain any character
    - Only the canonical encoding of a pair decodes successfully

Example:
    >>> gid = encode("Post", "42")
    >>> decode(gid)
    DecodedGlobalId(type='Post', key='42')
    >>> type_from_global_id(gid)
    'Post'
"""

from __future__ import annotations

import base64
import binascii
import re
import uuid
from dataclasses import dataclass
from typing import Any, Iterator, NewType

from .errors import MalformedIdError

GlobalId = NewType("GlobalId", str)

SEPARATOR = ":"

_TYPE_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass(frozen=True)
class DecodedGlobalId:
    """A decoded global id.

    Unpacks and compares like a ``(type, key)`` tuple.

    Attributes:
        type: Node type name
        key: Backend-native key
    """

    type: str
    key: str

    def __iter__(self) -> Iterator[str]:
        yield self.type
        yield self.key

    def __eq__(self, other: object) -> bool:
        if isinstance(other, DecodedGlobalId):
            return (self.type, self.key) == (other.type, other.key)
        if isinstance(other, tuple):
            return (self.type, self.key) == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.type, self.key))


def is_type_name(value: Any) -> bool:
    """Check whether value is a valid type name token."""
    return isinstance(value, str) and _TYPE_NAME_RE.match(value) is not None


def encode(type_name: str, key: str) -> GlobalId:
    """Encode a (type, key) pair into an opaque global id.

    Args:
        type_name: Node type name (identifier token)
        key: Backend-native key string

    Returns:
        Global id string

    Raises:
        ValueError: If type_name is not a valid token
        TypeError: If key is not a string
    """
    if not is_type_name(type_name):
        raise ValueError(f"Invalid type name for global id: {type_name!r}")
    if not isinstance(key, str):
        raise TypeError(f"Global id key must be a string, got {type(key).__name__}")

    raw = f"{type_name}{SEPARATOR}{key}".encode("utf-8")
    return GlobalId(base64.urlsafe_b64encode(raw).decode("ascii").rstrip("="))


def decode(global_id: str) -> DecodedGlobalId:
    """Decode a global id into its (type, key) pair.

    Args:
        global_id: Global id produced by encode()

    Returns:
        DecodedGlobalId

    Raises:
        MalformedIdError: If the value cannot be parsed into a type/key pair
    """
    if not isinstance(global_id, str) or not global_id:
        raise MalformedIdError(f"Invalid global id: {global_id!r}", global_id=global_id)

    # Add padding if needed
    padded = global_id + "=" * (-len(global_id) % 4)
    try:
        text = base64.b64decode(padded, altchars=b"-_", validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise MalformedIdError(
            f"Invalid global id: {global_id!r} ({e})", global_id=global_id
        ) from e

    type_name, sep, key = text.partition(SEPARATOR)
    if not sep or not is_type_name(type_name):
        raise MalformedIdError(
            f"Invalid global id: {global_id!r} does not encode a type and key",
            global_id=global_id,
        )

    # Reject non-canonical spellings so id equality is string equality
    if encode(type_name, key) != global_id:
        raise MalformedIdError(
            f"Invalid global id: {global_id!r} is not canonically encoded",
            global_id=global_id,
        )

    return DecodedGlobalId(type=type_name, key=key)


def type_from_global_id(global_id: str) -> str:
    """Get the type name encoded in a global id."""
    return decode(global_id).type


def new_global_id(type_name: str) -> GlobalId:
    """Create a global id for a new node of the given type."""
    return encode(type_name, uuid.uuid4().hex)


def is_global_id(value: Any) -> bool:
    """Check whether value decodes as a global id."""
    try:
        decode(value)
    except MalformedIdError:
        return False
    return True
