"""
Mutation payload validation for the relaynode SDK.

This module provides the checks run before an update reaches the
CRUD adapter:
- Shape check: the update expression must be a field map
- Field check (strict mode): every key must be a scalar field of the type

Invariants:
    - Validation never calls the backend
    - The shape error message is fixed so callers can match on it
    - Unknown fields suggest similar valid fields
"""

from __future__ import annotations

from collections.abc import Mapping
from difflib import get_close_matches
from typing import Any, Dict

from .errors import UPDATE_EXPRESSION_ERROR, UnknownFieldError, ValidationError
from .schema import NodeTypeDef

# Fields an update can never change
READ_ONLY_FIELDS = frozenset({"id"})


def is_field_map(value: Any) -> bool:
    """Check whether value is a mapping from field names to values.

    Lists, tuples, strings, numbers and None are not field maps, and
    neither is a mapping with non-string keys.
    """
    if not isinstance(value, Mapping):
        return False
    return all(isinstance(key, str) for key in value)


def validate_update_expression(expression: Any) -> Dict[str, Any]:
    """Check the shape of an update expression.

    Args:
        expression: Candidate update expression

    Returns:
        The expression as a plain dict

    Raises:
        ValidationError: If expression is not a field map
    """
    if not is_field_map(expression):
        raise ValidationError(
            UPDATE_EXPRESSION_ERROR,
            errors=[f"Got {type(expression).__name__}"],
        )
    return dict(expression)


def validate_update_fields(
    node_type: NodeTypeDef,
    expression: Mapping[str, Any],
) -> None:
    """Check that an update only touches writable scalar fields.

    Args:
        node_type: Type of the node being updated
        expression: Field map that passed validate_update_expression()

    Raises:
        UnknownFieldError: If a key is not a writable scalar field
    """
    writable = [name for name in node_type.field_names() if name not in READ_ONLY_FIELDS]
    unknown = [key for key in expression if key not in writable]

    if unknown:
        field_name = sorted(unknown)[0]
        suggestions = get_close_matches(field_name, writable, n=3)
        raise UnknownFieldError(field_name, node_type.name, suggestions)
