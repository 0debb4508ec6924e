"""
Error types for the relaynode SDK.

This module defines all exception types raised by the SDK:
- RelayNodeError: Base exception
- MalformedIdError: Global id cannot be decoded into (type, key)
- SchemaLookupError: Type or relation field not declared in the schema
- ValidationError: Update expression rejected before dispatch
- UnknownFieldError: Unknown field in a strict update expression

Backend errors raised by a CrudAdapter are never wrapped in these types;
they reach the caller unchanged.

Invariants:
    - All errors inherit from RelayNodeError
    - Errors include context for debugging
    - Absence (not found, not applied) is never an error
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

UPDATE_EXPRESSION_ERROR = "Update expression must be an object expression"


class RelayNodeError(Exception):
    """Base exception for all relaynode SDK errors.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or "RELAYNODE_ERROR"
        self.details = details or {}


class MalformedIdError(RelayNodeError):
    """Global id could not be decoded.

    Raised when:
    - Value is not a string or not valid URL-safe base64
    - Decoded text has no type/key separator
    - Type token or key is empty or invalid
    - Decoded type does not match the type a node was built for
    """

    def __init__(
        self,
        message: str,
        global_id: Any = None,
    ) -> None:
        super().__init__(
            message,
            code="MALFORMED_ID",
            details={"global_id": global_id},
        )
        self.global_id = global_id


class SchemaLookupError(RelayNodeError):
    """Type or field is not declared in the schema.

    This is a configuration or programmer error, not a runtime outcome.
    """

    def __init__(
        self,
        message: str,
        type_name: Optional[str] = None,
        field_name: Optional[str] = None,
    ) -> None:
        super().__init__(
            message,
            code="SCHEMA_LOOKUP",
            details={"type_name": type_name, "field_name": field_name},
        )
        self.type_name = type_name
        self.field_name = field_name


class ValidationError(RelayNodeError):
    """Mutation payload failed validation.

    Raised before any backend call is made when:
    - Update expression is not a field map
    - Strict mode finds fields the type does not declare
    """

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        errors: Optional[List[str]] = None,
    ) -> None:
        super().__init__(
            message,
            code="VALIDATION_ERROR",
            details={"field": field_name, "errors": errors or []},
        )
        self.field_name = field_name
        self.errors = errors or []


class UnknownFieldError(ValidationError):
    """Unknown field in an update expression.

    Includes suggestions for similar field names.

    Attributes:
        field_name: The unknown field
        type_name: The type being updated
        suggestions: Similar field names
    """

    def __init__(
        self,
        field_name: str,
        type_name: str,
        suggestions: Optional[List[str]] = None,
    ) -> None:
        suggestions = suggestions or []
        msg = f"Unknown field '{field_name}' in type '{type_name}'"
        if suggestions:
            msg += f". Did you mean: {', '.join(suggestions)}?"

        super().__init__(msg, field_name=field_name, errors=[msg])
        self.code = "UNKNOWN_FIELD"
        self.details.update(
            {
                "type_name": type_name,
                "suggestions": suggestions,
            }
        )
        self.type_name = type_name
        self.suggestions = suggestions


class RegistryFrozenError(RelayNodeError):
    """Schema model is frozen and cannot be modified."""

    def __init__(self, message: str) -> None:
        super().__init__(message, code="REGISTRY_FROZEN")


class DuplicateRegistrationError(RelayNodeError):
    """A node type with this name is already registered."""

    def __init__(self, message: str, type_name: Optional[str] = None) -> None:
        super().__init__(
            message,
            code="DUPLICATE_REGISTRATION",
            details={"type_name": type_name},
        )
        self.type_name = type_name
