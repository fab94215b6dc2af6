"""Schema loading and type helpers built on graphql-core.

Turns introspection payloads (live responses or pre-fetched JSON files)
into a GraphQLSchema and exposes the wrapper-stripping helpers used by
the selection synthesizer.
"""

import json
from pathlib import Path
from typing import Any

from graphql import (
    GraphQLError,
    GraphQLNamedType,
    GraphQLSchema,
    GraphQLType,
    build_client_schema,
    is_enum_type,
    is_scalar_type,
    is_wrapping_type,
)
from pydantic import BaseModel, ValidationError


class IntrospectionError(Exception):
    """Raised when an introspection result carries GraphQL errors."""

    def __init__(self, message: str, errors: list[dict[str, Any]]):
        self.message = message
        self.errors = errors
        super().__init__(message)


class SchemaLoadError(ValueError):
    """Raised when a payload cannot be turned into a schema."""


class IntrospectionResponse(BaseModel):
    """Envelope of an introspection result."""

    data: dict[str, Any] | None = None
    errors: list[dict[str, Any]] | None = None

    @classmethod
    def from_payload(cls, payload: Any) -> "IntrospectionResponse":
        """Accept both a raw `{"__schema": ...}` result and a `{"data": ...}` wrapper."""
        if isinstance(payload, dict) and "__schema" in payload:
            payload = {"data": payload}
        try:
            return cls.model_validate(payload)
        except ValidationError as e:
            raise SchemaLoadError(f"Invalid introspection payload: {e}") from e


def unwrap_type(type_: GraphQLType) -> GraphQLNamedType:
    """Strip every List/NonNull layer and return the named type underneath."""
    while is_wrapping_type(type_):
        type_ = type_.of_type
    return type_


def is_leaf(type_: GraphQLType) -> bool:
    """Check if a type ends a selection (scalar or enum once unwrapped)."""
    named = unwrap_type(type_)
    return is_scalar_type(named) or is_enum_type(named)


def schema_from_introspection(payload: Any) -> GraphQLSchema:
    """Build a client schema from an introspection payload.

    Raises:
        IntrospectionError: If the payload carries a non-empty `errors` list
        SchemaLoadError: If there is no usable `__schema` data
    """
    response = IntrospectionResponse.from_payload(payload)

    if response.errors:
        messages = "; ".join(e.get("message", str(e)) for e in response.errors)
        raise IntrospectionError(
            f"Schema introspection errors: {messages}", response.errors
        )

    if not response.data or "__schema" not in response.data:
        raise SchemaLoadError("Introspection payload has no __schema data")

    try:
        return build_client_schema(response.data)
    except (GraphQLError, KeyError, TypeError, ValueError) as e:
        raise SchemaLoadError(f"Could not build schema: {e}") from e


def load_schema_file(path: str | Path) -> GraphQLSchema:
    """Load a pre-fetched introspection JSON file."""
    path = Path(path)
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise SchemaLoadError(f"{path.name} is not valid JSON: {e}") from e
    return schema_from_introspection(payload)
