"""Core modules for GraphQL operation generation."""

from .auth import Auth, BearerAuth, NoAuth, auth_for_token
from .document import (
    DEFAULT_MAX_OUTPUT_SIZE,
    SAFE_DEPTH,
    DocumentGenerator,
    GenerationOptions,
    GenerationResult,
)
from .formatter import DocumentFormatError, format_document
from .introspection import IntrospectionClient, SchemaFetchError, fetch_schema
from .operation import OperationBuilder, OperationKind, operation_name
from .schema import (
    IntrospectionError,
    IntrospectionResponse,
    SchemaLoadError,
    is_leaf,
    load_schema_file,
    schema_from_introspection,
    unwrap_type,
)
from .selection import (
    AUTO_DEPTH,
    AUTO_DEPTH_CEILING,
    DEFAULT_DEPTH,
    OutputTooLargeError,
    SelectionSynthesizer,
)

__all__ = [
    # Auth
    "Auth",
    "BearerAuth",
    "NoAuth",
    "auth_for_token",
    # Schema
    "IntrospectionError",
    "IntrospectionResponse",
    "SchemaLoadError",
    "is_leaf",
    "load_schema_file",
    "schema_from_introspection",
    "unwrap_type",
    # Introspection
    "IntrospectionClient",
    "SchemaFetchError",
    "fetch_schema",
    # Selection
    "AUTO_DEPTH",
    "AUTO_DEPTH_CEILING",
    "DEFAULT_DEPTH",
    "OutputTooLargeError",
    "SelectionSynthesizer",
    # Operations
    "OperationBuilder",
    "OperationKind",
    "operation_name",
    # Document
    "DEFAULT_MAX_OUTPUT_SIZE",
    "SAFE_DEPTH",
    "DocumentGenerator",
    "GenerationOptions",
    "GenerationResult",
    # Formatter
    "DocumentFormatError",
    "format_document",
]
