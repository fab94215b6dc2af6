"""Pretty-printing of generated GraphQL documents."""

from graphql import GraphQLError, parse, print_ast


class DocumentFormatError(Exception):
    """Raised when a document cannot be parsed and reprinted."""


def format_document(text: str) -> str:
    """Reformat a GraphQL document with graphql-core's printer.

    Very large or deeply nested documents can exhaust the parser, so
    RecursionError and MemoryError are reported the same way as syntax
    errors.
    """
    try:
        document = parse(text, no_location=True)
        return print_ast(document) + "\n"
    except (GraphQLError, RecursionError, MemoryError) as e:
        raise DocumentFormatError(str(e) or type(e).__name__) from e
