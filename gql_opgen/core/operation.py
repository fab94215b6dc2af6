"""Operation builder for root query and mutation fields.

Renders one GraphQL operation per root field: a derived name, variable
declarations from the field's arguments, the argument-usage clause and
a synthesized selection set.
"""

from enum import Enum

from graphql import GraphQLArgument, GraphQLField
from jinja2 import Environment, PackageLoader

from .selection import SelectionSynthesizer


class OperationKind(Enum):
    """Kinds of root operation generated."""
    QUERY = "query"
    MUTATION = "mutation"

    @property
    def prefix(self) -> str:
        """Prefix for generated operation names."""
        return "Mutate" if self is OperationKind.MUTATION else "Get"


def operation_name(kind: OperationKind, field_name: str) -> str:
    """Derive an operation name, e.g. `widget` -> `GetWidget` / `MutateWidget`."""
    if not field_name:
        raise ValueError("Cannot derive an operation name from an empty field name")
    return f"{kind.prefix}{field_name[0].upper()}{field_name[1:]}"


class OperationBuilder:
    """Builds GraphQL operation strings for root fields."""

    def __init__(self, synthesizer: SelectionSynthesizer):
        self.synthesizer = synthesizer
        self.env = Environment(
            loader=PackageLoader("gql_opgen.core", "templates"),
            autoescape=False,
        )
        self._template = self.env.get_template("operation.graphql.j2")

    def build(self, kind: OperationKind, field_name: str, field: GraphQLField) -> str:
        """Build a complete operation definition for a root field.

        Args:
            kind: Query or mutation
            field_name: Name of the root field
            field: The root field definition

        Returns:
            The operation text, e.g. `query GetUser($id: ID!) { user(id: $id) { ... } }`
        """
        name = operation_name(kind, field_name)

        # The root field itself is depth 0; its selection starts at 1
        selection = self.synthesizer.synthesize(field.type, depth=1)

        return self._template.render(
            kind=kind.value,
            name=name,
            variables=self._build_variable_declarations(field.args),
            field=field_name,
            arguments=self._build_field_arguments(field.args),
            selection=selection,
        )

    @staticmethod
    def _build_variable_declarations(args: dict[str, GraphQLArgument]) -> str:
        """Build the variable declaration part: ($id: ID!, $limit: Int)"""
        if not args:
            return ""
        decls = [f"${name}: {arg.type}" for name, arg in args.items()]
        return f"({', '.join(decls)})"

    @staticmethod
    def _build_field_arguments(args: dict[str, GraphQLArgument]) -> str:
        """Build argument string for a field: (id: $id, limit: $limit)"""
        if not args:
            return ""
        return f"({', '.join(f'{name}: ${name}' for name in args)})"
