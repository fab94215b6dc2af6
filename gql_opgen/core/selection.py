"""Selection-set synthesis.

Walks a schema's output types depth-first and builds the selection set
for a field, bounded by a depth limit and by cycle detection.
"""

from graphql import (
    GraphQLInterfaceType,
    GraphQLObjectType,
    GraphQLType,
    GraphQLUnionType,
    is_interface_type,
    is_object_type,
    is_union_type,
)

from .schema import is_leaf, unwrap_type

AUTO_DEPTH = 0  # Cycle detection only
AUTO_DEPTH_CEILING = 100  # Keeps recursion well below the interpreter's stack limit
DEFAULT_DEPTH = 7


class OutputTooLargeError(Exception):
    """Raised when generated text grows past the output size limit."""

    def __init__(self, message: str, depth: int):
        self.depth = depth
        super().__init__(message)


def describe_depth(depth: int) -> str:
    return "auto" if depth == AUTO_DEPTH else str(depth)


class SelectionSynthesizer:
    """Builds selection-set bodies by walking types recursively.

    Two rules stop the walk, and either one is enough to terminate:

    * depth: nothing is selected below ``max_depth`` (``AUTO_DEPTH``
      swaps in ``AUTO_DEPTH_CEILING``)
    * cycles: a type that already appears on the path above its parent
      is not expanded again, so a direct self-reference gets exactly one
      nested level and longer cycles stop when they come back around

    The visited path is an immutable tuple extended on every descent,
    so sibling branches never see each other's types.

    When ``max_size`` is set, every emitted line is charged against it
    and ``OutputTooLargeError`` is raised as soon as the running total
    passes the limit. The total carries over between calls, so one
    synthesizer bounds a whole document.
    """

    def __init__(
        self,
        max_depth: int = DEFAULT_DEPTH,
        skip_deprecated: bool = False,
        max_size: int | None = None,
    ):
        if max_depth < 0:
            raise ValueError(f"max_depth must be >= 0, got {max_depth}")
        self.requested_depth = max_depth
        self.max_depth = AUTO_DEPTH_CEILING if max_depth == AUTO_DEPTH else max_depth
        self.skip_deprecated = skip_deprecated
        self.max_size = max_size
        self.size = 0

    def synthesize(
        self,
        type_: GraphQLType,
        visited: tuple[str, ...] = (),
        depth: int = 0,
    ) -> str:
        """Build the selection-set body for a type.

        Args:
            type_: The (possibly wrapped) type to select from
            visited: Type names expanded on the current path, outermost first
            depth: Current nesting level

        Returns:
            Newline-joined selections, or "" when nothing can be selected
            (the caller then renders the field without braces)
        """
        if depth > self.max_depth:
            return ""

        named = unwrap_type(type_)
        if is_leaf(named):
            return ""

        # The parent is exempt so a self-reference still expands one level
        if named.name in visited[:-1]:
            return ""
        path = visited + (named.name,)

        if is_object_type(named) or is_interface_type(named):
            return self._select_fields(named, path, depth)
        if is_union_type(named):
            return self._select_members(named, path, depth)
        return ""

    def _select_fields(
        self,
        type_def: GraphQLObjectType | GraphQLInterfaceType,
        path: tuple[str, ...],
        depth: int,
    ) -> str:
        lines = []
        for name, field in type_def.fields.items():
            if self.skip_deprecated and field.deprecation_reason:
                continue
            if is_leaf(field.type):
                self._charge(name)
                lines.append(name)
                continue
            sub_selection = self.synthesize(field.type, path, depth + 1)
            if sub_selection:
                self._charge(f"{name} {{  }}")
                lines.append(f"{name} {{ {sub_selection} }}")
        return "\n".join(lines)

    def _select_members(
        self,
        union: GraphQLUnionType,
        path: tuple[str, ...],
        depth: int,
    ) -> str:
        lines = []
        for member in union.types:
            sub_selection = self.synthesize(member, path, depth + 1)
            if sub_selection:
                self._charge(f"... on {member.name} {{  }}")
                lines.append(f"... on {member.name} {{ {sub_selection} }}")
        return "\n".join(lines)

    def _charge(self, text: str) -> None:
        # Nested bodies are already counted
        self.size += len(text) + 1
        if self.max_size is not None and self.size > self.max_size:
            raise OutputTooLargeError(
                f"Generated document exceeds {self.max_size} characters "
                f"at depth {describe_depth(self.requested_depth)}",
                self.requested_depth,
            )
