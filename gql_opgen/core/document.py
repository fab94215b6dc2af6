"""Document assembly.

Builds one operation per root query and mutation field, then applies the
recovery policy for oversized output and formatter failures.
"""

from dataclasses import dataclass, field
from typing import Iterator

from graphql import GraphQLField, GraphQLSchema

from .formatter import DocumentFormatError, format_document
from .operation import OperationBuilder, OperationKind
from .selection import (
    AUTO_DEPTH,
    DEFAULT_DEPTH,
    OutputTooLargeError,
    SelectionSynthesizer,
    describe_depth,
)

SAFE_DEPTH = 7
DEFAULT_MAX_OUTPUT_SIZE = 50_000_000  # characters


@dataclass
class GenerationOptions:
    """Configuration for a generation run."""
    max_depth: int = DEFAULT_DEPTH  # AUTO_DEPTH (0) relies on cycle detection only
    safe_depth: int = SAFE_DEPTH  # Retry depth after oversized output
    max_output_size: int = DEFAULT_MAX_OUTPUT_SIZE
    skip_deprecated: bool = False
    format: bool = True


@dataclass
class GenerationResult:
    """Outcome of a generation run."""
    document: str
    operation_count: int
    depth: int
    formatted: bool
    warnings: list[str] = field(default_factory=list)


class DocumentGenerator:
    """Generates the operations document for a schema."""

    def __init__(self, schema: GraphQLSchema, options: GenerationOptions | None = None):
        self.schema = schema
        self.options = options or GenerationOptions()

    def root_fields(self) -> Iterator[tuple[OperationKind, str, GraphQLField]]:
        """Yield every root query field, then every root mutation field."""
        roots = (
            (OperationKind.QUERY, self.schema.query_type),
            (OperationKind.MUTATION, self.schema.mutation_type),
        )
        for kind, root_type in roots:
            if root_type is None:
                continue
            for name, root_field in root_type.fields.items():
                yield kind, name, root_field

    def assemble(self, max_depth: int, limit_size: bool = True) -> str:
        """Build the raw, unformatted document at the given depth.

        The size limit is enforced while selections are being built, so
        an oversized document is abandoned early instead of built in full.
        Pass ``limit_size=False`` to build the whole document regardless.

        Raises:
            OutputTooLargeError: If the text grows past `max_output_size`
        """
        max_size = self.options.max_output_size if limit_size else None
        builder = OperationBuilder(
            SelectionSynthesizer(
                max_depth,
                skip_deprecated=self.options.skip_deprecated,
                max_size=max_size,
            )
        )
        parts = []
        size = 0
        try:
            for kind, name, root_field in self.root_fields():
                text = builder.build(kind, name, root_field) + "\n\n"
                size += len(text)
                if max_size is not None and size > max_size:
                    raise OutputTooLargeError(
                        f"Generated document exceeds {max_size} characters "
                        f"at depth {describe_depth(max_depth)}",
                        max_depth,
                    )
                parts.append(text)
            return "".join(parts)
        except MemoryError as e:
            raise OutputTooLargeError(
                f"Ran out of memory generating at depth {describe_depth(max_depth)}",
                max_depth,
            ) from e

    def generate(self) -> GenerationResult:
        """Generate the document, falling back where recovery is possible.

        Oversized output is retried once at a shallower depth: `safe_depth`
        when the request is deeper than that (or auto), otherwise half the
        requested depth. If no shallower depth exists or the retry is still
        too large, the document is built without a size limit and written
        unformatted. A formatter failure keeps the raw text.
        """
        warnings = []
        depth = self.options.max_depth

        try:
            raw = self.assemble(depth)
        except OutputTooLargeError as e:
            failure = str(e)
            reduced = self._reduced_depth(depth)
            raw = None
            if reduced != depth:
                warnings.append(f"{failure}; regenerated at depth {reduced}")
                depth = reduced
                try:
                    raw = self.assemble(depth)
                except OutputTooLargeError as retry_error:
                    failure = str(retry_error)
            if raw is None:
                warnings.append(f"{failure}; writing unformatted output without a size limit")
                return GenerationResult(
                    document=self.assemble(depth, limit_size=False),
                    operation_count=self._count_operations(),
                    depth=depth,
                    formatted=False,
                    warnings=warnings,
                )

        document = raw
        formatted = False
        if self.options.format and raw:
            try:
                document = format_document(raw)
                formatted = True
            except DocumentFormatError as e:
                warnings.append(f"Formatting failed ({e}); writing unformatted output")

        return GenerationResult(
            document=document,
            operation_count=self._count_operations(),
            depth=depth,
            formatted=formatted,
            warnings=warnings,
        )

    def _reduced_depth(self, depth: int) -> int:
        if depth == AUTO_DEPTH or depth > self.options.safe_depth:
            return self.options.safe_depth
        return max(1, depth // 2)

    def _count_operations(self) -> int:
        return sum(1 for _ in self.root_fields())
