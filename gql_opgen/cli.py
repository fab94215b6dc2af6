"""Command-line interface for gql-opgen."""

import asyncio
from pathlib import Path

import click

from .core.auth import auth_for_token
from .core.document import DocumentGenerator, GenerationOptions
from .core.introspection import SchemaFetchError, fetch_schema
from .core.schema import IntrospectionError, SchemaLoadError, load_schema_file
from .core.selection import AUTO_DEPTH, DEFAULT_DEPTH, OutputTooLargeError

DEFAULT_OUTPUT = "query.graphql"


def parse_headers(ctx, param, values: tuple[str, ...]) -> dict[str, str]:
    """Parse repeated `Name: value` options into a header dict."""
    headers = {}
    for value in values:
        name, sep, header_value = value.partition(":")
        if not sep or not name.strip():
            raise click.BadParameter(f"expected 'Name: value', got {value!r}")
        headers[name.strip()] = header_value.strip()
    return headers


def is_endpoint(source: str) -> bool:
    """Check if a source argument is an HTTP(S) endpoint URL."""
    return source.lower().startswith(("http://", "https://"))


@click.command()
@click.argument("source")
@click.argument("output", required=False, type=click.Path(dir_okay=False))
@click.option(
    "--depth",
    "-d",
    type=click.IntRange(min=0),
    default=DEFAULT_DEPTH,
    show_default=True,
    help="Maximum selection depth. 0 means auto: stop only at cycles.",
)
@click.option(
    "--token",
    envvar="GQL_OPGEN_TOKEN",
    help="Bearer token sent with the introspection request.",
)
@click.option(
    "--header",
    "-H",
    "headers",
    multiple=True,
    callback=parse_headers,
    help="Extra request header as 'Name: value'. Can be repeated.",
)
@click.option(
    "--timeout",
    type=float,
    default=30.0,
    show_default=True,
    help="Request timeout in seconds.",
)
@click.option(
    "--skip-deprecated",
    is_flag=True,
    help="Leave deprecated fields out of selections.",
)
@click.option(
    "--no-format",
    is_flag=True,
    help="Write the raw document without pretty-printing.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
@click.version_option(package_name="gql-opgen")
def main(
    source: str,
    output: str | None,
    depth: int,
    token: str | None,
    headers: dict[str, str],
    timeout: float,
    skip_deprecated: bool,
    no_format: bool,
    verbose: bool,
):
    """Generate one GraphQL operation per root field of a schema.

    SOURCE is a GraphQL endpoint URL or a pre-fetched introspection JSON
    file. OUTPUT defaults to ./query.graphql.

    Examples:

        gql-opgen https://api.example.com/graphql

        gql-opgen https://api.example.com/graphql ops.graphql --depth 3

        gql-opgen schema.json ops.graphql --depth 0
    """
    output_path = Path(output).resolve() if output else Path.cwd() / DEFAULT_OUTPUT

    if not is_endpoint(source) and not Path(source).is_file():
        raise click.BadParameter(
            f"{source!r} is neither an http(s) URL nor an existing file",
            param_hint="SOURCE",
        )

    click.echo(f"Source: {source}")
    click.echo(f"Output: {output_path}")
    click.echo(f"Max Depth: {'auto' if depth == AUTO_DEPTH else depth}")

    try:
        if is_endpoint(source):
            click.echo(f"Fetching schema from {source}...")
            auth = auth_for_token(token)
            schema = asyncio.run(
                fetch_schema(source, auth=auth, headers=headers, timeout=timeout)
            )
        else:
            click.echo(f"Loading schema from {source}...")
            schema = load_schema_file(source)

        if verbose:
            query_type = schema.query_type
            mutation_type = schema.mutation_type
            click.echo(f"  Types: {len(schema.type_map)}")
            click.echo(f"  Queries: {len(query_type.fields) if query_type else 0}")
            click.echo(f"  Mutations: {len(mutation_type.fields) if mutation_type else 0}")

        click.echo("Generating operations...")
        options = GenerationOptions(
            max_depth=depth,
            skip_deprecated=skip_deprecated,
            format=not no_format,
        )
        result = DocumentGenerator(schema, options).generate()
    except (SchemaFetchError, IntrospectionError, SchemaLoadError, OutputTooLargeError) as e:
        raise click.ClickException(str(e)) from e

    for warning in result.warnings:
        click.echo(f"Warning: {warning}", err=True)

    if verbose:
        click.echo(f"  Operations: {result.operation_count}")
        click.echo(f"  Depth used: {'auto' if result.depth == AUTO_DEPTH else result.depth}")
        click.echo(f"  Formatted: {'yes' if result.formatted else 'no'}")

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result.document, encoding="utf-8")

    click.echo(f"Done! Generated {result.operation_count} operations in {output_path}")


if __name__ == "__main__":
    main()
