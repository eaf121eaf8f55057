#!/usr/bin/env python3
"""
Main CLI entry point for sheetgraph.
"""

import sys
from pathlib import Path

import click
import uvicorn
from graphql import GraphQLError

from sheetgraph import __version__
from sheetgraph.config import settings
from sheetgraph.graphql.classifier import SchemaClassificationError, classify
from sheetgraph.graphql.schema import load_schema
from sheetgraph.logging import configure_logging, get_logger

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__, prog_name="sheetgraph")
def cli() -> None:
    """sheetgraph CLI - inspect schemas and serve generated resolvers."""
    pass


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def inspect(schema_file: Path) -> None:
    """Show the resolvers a schema file would get."""
    configure_logging(debug=False)

    try:
        classification = classify(load_schema(schema_file.read_text()))
    except (SchemaClassificationError, GraphQLError, TypeError) as e:
        click.echo(f"✗ Invalid schema: {e}", err=True)
        sys.exit(1)

    click.echo("Query:")
    for entry in classification.query_fields:
        kind = "find all" if entry.cardinality.value == "many" else "find one"
        click.echo(f"  {entry.name} -> {entry.target_type_name} ({kind})")

    click.echo("Mutation:")
    for entry in classification.mutation_fields:
        click.echo(f"  {entry.name} -> {entry.action.value} {entry.type_name}")

    for type_name, classified in classification.object_types.items():
        click.echo(f"{type_name}:")
        for field in classified.relationships:
            click.echo(f"  {field.name} -> {field.target_type_name} ({field.cardinality.value})")


@cli.command()
@click.argument("schema_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--host",
    default=settings.api_host,
    help=f"Host to bind to (default: {settings.api_host})",
)
@click.option(
    "--port",
    default=settings.api_port,
    type=int,
    help=f"Port to bind to (default: {settings.api_port})",
)
@click.option(
    "--log-level",
    default=settings.log_level.lower(),
    type=click.Choice(["debug", "info", "warning", "error"]),
    help=f"Log level (default: {settings.log_level.lower()})",
)
def serve(schema_file: Path, host: str, port: int, log_level: str) -> None:
    """Serve a schema file over HTTP, backed by the configured store."""
    from sheetgraph.api.app import create_app

    configure_logging(debug=(log_level == "debug"))

    logger.info("Starting sheetgraph API server", host=host, port=port, schema=str(schema_file))

    try:
        app = create_app(schema_file.read_text())
        uvicorn.run(app, host=host, port=port, log_level=log_level, access_log=True)
    except KeyboardInterrupt:
        logger.info("Server shutdown requested by user")
    except Exception as e:
        logger.error("Server startup failed", error=str(e))
        sys.exit(1)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
