"""Command-line interface for ssas-to-mondrian."""

from __future__ import annotations

import logging
import traceback
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from ssas_to_mondrian import __version__
from ssas_to_mondrian.adapters.mondrian import MondrianRenderer
from ssas_to_mondrian.cli import (
    RichCommand,
    format_error,
    format_skipped_measures,
    format_statistics,
    format_success,
)
from ssas_to_mondrian.config import load_config
from ssas_to_mondrian.core.builder import SchemaBuilder
from ssas_to_mondrian.errors import IdentifierFormatError, ProviderConnectionError
from ssas_to_mondrian.ingestion import (
    MetadataProvider,
    SnapshotProvider,
    build_connection_string,
)

# Diagnostics go to stderr; stdout carries only the schema document
console = Console(stderr=True)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.command(cls=RichCommand)
@click.version_option(version=__version__, prog_name="ssas2mondrian")
@click.option("--server", "-S", help="Metadata source: snapshot file or directory")
@click.option(
    "--database", "-D", help="Database to convert (empty converts every database)"
)
@click.option("--cube", "-C", help="Cube to convert (empty converts every cube)")
@click.option(
    "--name", "-N", "schema_name", help="Name of the Mondrian schema (default: database)"
)
@click.option(
    "--include-schema",
    "-A",
    is_flag=True,
    help="Include the source database schema in Table elements",
)
@click.option(
    "--include-many-to-many",
    "-M",
    is_flag=True,
    help="Include dimensions reached through many-to-many relationships",
)
@click.option(
    "--include-all-member",
    "-L",
    is_flag=True,
    help="Include the All member name of each hierarchy",
)
@click.option("--pause", "-P", is_flag=True, help="Wait for a key press before exiting")
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a config file (default: nearest ssas2mondrian.yml)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the schema to a file instead of stdout",
)
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.option(
    "--debug",
    is_flag=True,
    help="Show full exception stacktraces for troubleshooting",
)
@click.pass_context
def cli(
    ctx: click.Context,
    server: str | None,
    database: str | None,
    cube: str | None,
    schema_name: str | None,
    include_schema: bool,
    include_many_to_many: bool,
    include_all_member: bool,
    pause: bool,
    config: Path | None,
    output: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Convert Analysis Services cube metadata into a Mondrian schema.

    Each measure group becomes a Mondrian cube, cube dimensions become shared
    dimensions, and one virtual cube unions every measure group.

    Examples:

        # Convert one cube
        ssas2mondrian -S ./snapshot.yml -D AdventureWorks -C "Adventure Works"

        # Set the name of the Mondrian schema
        ssas2mondrian -S ./snapshot.yml -D AdventureWorks -C "" -N myschema

        # Include many-to-many dimensions and source schemas in Table elements
        ssas2mondrian -S ./snapshots -D AdventureWorks -C "" -M -A
    """
    _configure_logging(verbose)

    try:
        cfg = load_config(
            config,
            server=server,
            database=database,
            cube=cube,
            schema_name=schema_name,
            include_schema=include_schema or None,
            include_many_to_many=include_many_to_many or None,
            include_all_member=include_all_member or None,
            pause=pause or None,
        )
    except yaml.YAMLError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]YAML parsing error:[/red] {escape(str(e))}")
        raise click.ClickException(str(e))
    except ValidationError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(f"[red]Config validation error:[/red] {escape(str(e))}")
        raise click.ClickException(str(e))
    except ValueError as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise click.ClickException(str(e))

    provider: MetadataProvider = SnapshotProvider()
    connection_string = build_connection_string(cfg.server)
    try:
        source = provider.connect(connection_string)
    except ProviderConnectionError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(format_error("Problem connecting to the metadata provider", str(e)))
        console.print()
        console.print(ctx.get_help(), markup=False, highlight=False)
        ctx.exit(1)

    if verbose:
        console.print(f"[dim]Source:[/dim] {cfg.server} ({source.summary()})")

    builder = SchemaBuilder(cfg)
    try:
        schema = builder.build(source)
    except IdentifierFormatError as e:
        if debug:
            console.print(traceback.format_exc())
        console.print(format_error(str(e), "Column bindings must be 'table.column'"))
        raise click.ClickException(str(e))

    renderer = MondrianRenderer()
    if output:
        written = renderer.render_to_file(schema, output)
        console.print(format_success(f"Wrote {written}", schema.summary()))
    else:
        click.echo(renderer.render(schema), nl=False)

    if verbose:
        console.print(format_statistics(builder.stats))
        if builder.stats.skipped_measures:
            console.print(format_skipped_measures(builder.stats.skipped_measures))

    if cfg.pause:
        click.pause()


if __name__ == "__main__":
    cli()
