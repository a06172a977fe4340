"""CLI command groups."""

from __future__ import annotations

import json
from typing import Any

import click
from rich.console import Console

from odg_metamodel.catalog import MetadataCatalog
from odg_metamodel.exceptions import MetamodelError

console = Console()

output_option = click.option(
    "--output",
    "output_format",
    type=click.Choice(["table", "json"]),
    default=None,
    help="Output format (default: from configuration)",
)


def get_catalog(ctx: click.Context) -> MetadataCatalog:
    """Load the catalog for a command, exiting with status 1 on failure."""
    try:
        return ctx.obj["catalog_loader"].load()
    except (MetamodelError, FileNotFoundError) as e:
        console.print(f"[red]✗[/red] Could not load metadata model: {e}")
        raise SystemExit(1) from e


def resolve_format(ctx: click.Context, output_format: str | None) -> str:
    return output_format or ctx.obj["config"].output_format


def echo_json(data: Any) -> None:
    click.echo(json.dumps(data, indent=2, default=str))
