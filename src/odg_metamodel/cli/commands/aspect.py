"""Aspect commands."""

from __future__ import annotations

import click
from rich.table import Table

from odg_metamodel.cli.commands import console, echo_json, get_catalog, output_option, resolve_format
from odg_metamodel.exceptions import NotFoundError
from odg_metamodel.models import type_label


@click.group()
def aspect() -> None:
    """Inspect aspect schemas."""


@aspect.command("list")
@output_option
@click.pass_context
def aspect_list(ctx: click.Context, output_format: str | None) -> None:
    """List registered aspects.

    Example:
        odg-metamodel aspect list --output json
    """
    aspects = list(get_catalog(ctx).list_aspects())

    if resolve_format(ctx, output_format) == "json":
        echo_json([{"name": a.name, "fullName": a.full_name, "fields": len(a.fields)} for a in aspects])
        return

    table = Table(title="Aspects")
    table.add_column("Name", style="cyan")
    table.add_column("Record", style="white")
    table.add_column("Fields", style="green", justify="right")
    table.add_column("Doc", style="dim")
    for a in aspects:
        table.add_row(a.name, a.full_name, str(len(a.fields)), a.doc.splitlines()[0] if a.doc else "")

    console.print(table)
    console.print(f"\nShowing {len(aspects)} aspects")


@aspect.command("show")
@click.argument("name")
@output_option
@click.pass_context
def aspect_show(ctx: click.Context, name: str, output_format: str | None) -> None:
    """Show the fields of one aspect.

    Example:
        odg-metamodel aspect show ownership
    """
    try:
        schema = get_catalog(ctx).get_aspect(name)
    except NotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise SystemExit(1) from e

    if resolve_format(ctx, output_format) == "json":
        echo_json(schema.model_dump(mode="json"))
        return

    console.print(f"[bold]{schema.name}[/bold] ({schema.full_name}, v{schema.version})")
    if schema.doc:
        console.print(schema.doc)

    table = Table(title="Fields")
    table.add_column("Name", style="cyan")
    table.add_column("Type", style="blue")
    table.add_column("Default", style="yellow")
    table.add_column("Annotations", style="magenta")
    for f in schema.fields:
        notes = [f"Relationship {r.name}" for r in f.relationships]
        if f.searchable:
            notes.append("Searchable")
        table.add_row(f.name, type_label(f.type), repr(f.default) if f.has_default else "", ", ".join(notes))
    console.print(table)
