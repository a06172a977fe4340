"""Entity commands."""

from __future__ import annotations

import click
from rich.table import Table

from odg_metamodel.cli.commands import console, echo_json, get_catalog, output_option, resolve_format
from odg_metamodel.exceptions import NotFoundError


@click.group()
def entity() -> None:
    """Inspect entity definitions."""


@entity.command("list")
@click.option("--category", help="Filter by category")
@output_option
@click.pass_context
def entity_list(ctx: click.Context, category: str | None, output_format: str | None) -> None:
    """List defined entities.

    Example:
        odg-metamodel entity list --category core
    """
    entities = [e for e in get_catalog(ctx).list_entities() if category is None or e.category == category]

    if resolve_format(ctx, output_format) == "json":
        echo_json([e.model_dump(mode="json") for e in entities])
        return

    table = Table(title="Entities")
    table.add_column("Name", style="cyan")
    table.add_column("Key Aspect", style="white")
    table.add_column("Aspects", style="green", justify="right")
    table.add_column("Category", style="blue")
    for e in entities:
        table.add_row(e.name, e.key_aspect, str(len(e.all_aspects)), e.category)

    console.print(table)
    console.print(f"\nShowing {len(entities)} entities")


@entity.command("show")
@click.argument("name")
@output_option
@click.pass_context
def entity_show(ctx: click.Context, name: str, output_format: str | None) -> None:
    """Show an entity's aspects and relationships.

    Example:
        odg-metamodel entity show mlModelGroup
    """
    catalog = get_catalog(ctx)
    try:
        definition = catalog.get_entity(name)
        outgoing = catalog.compute_outgoing(name)
        incoming = catalog.compute_incoming(name)
    except NotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise SystemExit(1) from e

    if resolve_format(ctx, output_format) == "json":
        echo_json(
            {
                "name": definition.name,
                "keyAspect": definition.key_aspect,
                "aspects": list(definition.all_aspects),
                "doc": definition.doc,
                "outgoing": [edge.model_dump(mode="json") for edge in outgoing],
                "incoming": [edge.model_dump(mode="json") for edge in incoming],
            }
        )
        return

    console.print(f"[bold]{definition.name}[/bold]")
    if definition.doc:
        console.print(definition.doc)

    table = Table(title="Aspects")
    table.add_column("Aspect", style="cyan")
    table.add_column("Doc", style="dim")
    for aspect_name in definition.all_aspects:
        schema = catalog.get_aspect(aspect_name)
        label = f"{aspect_name} (key)" if aspect_name == definition.key_aspect else aspect_name
        table.add_row(label, schema.doc.splitlines()[0] if schema.doc else "")
    console.print(table)

    console.print(f"\n{len(outgoing)} outgoing, {len(incoming)} incoming relationships")
