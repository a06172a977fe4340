"""Relationship commands."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click
from rich.table import Table

from odg_metamodel.cli.commands import console, echo_json, get_catalog, output_option, resolve_format
from odg_metamodel.enums import RelationshipDirection
from odg_metamodel.exceptions import NotFoundError

if TYPE_CHECKING:
    from odg_metamodel.models import RelationshipEdge


@click.command("relationships")
@click.argument("entity_name")
@click.option(
    "--direction",
    type=click.Choice([d.value for d in RelationshipDirection]),
    default=RelationshipDirection.BOTH.value,
    help="Which relationships to list",
)
@output_option
@click.pass_context
def relationships(ctx: click.Context, entity_name: str, direction: str, output_format: str | None) -> None:
    """List the relationships of an entity.

    Example:
        odg-metamodel relationships mlModelGroup --direction incoming
    """
    catalog = get_catalog(ctx)
    wanted = RelationshipDirection(direction)
    try:
        sections: dict[RelationshipDirection, tuple[RelationshipEdge, ...]] = {}
        if wanted in (RelationshipDirection.OUTGOING, RelationshipDirection.BOTH):
            sections[RelationshipDirection.OUTGOING] = catalog.compute_outgoing(entity_name)
        if wanted in (RelationshipDirection.INCOMING, RelationshipDirection.BOTH):
            sections[RelationshipDirection.INCOMING] = catalog.compute_incoming(entity_name)
    except NotFoundError as e:
        console.print(f"[red]✗[/red] {e}")
        raise SystemExit(1) from e

    if resolve_format(ctx, output_format) == "json":
        echo_json({d.value: [edge.model_dump(mode="json") for edge in edges] for d, edges in sections.items()})
        return

    for d, edges in sections.items():
        table = Table(title=f"{d.value.capitalize()} relationships of {entity_name}")
        table.add_column("Relationship", style="cyan")
        table.add_column("Source", style="white")
        table.add_column("Target", style="blue")
        table.add_column("Via", style="green")
        for edge in edges:
            table.add_row(edge.name, edge.source_entity, edge.target_entity_type, edge.source_field_path)
        console.print(table)
