"""Validate command."""

from __future__ import annotations

import click

from odg_metamodel.cli.commands import console, get_catalog


@click.command("validate")
@click.pass_context
def validate(ctx: click.Context) -> None:
    """Load the schema sources and report integrity errors.

    Exits with status 1 if any aspect or entity fails to register.

    Example:
        odg-metamodel --aspects-dir metadata-models/aspects validate
    """
    snapshot = get_catalog(ctx).snapshot
    console.print(
        f"[green]✓[/green] {len(snapshot.aspects)} aspects, {len(snapshot.entities)} entities, "
        f"{len(snapshot.named_types)} named types"
    )
