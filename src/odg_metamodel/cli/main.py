"""odg-metamodel CLI main entry point."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from odg_metamodel.cli.commands import aspect as aspect_cmd
from odg_metamodel.cli.commands import entity as entity_cmd
from odg_metamodel.cli.commands import relationship as relationship_cmd
from odg_metamodel.cli.commands import validate as validate_cmd
from odg_metamodel.cli.config import CatalogLoader, CLIConfig
from odg_metamodel.settings import LoggingSettings


@click.group()
@click.version_option(version="0.1.0", prog_name="odg-metamodel")
@click.option(
    "--aspects-dir",
    type=click.Path(path_type=Path, file_okay=False),
    default=None,
    help="Directory of aspect schema files (default: $ODG_SCHEMA_ASPECTS_DIR)",
)
@click.option(
    "--entity-registry",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Entity registry YAML file (default: $ODG_SCHEMA_ENTITY_REGISTRY)",
)
@click.option("--log-level", default=None, help="Logging level (default: $ODG_LOG_LEVEL or INFO)")
@click.pass_context
def cli(ctx: click.Context, aspects_dir: Path | None, entity_registry: Path | None, log_level: str | None) -> None:
    """OpenDataGov metadata model inspector.

    Browse aspect schemas, entity definitions and the relationships between entity types.
    """
    log_settings = LoggingSettings()
    logging.basicConfig(
        level=(log_level or log_settings.level).upper(),
        format=log_settings.format,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = CLIConfig()
    ctx.obj["catalog_loader"] = CatalogLoader(aspects_dir, entity_registry)


# Register command groups
cli.add_command(aspect_cmd.aspect)
cli.add_command(entity_cmd.entity)
cli.add_command(relationship_cmd.relationships)
cli.add_command(validate_cmd.validate)


if __name__ == "__main__":
    cli()
