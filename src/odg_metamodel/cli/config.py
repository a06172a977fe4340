"""CLI configuration and lazy catalog loading."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic_settings import BaseSettings

from odg_metamodel.catalog import MetadataCatalog
from odg_metamodel.settings import SchemaSourceSettings

logger = logging.getLogger(__name__)


class CLIConfig(BaseSettings):
    """CLI configuration."""

    output_format: str = "table"  # table, json

    model_config = {
        "env_prefix": "ODG_METAMODEL_",
    }


class CatalogLoader:
    """Load the catalog on first use, from CLI overrides or settings."""

    def __init__(self, aspects_dir: Path | None = None, entity_registry: Path | None = None):
        overrides = {}
        if aspects_dir is not None:
            overrides["aspects_dir"] = aspects_dir
        if entity_registry is not None:
            overrides["entity_registry"] = entity_registry
        self.settings = SchemaSourceSettings(**overrides)
        self._catalog: MetadataCatalog | None = None

    def load(self) -> MetadataCatalog:
        if self._catalog is None:
            logger.debug("Loading catalog from %s", self.settings.aspects_dir)
            self._catalog = MetadataCatalog.from_settings(self.settings)
        return self._catalog
