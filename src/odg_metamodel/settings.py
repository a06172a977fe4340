"""Application settings via Pydantic Settings."""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class SchemaSourceSettings(BaseSettings):
    """Location of the schema sources loaded at startup."""

    model_config = SettingsConfigDict(env_prefix="ODG_SCHEMA_")

    aspects_dir: Path = Path("metadata-models/aspects")
    entity_registry: Path = Path("metadata-models/entity-registry.yaml")


class LoggingSettings(BaseSettings):
    """Logging settings."""

    model_config = SettingsConfigDict(env_prefix="ODG_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
