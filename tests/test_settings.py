"""Tests for settings defaults and environment overrides."""

from pathlib import Path

import pytest

from odg_metamodel.settings import LoggingSettings, SchemaSourceSettings


class TestSettingsDefaults:
    def test_schema_source_defaults(self) -> None:
        settings = SchemaSourceSettings()
        assert settings.aspects_dir == Path("metadata-models/aspects")
        assert settings.entity_registry.name == "entity-registry.yaml"

    def test_logging_defaults(self) -> None:
        settings = LoggingSettings()
        assert settings.level == "INFO"
        assert "%(levelname)s" in settings.format


class TestSettingsEnvironment:
    def test_schema_source_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ODG_SCHEMA_ASPECTS_DIR", "/srv/schemas/aspects")
        assert SchemaSourceSettings().aspects_dir == Path("/srv/schemas/aspects")

    def test_logging_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ODG_LOG_LEVEL", "DEBUG")
        assert LoggingSettings().level == "DEBUG"
