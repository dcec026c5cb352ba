"""Tests for catalog config — env-driven settings."""

from __future__ import annotations

from pathlib import Path

from l2catalog.config import CatalogConfig


class TestCatalogConfig:
    def test_defaults(self):
        config = CatalogConfig()
        assert config.environment == "development"
        assert config.log_level == "INFO"
        assert config.abort_on_error is True
        assert config.max_workers == 1

    def test_is_production_false_by_default(self):
        config = CatalogConfig()
        assert config.is_production is False

    def test_is_production_when_set(self):
        config = CatalogConfig(environment="production")
        assert config.is_production is True

    def test_default_paths(self):
        config = CatalogConfig()
        assert config.discovery_path == Path("discovery")
        assert config.export_path == Path("build/projects.jsonl")
        assert config.tables_overlay_path is None

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("L2CATALOG_MAX_WORKERS", "4")
        monkeypatch.setenv("L2CATALOG_ABORT_ON_ERROR", "false")
        monkeypatch.setenv("L2CATALOG_DISCOVERY_PATH", "/data/discovery")
        config = CatalogConfig()
        assert config.max_workers == 4
        assert config.abort_on_error is False
        assert config.discovery_path == Path("/data/discovery")

    def test_unrelated_env_ignored(self, monkeypatch):
        monkeypatch.setenv("L2CATALOG_NOT_A_SETTING", "x")
        config = CatalogConfig()
        assert not hasattr(config, "not_a_setting")
