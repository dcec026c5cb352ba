"""Tests for the project registry — registration, views, export."""

from __future__ import annotations

import json

import pytest

from l2catalog.core.errors import (
    DuplicateIdError,
    NotFoundError,
    RegistryFrozenError,
    SchemaViolationError,
)
from l2catalog.core.registry import ProjectRegistry, by_category, with_tag


@pytest.fixture
def registry(make_record):
    registry = ProjectRegistry()
    registry.register(make_record("zora", name="Zora"))
    registry.register(make_record("arbitrum", name="Arbitrum One"))
    registry.register(make_record("zksync", name="zkSync Era", category="ZK Rollup", tags=["zk"]))
    return registry


class TestRegistration:
    def test_register_and_get(self, registry):
        assert registry.get("zora").display.name == "Zora"
        assert "zora" in registry
        assert len(registry) == 3

    def test_duplicate_id(self, registry, make_record):
        with pytest.raises(DuplicateIdError):
            registry.register(make_record("zora"))
        assert len(registry) == 3

    def test_not_found(self, registry):
        with pytest.raises(NotFoundError) as exc_info:
            registry.get("optimism")
        assert "optimism" in str(exc_info.value)

    def test_not_found_is_key_error(self, registry):
        with pytest.raises(KeyError):
            registry.get("optimism")

    def test_frozen_registry_rejects_writes(self, registry, make_record):
        registry.freeze()
        assert registry.frozen is True
        with pytest.raises(RegistryFrozenError):
            registry.register(make_record("base"))


class TestListing:
    def test_insertion_order(self, registry):
        assert registry.list().ids() == ["zora", "arbitrum", "zksync"]
        assert [r.id for r in registry] == ["zora", "arbitrum", "zksync"]

    def test_sort_key(self, registry):
        view = registry.list(sort_key=lambda r: r.display.name.casefold())
        assert view.ids() == ["arbitrum", "zksync", "zora"]

    def test_category_filter_is_case_insensitive(self, registry):
        assert registry.list(by_category("zk rollup")).ids() == ["zksync"]
        assert len(registry.list(by_category("Optimistic Rollup"))) == 2

    def test_tag_filter(self, registry):
        assert registry.list(with_tag("zk")).ids() == ["zksync"]
        assert registry.list(with_tag("op-stack")).ids() == ["zora", "arbitrum"]

    def test_view_is_restartable(self, registry):
        view = registry.list()
        assert list(view) == list(view)
        assert len(view) == 3

    def test_stats(self, registry):
        stats = registry.get_stats()
        assert stats["total"] == 3
        assert stats["by_category"] == {"Optimistic Rollup": 2, "ZK Rollup": 1}
        assert stats["by_stage"] == {"Stage 0": 3}


class TestExport:
    def test_export_one_object_per_line(self, registry, tmp_path):
        path = tmp_path / "out" / "projects.jsonl"
        assert registry.export_json(path) == 3
        lines = path.read_text(encoding="utf-8").splitlines()
        assert len(lines) == 3
        first = json.loads(lines[0])
        assert first["id"] == "zora"
        assert "riskView" in first
        assert first["riskView"]["exitWindow"]["parameters"] == [0, 604800]

    def test_round_trip(self, registry, tmp_path):
        path = tmp_path / "projects.jsonl"
        registry.export_json(path)
        loaded = ProjectRegistry.load_json(path)
        assert loaded.frozen is True
        assert loaded.list().ids() == registry.list().ids()
        for record in registry:
            assert loaded.get(record.id) == record

    def test_load_rejects_invalid_line(self, tmp_path):
        path = tmp_path / "projects.jsonl"
        path.write_text(json.dumps({"id": "broken"}) + "\n", encoding="utf-8")
        with pytest.raises(SchemaViolationError) as exc_info:
            ProjectRegistry.load_json(path)
        assert exc_info.value.project_id == "broken"
