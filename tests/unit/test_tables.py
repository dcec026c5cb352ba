"""Tests for the shared classification tables."""

from __future__ import annotations

import json

import pytest

from l2catalog.catalog.common import build_default_tables
from l2catalog.core.errors import (
    CatalogError,
    InvalidOverlayError,
    RegistryFrozenError,
    UnknownKeyError,
)
from l2catalog.core.tables import ClassificationTables
from l2catalog.models.classification import ClassificationEntry, Sentiment


def _entry(key: str = "STATE_NONE", label: str = "None") -> ClassificationEntry:
    return ClassificationEntry(category="RISK_VIEW", key=key, label=label)


class TestLookup:
    def test_static_entry(self, tables):
        entry = tables.lookup("RISK_VIEW", "STATE_NONE")
        assert entry.category == "RISK_VIEW"
        assert entry.key == "STATE_NONE"
        assert entry.qualified_key == "RISK_VIEW.STATE_NONE"

    def test_unknown_key_raises(self, tables):
        with pytest.raises(UnknownKeyError) as exc_info:
            tables.lookup("RISK_VIEW", "NOT_A_KEY")
        assert exc_info.value.category == "RISK_VIEW"
        assert exc_info.value.key == "NOT_A_KEY"
        assert str(exc_info.value) == "Unknown classification RISK_VIEW.NOT_A_KEY"

    def test_unknown_key_is_catalog_and_key_error(self, tables):
        with pytest.raises(CatalogError):
            tables.lookup("NOPE", "NOPE")
        with pytest.raises(KeyError):
            tables.lookup("NOPE", "NOPE")

    def test_static_entry_rejects_arguments(self, tables):
        with pytest.raises(TypeError):
            tables.lookup("RISK_VIEW", "STATE_NONE", 1)

    def test_lookup_is_stable(self, tables):
        assert tables.lookup("RISK_VIEW", "DATA_ON_CHAIN") == tables.lookup(
            "RISK_VIEW", "DATA_ON_CHAIN"
        )


class TestTemplates:
    def test_exit_window_records_parameters(self, tables):
        entry = tables.lookup("RISK_VIEW", "EXIT_WINDOW", 0, 604800)
        assert entry.parameters == (0, 604800)
        assert entry.defining_metric == -604800
        assert entry.label == "None"
        assert entry.sentiment is Sentiment.BAD

    def test_exit_window_warning_band(self, tables):
        # 14d upgrade delay, 7d exit delay -> 7d window
        entry = tables.lookup("RISK_VIEW", "EXIT_WINDOW", 14 * 86_400, 7 * 86_400)
        assert entry.label == "7d"
        assert entry.sentiment is Sentiment.WARNING

    def test_exit_window_good_band(self, tables):
        entry = tables.lookup("RISK_VIEW", "EXIT_WINDOW", 40 * 86_400, 7 * 86_400)
        assert entry.label == "33d"
        assert entry.sentiment is Sentiment.GOOD

    def test_self_sequence_delay(self, tables):
        entry = tables.lookup("RISK_VIEW", "SEQUENCER_SELF_SEQUENCE", 43200)
        assert entry.parameters == (43200,)
        assert "12h delay" in entry.description

    def test_native_and_canonical_tokens(self, tables):
        entry = tables.lookup("RISK_VIEW", "NATIVE_AND_CANONICAL", "ETH")
        assert entry.parameters == ("ETH",)
        assert entry.description.startswith("ETH is native")

    def test_regular_exit(self, tables):
        entry = tables.lookup("EXITS", "REGULAR", "optimistic", "merkle proof")
        assert entry.parameters == ("optimistic", "merkle proof")
        assert "merkle proof" in entry.description

    def test_regular_exit_rejects_unknown_kind(self, tables):
        with pytest.raises(ValueError):
            tables.lookup("EXITS", "REGULAR", "sovereign", "merkle proof")

    def test_forced_exit(self, tables):
        entry = tables.lookup("EXITS", "FORCED", "all-withdrawals")
        assert entry.parameters == ("all-withdrawals",)


class TestFreeze:
    def test_default_tables_are_frozen(self, tables):
        assert tables.frozen is True

    def test_add_entry_after_freeze(self, tables):
        with pytest.raises(RegistryFrozenError):
            tables.add_entry(_entry("NEW_KEY"))

    def test_add_template_after_freeze(self, tables):
        with pytest.raises(RegistryFrozenError):
            tables.add_template("RISK_VIEW", "NEW", lambda: _entry("NEW"))

    def test_unfrozen_build(self):
        tables = build_default_tables(freeze=False)
        tables.add_entry(_entry("EXTRA", "Extra"))
        tables.freeze()
        assert tables.lookup("RISK_VIEW", "EXTRA").label == "Extra"


class TestIntrospection:
    def test_has(self, tables):
        assert tables.has("RISK_VIEW", "STATE_NONE")
        assert tables.has("RISK_VIEW", "EXIT_WINDOW")
        assert not tables.has("RISK_VIEW", "NOT_A_KEY")

    def test_categories(self, tables):
        categories = tables.categories()
        assert "RISK_VIEW" in categories
        assert "EXITS" in categories
        assert categories == sorted(categories)

    def test_keys_include_templates(self, tables):
        keys = tables.keys("EXITS")
        assert "REGULAR" in keys
        assert "FORCED" in keys

    def test_from_entries(self):
        tables = ClassificationTables.from_entries([_entry("A"), _entry("B")])
        assert len(tables) == 2
        assert tables.frozen is False


class TestOverlay:
    def test_overlay_replaces_entry(self, tmp_path):
        overlay = tmp_path / "overlay.json"
        overlay.write_text(
            json.dumps(
                [
                    {
                        "category": "RISK_VIEW",
                        "key": "STATE_NONE",
                        "label": "No proofs",
                        "sentiment": "bad",
                    }
                ]
            )
        )
        tables = build_default_tables(overlay)
        assert tables.frozen is True
        assert tables.lookup("RISK_VIEW", "STATE_NONE").label == "No proofs"

    def test_overlay_adds_entry(self, tmp_path):
        overlay = tmp_path / "overlay.json"
        overlay.write_text(
            json.dumps([{"category": "OPERATOR", "key": "DECENTRALIZED", "label": "Decentralized"}])
        )
        tables = build_default_tables(overlay)
        assert tables.has("OPERATOR", "DECENTRALIZED")

    def test_overlay_must_be_list(self, tmp_path):
        overlay = tmp_path / "overlay.json"
        overlay.write_text(json.dumps({"category": "X"}))
        tables = ClassificationTables()
        with pytest.raises(InvalidOverlayError):
            tables.load_overlay(overlay)

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            json.dumps([{"category": "RISK_VIEW", "key": "STATE_NONE"}]),
        ],
    )
    def test_bad_overlay_is_catalog_error(self, tmp_path, content):
        overlay = tmp_path / "overlay.json"
        overlay.write_text(content)
        with pytest.raises(CatalogError):
            build_default_tables(overlay)

    def test_missing_overlay_file(self, tmp_path):
        with pytest.raises(InvalidOverlayError):
            build_default_tables(tmp_path / "missing.json")

    def test_invalid_entry_merges_nothing(self, tmp_path):
        overlay = tmp_path / "overlay.json"
        overlay.write_text(
            json.dumps(
                [
                    {"category": "OPERATOR", "key": "DECENTRALIZED", "label": "Decentralized"},
                    {"category": "OPERATOR", "key": "BROKEN"},
                ]
            )
        )
        tables = ClassificationTables()
        with pytest.raises(InvalidOverlayError):
            tables.load_overlay(overlay)
        assert len(tables) == 0
