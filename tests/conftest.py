"""Shared test fixtures for l2catalog."""

from __future__ import annotations

import copy
import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from l2catalog.catalog.common import build_default_tables
from l2catalog.core.builder import ProjectRecordBuilder
from l2catalog.core.discovery import DiscoverySnapshot, ProjectDiscovery
from l2catalog.core.tables import ClassificationTables
from l2catalog.models.project import ProjectRecord
from l2catalog.projects import zora

REPO_ROOT = Path(__file__).resolve().parents[1]
DISCOVERY_PATH = REPO_ROOT / "discovery"


@pytest.fixture
def discovery_path() -> Path:
    """The sample discovery directory shipped with the repository."""
    return DISCOVERY_PATH


@pytest.fixture
def tables() -> ClassificationTables:
    """Frozen default classification tables."""
    return build_default_tables()


@pytest.fixture
def zora_raw() -> dict[str, Any]:
    """The raw zora discovery snapshot JSON."""
    return json.loads((DISCOVERY_PATH / "zora" / "discovered.json").read_text(encoding="utf-8"))


@pytest.fixture
def make_snapshot(zora_raw: dict[str, Any]) -> Callable[..., DiscoverySnapshot]:
    """Factory fixture: the zora snapshot with contracts/values removed or set.

    ``remove`` takes ``(contract, field)`` pairs; a ``None`` field removes
    the whole contract.  ``set_values`` maps ``(contract, field)`` to a value.
    """

    def _factory(
        *,
        remove: list[tuple[str, str | None]] | None = None,
        set_values: dict[tuple[str, str], Any] | None = None,
        name: str | None = None,
    ) -> DiscoverySnapshot:
        raw = copy.deepcopy(zora_raw)
        contracts = {c["name"]: c for c in raw["contracts"]}
        for contract, field in remove or []:
            if field is None:
                raw["contracts"].remove(contracts[contract])
            else:
                del contracts[contract]["values"][field]
        for (contract, field), value in (set_values or {}).items():
            contracts[contract].setdefault("values", {})[field] = value
        if name is not None:
            raw["name"] = name
        return DiscoverySnapshot.model_validate(raw)

    return _factory


@pytest.fixture
def zora_snapshot(make_snapshot: Callable[..., DiscoverySnapshot]) -> DiscoverySnapshot:
    return make_snapshot()


@pytest.fixture
def discovery(zora_snapshot: DiscoverySnapshot) -> ProjectDiscovery:
    """A ProjectDiscovery over the unmodified zora snapshot."""
    return ProjectDiscovery(zora_snapshot)


@pytest.fixture
def builder(tables: ClassificationTables) -> ProjectRecordBuilder:
    return ProjectRecordBuilder(tables)


@pytest.fixture
def zora_record(builder: ProjectRecordBuilder, zora_snapshot: DiscoverySnapshot) -> ProjectRecord:
    """The zora record built from the sample snapshot."""
    return builder.build("zora", zora_snapshot, zora.define)


@pytest.fixture
def make_record(zora_record: ProjectRecord) -> Callable[..., ProjectRecord]:
    """Factory fixture: a copy of the zora record with another id/category."""

    def _factory(
        project_id: str = "zora",
        category: str | None = None,
        tags: list[str] | None = None,
        name: str | None = None,
    ) -> ProjectRecord:
        display_update: dict[str, Any] = {}
        if category is not None:
            display_update["category"] = category
        if tags is not None:
            display_update["tags"] = tags
        if name is not None:
            display_update["name"] = name
        display = zora_record.display.model_copy(update=display_update)
        return zora_record.model_copy(update={"id": project_id, "display": display})

    return _factory
