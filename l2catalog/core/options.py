"""Explicit "defaults + overrides" composition for record fragments."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def merge_options(*layers: Mapping[str, Any] | None) -> dict[str, Any]:
    """Shallow-merge option layers; later layers win key by key.

    ``None`` layers are skipped.  A key present in a later layer replaces
    the earlier value even when the later value is ``None``; nested
    mappings are replaced, not merged.  The inputs are never modified.

    >>> merge_options({"upgradable_by": ["ProxyAdmin"], "upgrade_delay": "No delay"},
    ...               {"upgrade_delay": "7d"})
    {'upgradable_by': ['ProxyAdmin'], 'upgrade_delay': '7d'}
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        if layer is None:
            continue
        merged.update(layer)
    return merged
