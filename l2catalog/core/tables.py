"""Shared classification tables — canonical vocabulary for every record.

Static entries are stored as ``ClassificationEntry`` values; parametrised
entries (exit window, self-sequencing delay, regular exits, ...) are
templates called with their arguments at lookup time.  The tables are
populated once, frozen, and then passed explicitly to builders.  A lookup
of an undefined key is a build error, never a fallback.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from l2catalog.core.errors import InvalidOverlayError, RegistryFrozenError, UnknownKeyError
from l2catalog.models.classification import ClassificationEntry

logger = logging.getLogger(__name__)

EntryTemplate = Callable[..., ClassificationEntry]


class ClassificationTables:
    """Immutable-after-freeze mapping ``(category, key) -> ClassificationEntry``.

    Examples
    --------
    >>> tables = ClassificationTables()
    >>> tables.add_entry(ClassificationEntry(
    ...     category="RISK_VIEW", key="STATE_NONE", label="None"))
    >>> tables.freeze()
    >>> tables.lookup("RISK_VIEW", "STATE_NONE").label
    'None'
    """

    def __init__(self) -> None:
        self._entries: dict[str, dict[str, ClassificationEntry]] = {}
        self._templates: dict[str, dict[str, EntryTemplate]] = {}
        self._frozen = False

    # -- Population ---------------------------------------------------------

    def _check_writable(self) -> None:
        if self._frozen:
            raise RegistryFrozenError("Classification tables are frozen")

    def add_entry(self, entry: ClassificationEntry) -> None:
        """Add (or replace) a static entry."""
        self._check_writable()
        self._entries.setdefault(entry.category, {})[entry.key] = entry

    def add_template(self, category: str, key: str, template: EntryTemplate) -> None:
        """Add a parametrised entry, resolved by calling *template*."""
        self._check_writable()
        self._templates.setdefault(category, {})[key] = template

    def load_overlay(self, path: Path) -> int:
        """Merge static entries from a JSON file, replacing same-keyed ones.

        The file holds a list of entry objects (camelCase or snake_case).
        Returns the number of entries loaded.  Nothing is merged unless
        every entry in the file is valid.

        Raises
        ------
        InvalidOverlayError
            If the file is unreadable, not a JSON list, or holds an
            invalid entry.
        """
        try:
            raw = json.loads(Path(path).read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise InvalidOverlayError(f"Table overlay {path} cannot be read: {exc}") from exc
        if not isinstance(raw, list):
            raise InvalidOverlayError(f"Table overlay {path} must contain a JSON list")
        try:
            entries = [ClassificationEntry.model_validate(item) for item in raw]
        except ValidationError as exc:
            raise InvalidOverlayError(
                f"Table overlay {path} has an invalid entry: "
                + "; ".join(f"{err['loc']}: {err['msg']}" for err in exc.errors())
            ) from exc
        for entry in entries:
            self.add_entry(entry)
        logger.info("Loaded %d classification entries from %s", len(raw), path)
        return len(raw)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Lookup -------------------------------------------------------------

    def lookup(self, category: str, key: str, *args: Any) -> ClassificationEntry:
        """Resolve a table entry.

        Static entries take no arguments.  Template entries are called with
        *args*; the template is responsible for recording them on the entry.

        Raises
        ------
        UnknownKeyError
            If neither a static entry nor a template exists for the key.
        """
        template = self._templates.get(category, {}).get(key)
        if template is not None:
            entry = template(*args)
            logger.debug("Resolved %s.%s%r", category, key, args)
            return entry

        entry = self._entries.get(category, {}).get(key)
        if entry is None:
            raise UnknownKeyError(category, key)
        if args:
            raise TypeError(f"{category}.{key} is a static entry and takes no arguments")
        return entry

    def has(self, category: str, key: str) -> bool:
        return key in self._entries.get(category, {}) or key in self._templates.get(
            category, {}
        )

    def categories(self) -> list[str]:
        return sorted(set(self._entries) | set(self._templates))

    def keys(self, category: str) -> list[str]:
        return sorted(
            set(self._entries.get(category, {})) | set(self._templates.get(category, {}))
        )

    def __len__(self) -> int:
        return sum(len(v) for v in self._entries.values()) + sum(
            len(v) for v in self._templates.values()
        )

    @classmethod
    def from_entries(cls, entries: Iterable[ClassificationEntry]) -> ClassificationTables:
        tables = cls()
        for entry in entries:
            tables.add_entry(entry)
        return tables
