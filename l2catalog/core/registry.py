"""Project registry — every built record, keyed by project id.

The registry is write-once-then-read-only per build: records are
registered during the build, the registry is frozen, and consumers only
read from it afterwards.  Iteration follows insertion order unless a sort
key is given.

Export format is JSON Lines: one camelCase ``ProjectRecord`` object per
line, in registry order.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from l2catalog.core.errors import (
    DuplicateIdError,
    NotFoundError,
    RegistryFrozenError,
    SchemaViolationError,
)
from l2catalog.models.project import ProjectRecord

logger = logging.getLogger(__name__)

RecordPredicate = Callable[[ProjectRecord], bool]
SortKey = Callable[[ProjectRecord], Any]


def by_category(category: str) -> RecordPredicate:
    """Predicate matching ``display.category`` case-insensitively."""
    wanted = category.casefold()
    return lambda record: record.display.category.casefold() == wanted


def with_tag(tag: str) -> RecordPredicate:
    return lambda record: tag in record.display.tags


class RecordView:
    """Finite, restartable view over registry records.

    Each iteration re-reads the registry, so a view can be iterated any
    number of times.
    """

    def __init__(
        self,
        records: dict[str, ProjectRecord],
        predicate: RecordPredicate | None = None,
        sort_key: SortKey | None = None,
    ) -> None:
        self._records = records
        self._predicate = predicate
        self._sort_key = sort_key

    def __iter__(self) -> Iterator[ProjectRecord]:
        selected = (
            r for r in self._records.values()
            if self._predicate is None or self._predicate(r)
        )
        if self._sort_key is not None:
            return iter(sorted(selected, key=self._sort_key))
        return selected

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def ids(self) -> list[str]:
        return [r.id for r in self]


class ProjectRegistry:
    """Keyed collection of ``ProjectRecord`` objects.

    Examples
    --------
    >>> registry = ProjectRegistry()
    >>> registry.register(record)          # doctest: +SKIP
    >>> registry.get("zora").display.name  # doctest: +SKIP
    'Zora'
    """

    def __init__(self) -> None:
        self._records: dict[str, ProjectRecord] = {}
        self._frozen = False

    # -- Registration -------------------------------------------------------

    def register(self, record: ProjectRecord) -> None:
        """Add a record.

        Raises
        ------
        DuplicateIdError
            If a record with the same id is already registered.
        RegistryFrozenError
            If the registry has been frozen.
        """
        if self._frozen:
            raise RegistryFrozenError(
                f"Registry is frozen; cannot register {record.id!r}"
            )
        if record.id in self._records:
            raise DuplicateIdError(f"Project {record.id!r} is already registered")
        self._records[record.id] = record
        logger.info("Registered project %s (%s)", record.id, record.display.category)

    def freeze(self) -> None:
        self._frozen = True
        logger.debug("Registry frozen with %d project(s)", len(self._records))

    @property
    def frozen(self) -> bool:
        return self._frozen

    # -- Lookup -------------------------------------------------------------

    def get(self, project_id: str) -> ProjectRecord:
        """Return the record for *project_id*.

        Raises
        ------
        NotFoundError
            If no such project is registered.
        """
        try:
            return self._records[project_id]
        except KeyError:
            raise NotFoundError(
                f"Project {project_id!r} is not registered. "
                f"Known projects: {sorted(self._records)}"
            ) from None

    def list(
        self,
        predicate: RecordPredicate | None = None,
        sort_key: SortKey | None = None,
    ) -> RecordView:
        """Return a restartable view of matching records."""
        return RecordView(self._records, predicate, sort_key)

    def __contains__(self, project_id: object) -> bool:
        return project_id in self._records

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[ProjectRecord]:
        return iter(self.list())

    # -- Export -------------------------------------------------------------

    def export_json(self, path: Path) -> int:
        """Write every record as one JSON object per line.

        Creates parent directories as needed.  Returns the record count.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        lines = [
            json.dumps(record.to_wire(), sort_keys=True, ensure_ascii=False)
            for record in self._records.values()
        ]
        path.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        logger.info("Exported %d project(s) to %s", len(lines), path)
        return len(lines)

    @classmethod
    def load_json(cls, path: Path) -> ProjectRegistry:
        """Rebuild a frozen registry from an ``export_json`` file."""
        registry = cls()
        for line_no, line in enumerate(
            Path(path).read_text(encoding="utf-8").splitlines(), start=1
        ):
            if not line.strip():
                continue
            raw = json.loads(line)
            try:
                record = ProjectRecord.model_validate(raw)
            except ValidationError as exc:
                raise SchemaViolationError(
                    str(raw.get("id", f"{path}:{line_no}")),
                    [f"{err['loc']}: {err['msg']}" for err in exc.errors()],
                ) from exc
            registry.register(record)
        registry.freeze()
        logger.info("Loaded %d project(s) from %s", len(registry), path)
        return registry

    # -- Stats --------------------------------------------------------------

    def get_stats(self) -> dict[str, Any]:
        """Counts by category and by stage."""
        by_category: dict[str, int] = {}
        by_stage: dict[str, int] = {}
        for record in self._records.values():
            by_category[record.display.category] = by_category.get(record.display.category, 0) + 1
            by_stage[record.stage.stage] = by_stage.get(record.stage.stage, 0) + 1
        return {
            "total": len(self._records),
            "by_category": by_category,
            "by_stage": by_stage,
        }
