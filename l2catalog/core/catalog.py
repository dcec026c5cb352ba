"""Catalog build — every project definition into one frozen registry.

Per project: load the discovery snapshot, build the record, register it.
A catalog error aborts the whole build (default) or, with
``abort_on_error=False``, skips that project and is reported in the
``BuildReport``.  No project is ever registered half-built.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Mapping
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

from l2catalog.core.builder import ProjectDefinition, ProjectRecordBuilder
from l2catalog.core.discovery import load_snapshot
from l2catalog.core.errors import CatalogError
from l2catalog.core.registry import ProjectRegistry
from l2catalog.core.tables import ClassificationTables
from l2catalog.models.project import ProjectRecord

if TYPE_CHECKING:
    from l2catalog.config import CatalogConfig

logger = logging.getLogger(__name__)


class BuildFailure(BaseModel):
    """A project left out of the catalog, and why."""

    model_config = ConfigDict(frozen=True)

    project_id: str
    error_type: str
    message: str


class BuildReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    built: list[str] = []
    failed: list[BuildFailure] = []

    @property
    def ok(self) -> bool:
        return not self.failed


class CatalogBuilder:
    """Builds the catalog from project definitions and discovery snapshots.

    Parameters
    ----------
    definitions:
        Project id -> definition callable.  Registration follows this order.
    tables:
        Shared classification tables; frozen before any record is built.
    discovery_path:
        Directory holding ``{project}/discovered.json`` snapshots.
    abort_on_error:
        Whether a catalog error aborts the build or only skips the project.
    max_workers:
        Records are built in a thread pool when greater than 1.
    """

    def __init__(
        self,
        definitions: Mapping[str, ProjectDefinition],
        tables: ClassificationTables,
        discovery_path: Path,
        *,
        abort_on_error: bool = True,
        max_workers: int = 1,
    ) -> None:
        self._definitions = dict(definitions)
        self._tables = tables
        self._discovery_path = Path(discovery_path)
        self._abort_on_error = abort_on_error
        self._max_workers = max(1, max_workers)
        self._builder = ProjectRecordBuilder(tables)

    @classmethod
    def from_config(
        cls,
        config: CatalogConfig,
        definitions: Mapping[str, ProjectDefinition] | None = None,
    ) -> CatalogBuilder:
        """Wire the default tables and project definitions from config."""
        from l2catalog.catalog.common import build_default_tables
        from l2catalog.projects import PROJECT_DEFINITIONS

        return cls(
            PROJECT_DEFINITIONS if definitions is None else definitions,
            build_default_tables(config.tables_overlay_path),
            config.discovery_path,
            abort_on_error=config.abort_on_error,
            max_workers=config.max_workers,
        )

    @property
    def project_ids(self) -> list[str]:
        return list(self._definitions)

    def build_record(self, project_id: str) -> ProjectRecord:
        """Build a single project's record."""
        try:
            definition = self._definitions[project_id]
        except KeyError:
            raise KeyError(
                f"No definition for project {project_id!r}. "
                f"Known projects: {sorted(self._definitions)}"
            ) from None
        snapshot = load_snapshot(self._discovery_path, project_id)
        return self._builder.build(project_id, snapshot, definition)

    def _pending(self) -> Iterator[tuple[str, Callable[[], ProjectRecord]]]:
        """Yield (project_id, result getter) in definition order."""
        if self._max_workers == 1:
            for project_id in self._definitions:
                yield project_id, lambda pid=project_id: self.build_record(pid)
            return
        with ThreadPoolExecutor(max_workers=self._max_workers) as pool:
            futures = [(pid, pool.submit(self.build_record, pid)) for pid in self._definitions]
            for project_id, future in futures:
                yield project_id, future.result

    def build(self) -> tuple[ProjectRegistry, BuildReport]:
        """Build every project and return the frozen registry with a report.

        Raises
        ------
        CatalogError
            The first project failure, when ``abort_on_error`` is set.
        """
        self._tables.freeze()
        registry = ProjectRegistry()
        built: list[str] = []
        failed: list[BuildFailure] = []

        for project_id, result in self._pending():
            try:
                registry.register(result())
            except CatalogError as exc:
                if self._abort_on_error:
                    logger.error("Catalog build aborted at %s: %s", project_id, exc)
                    raise
                logger.warning("Skipping project %s: %s", project_id, exc)
                failed.append(
                    BuildFailure(
                        project_id=project_id,
                        error_type=type(exc).__name__,
                        message=str(exc),
                    )
                )
                continue
            built.append(project_id)

        registry.freeze()
        logger.info(
            "Catalog built: %d project(s), %d skipped", len(built), len(failed)
        )
        return registry, BuildReport(built=built, failed=failed)
