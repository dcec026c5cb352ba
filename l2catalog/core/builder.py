"""Project record builder — composes discovery, tables, and stage criteria.

A project definition is a callable receiving a ``RecordContext`` and
returning the record's fields.  Instead of a computed ``stage`` it
declares ``stage_criteria`` (and optionally ``stage_context``); the
builder runs the stage classifier and validates the composed record
against the ``ProjectRecord`` schema.  Nothing here performs I/O.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from l2catalog.core.discovery import DiscoverySnapshot, ProjectDiscovery
from l2catalog.core.errors import SchemaViolationError
from l2catalog.core.stage_classifier import get_stage
from l2catalog.core.tables import ClassificationTables
from l2catalog.models.classification import ClassificationEntry
from l2catalog.models.project import ProjectRecord
from l2catalog.models.references import Reference, Risk, RiskSource
from l2catalog.models.risk_view import RISK_DIMENSIONS, RiskViewEntry
from l2catalog.models.stages import StageContext, StageCriteria
from l2catalog.models.technology import TechnologyChoice

logger = logging.getLogger(__name__)


class RecordContext:
    """What a project definition gets to work with.

    Parameters
    ----------
    discovery:
        Accessor over the project's discovery snapshot.
    tables:
        The frozen shared classification tables.
    """

    def __init__(self, discovery: ProjectDiscovery, tables: ClassificationTables) -> None:
        self.discovery = discovery
        self.tables = tables

    def entry(self, category: str, key: str, *args: Any) -> ClassificationEntry:
        return self.tables.lookup(category, key, *args)

    def risk(
        self,
        key: str,
        *args: Any,
        sources: Sequence[RiskSource | Mapping[str, Any]] | None = None,
    ) -> RiskViewEntry:
        """Resolve a ``RISK_VIEW`` entry and attach its contract sources."""
        return RiskViewEntry.from_entry(
            self.entry("RISK_VIEW", key, *args),
            sources=[RiskSource.model_validate(s) for s in sources or []],
        )

    def choice(
        self,
        category: str,
        key: str,
        *args: Any,
        references: Sequence[Reference | Mapping[str, Any]] | None = None,
        risks: Sequence[Risk | Mapping[str, Any]] | None = None,
    ) -> TechnologyChoice:
        """Resolve a technology section from a table entry."""
        return TechnologyChoice.from_entry(
            self.entry(category, key, *args),
            references=(
                None if references is None
                else [Reference.model_validate(r) for r in references]
            ),
            risks=None if risks is None else [Risk.model_validate(r) for r in risks],
        )

    def risks(self, category: str, key: str) -> list[Risk]:
        """The risk statements carried by a table entry."""
        return list(self.entry(category, key).risks)

    def thumbnail(self, key: str) -> str:
        return self.entry("NUGGETS", key).label


ProjectDefinition = Callable[[RecordContext], Mapping[str, Any]]


def _dimension_present(risk_view: Any, name: str) -> bool:
    if isinstance(risk_view, BaseModel):
        return getattr(risk_view, name, None) is not None
    return risk_view.get(name) is not None or risk_view.get(to_camel(name)) is not None


def _format_errors(exc: ValidationError) -> list[str]:
    return [
        f"{'.'.join(str(p) for p in err['loc']) or '<record>'}: {err['msg']}"
        for err in exc.errors()
    ]


class ProjectRecordBuilder:
    """Builds validated ``ProjectRecord`` objects.

    The builder holds no per-record state; one instance may build many
    records, from several threads at once, as long as the tables stay
    frozen.
    """

    def __init__(self, tables: ClassificationTables) -> None:
        self._tables = tables

    @property
    def tables(self) -> ClassificationTables:
        return self._tables

    def build(
        self,
        project_id: str,
        snapshot: DiscoverySnapshot,
        definition: ProjectDefinition,
    ) -> ProjectRecord:
        """Compose and validate one record.

        Raises
        ------
        SchemaViolationError
            If the composed record is incomplete or malformed, including a
            risk dimension left unset.
        MissingFieldError, UnknownRoleError, InvalidAddressError,
        InvalidTimestampError, UnknownKeyError
            Propagated unchanged from discovery and table lookups.
        """
        if snapshot.name != project_id:
            raise SchemaViolationError(
                project_id,
                [f"discovery snapshot belongs to {snapshot.name!r}"],
            )

        context = RecordContext(ProjectDiscovery(snapshot), self._tables)
        try:
            fields = dict(definition(context))
        except ValidationError as exc:
            raise SchemaViolationError(project_id, _format_errors(exc)) from exc

        declared_id = fields.pop("id", project_id)
        if declared_id != project_id:
            raise SchemaViolationError(
                project_id, [f"definition declares id {declared_id!r}"]
            )

        problems: list[str] = []

        risk_view = fields.get("risk_view", fields.get("riskView"))
        if risk_view is None:
            problems.append("riskView is not set")
        else:
            problems.extend(
                f"riskView.{name} is not set"
                for name in RISK_DIMENSIONS
                if not _dimension_present(risk_view, name)
            )

        if "stage" in fields:
            problems.append("stage is computed from stage_criteria and cannot be set")
        criteria = fields.pop("stage_criteria", None)
        stage_context = fields.pop("stage_context", None)
        if criteria is None:
            problems.append("stage_criteria is not declared")

        if problems:
            raise SchemaViolationError(project_id, problems)

        try:
            stage = get_stage(
                StageCriteria.model_validate(criteria),
                StageContext.model_validate(stage_context or {}),
            )
            record = ProjectRecord.model_validate({**fields, "id": project_id, "stage": stage})
        except ValidationError as exc:
            raise SchemaViolationError(project_id, _format_errors(exc)) from exc

        logger.debug("Built record %s (%s)", project_id, record.stage.stage)
        return record
