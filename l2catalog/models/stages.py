"""Stage classification models — three-tier criteria and the computed result."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import field_validator

from l2catalog.models.base import CatalogModel, NonEmptyStr


class CriterionState(str, Enum):
    """Three-valued outcome of one stage requirement."""

    SATISFIED = "satisfied"
    VIOLATED = "violated"
    NOT_APPLICABLE = "not_applicable"

    @classmethod
    def coerce(cls, value: Any) -> Any:
        """Map ``True``/``False``/``None`` onto the enum; pass others through."""
        if value is True:
            return cls.SATISFIED
        if value is False:
            return cls.VIOLATED
        if value is None:
            return cls.NOT_APPLICABLE
        return value


class _CriteriaTier(CatalogModel):
    """Every field of a tier is required: a missing criterion is a schema error."""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_tristate(cls, value: Any) -> Any:
        return CriterionState.coerce(value)

    def states(self) -> dict[str, CriterionState]:
        return {name: getattr(self, name) for name in type(self).model_fields}


class Stage0Criteria(_CriteriaTier):
    calls_itself_rollup: CriterionState
    state_roots_posted_to_l1: CriterionState
    data_availability_on_l1: CriterionState
    rollup_node_source_available: CriterionState


class Stage1Criteria(_CriteriaTier):
    state_verification_on_l1: CriterionState
    fraud_proof_system_at_least_5_outsiders: CriterionState
    users_have_7_days_to_exit: CriterionState
    users_can_exit_without_cooperation: CriterionState
    security_council_properly_set_up: CriterionState


class Stage2Criteria(_CriteriaTier):
    proof_system_overridden_only_in_case_of_a_bug: CriterionState
    fraud_proof_system_is_permissionless: CriterionState
    delay_with_30d_exit_window: CriterionState


class StageCriteria(CatalogModel):
    stage0: Stage0Criteria
    stage1: Stage1Criteria
    stage2: Stage2Criteria

    def tiers(self) -> list[_CriteriaTier]:
        return [self.stage0, self.stage1, self.stage2]


class StageContext(CatalogModel):
    """Links shown next to the stage requirements."""

    rollup_node_link: str | None = None


class RequirementOutcome(CatalogModel):
    key: NonEmptyStr
    state: CriterionState
    description: NonEmptyStr


class StageSummary(CatalogModel):
    stage: NonEmptyStr
    requirements: list[RequirementOutcome]


class MissingRequirements(CatalogModel):
    next_stage: NonEmptyStr
    requirements: list[NonEmptyStr]


class StageResult(CatalogModel):
    """Computed stage of a project.

    ``tier`` is the highest fully satisfied tier, ``None`` when not even
    Stage 0 is met.  ``under_review`` is set when evaluation stopped on a
    requirement that cannot be left undecided.
    """

    stage: NonEmptyStr
    tier: int | None
    under_review: bool = False
    missing: MissingRequirements | None = None
    summary: list[StageSummary] = []
    context: StageContext = StageContext()
