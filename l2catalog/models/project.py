"""The project record — one catalog entry."""

from __future__ import annotations

from typing import Literal

from pydantic import AwareDatetime, field_validator

from l2catalog.models.base import CatalogModel, NonEmptyStr
from l2catalog.models.config import ProjectConfig
from l2catalog.models.contracts import PermissionEntry, ProjectContracts
from l2catalog.models.display import ProjectDisplay
from l2catalog.models.risk_view import RiskView
from l2catalog.models.stages import StageResult
from l2catalog.models.technology import StateDerivation, Technology


class Milestone(CatalogModel):
    name: NonEmptyStr
    date: AwareDatetime
    link: NonEmptyStr
    description: str = ""


class KnowledgeNugget(CatalogModel):
    title: NonEmptyStr
    url: NonEmptyStr
    thumbnail: str | None = None


class ProjectRecord(CatalogModel):
    """A complete, validated catalog entry.

    Built once per catalog build and never mutated; a changed project is
    a new record from a new build.
    """

    id: NonEmptyStr
    type: Literal["layer2"] = "layer2"
    display: ProjectDisplay
    config: ProjectConfig
    risk_view: RiskView
    stage: StageResult
    technology: Technology
    permissions: list[PermissionEntry] = []
    contracts: ProjectContracts
    milestones: list[Milestone] = []
    knowledge_nuggets: list[KnowledgeNugget] = []
    state_derivation: StateDerivation | None = None

    @field_validator("milestones")
    @classmethod
    def _milestones_chronological(cls, value: list[Milestone]) -> list[Milestone]:
        dates = [m.date for m in value]
        if dates != sorted(dates):
            raise ValueError("milestones must be in chronological order")
        return value
