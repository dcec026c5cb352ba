"""Human-facing display metadata of a project."""

from __future__ import annotations

from l2catalog.models.base import CatalogModel, NonEmptyStr


class ProjectLinks(CatalogModel):
    """External links grouped by kind."""

    websites: list[NonEmptyStr] = []
    apps: list[NonEmptyStr] = []
    documentation: list[NonEmptyStr] = []
    explorers: list[NonEmptyStr] = []
    repositories: list[NonEmptyStr] = []
    social_media: list[NonEmptyStr] = []


class LivenessDisplay(CatalogModel):
    """Liveness warnings and explanation shown next to liveness charts."""

    warnings: dict[str, str] = {}
    explanation: str | None = None


class ProjectDisplay(CatalogModel):
    name: NonEmptyStr
    slug: NonEmptyStr
    description: NonEmptyStr
    purpose: NonEmptyStr
    category: NonEmptyStr  # "Optimistic Rollup", "ZK Rollup", "Validium", ...
    data_availability_mode: NonEmptyStr  # "TxData", "StateDiffs", "NotApplicable"
    provider: str | None = None  # "OP Stack", "Arbitrum", ...
    warning: str | None = None
    links: ProjectLinks = ProjectLinks()
    activity_data_source: str | None = None
    liveness: LivenessDisplay | None = None
    tags: list[NonEmptyStr] = []
