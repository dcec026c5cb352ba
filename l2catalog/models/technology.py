"""Technology sections of a project page."""

from __future__ import annotations

from pydantic import Field

from l2catalog.models.base import CatalogModel, NonEmptyStr
from l2catalog.models.classification import ClassificationEntry
from l2catalog.models.references import Reference, Risk


class TechnologyChoice(CatalogModel):
    """A described design choice with its risks and evidence."""

    name: NonEmptyStr
    description: NonEmptyStr
    risks: list[Risk] = []
    references: list[Reference] = []
    classification: str | None = None  # set when built from a shared table entry

    @classmethod
    def from_entry(
        cls,
        entry: ClassificationEntry,
        *,
        references: list[Reference] | None = None,
        risks: list[Risk] | None = None,
    ) -> TechnologyChoice:
        """Start from a table entry; explicit references/risks replace the entry's."""
        return cls(
            name=entry.label,
            description=entry.description,
            risks=entry.risks if risks is None else risks,
            references=entry.references if references is None else references,
            classification=entry.qualified_key,
        )


class Technology(CatalogModel):
    state_correctness: TechnologyChoice
    data_availability: TechnologyChoice
    operator: TechnologyChoice
    force_transactions: TechnologyChoice
    exit_mechanisms: list[TechnologyChoice] = Field(min_length=1)
    smart_contracts: TechnologyChoice


class StateDerivation(CatalogModel):
    """How the L2 state can be reconstructed from L1 data."""

    node_software: NonEmptyStr
    compression_scheme: NonEmptyStr
    genesis_state: NonEmptyStr
    data_format: NonEmptyStr
