"""Risk view — the seven risk dimensions shown on the project rosette."""

from __future__ import annotations

from l2catalog.models.base import CatalogModel, NonEmptyStr
from l2catalog.models.classification import ClassificationEntry, Sentiment
from l2catalog.models.references import RiskSource

# Every record must resolve all of these; none may be left out.
RISK_DIMENSIONS: tuple[str, ...] = (
    "state_validation",
    "data_availability",
    "exit_window",
    "sequencer_failure",
    "proposer_failure",
    "destination_token",
    "validated_by",
)


class RiskViewEntry(CatalogModel):
    """A classification entry resolved for one risk dimension."""

    value: NonEmptyStr
    description: str = ""
    sentiment: Sentiment | None = None
    defining_metric: int | None = None
    parameters: tuple[int | str, ...] = ()
    classification: NonEmptyStr  # "RISK_VIEW.EXIT_WINDOW"
    sources: list[RiskSource] = []

    @classmethod
    def from_entry(
        cls, entry: ClassificationEntry, sources: list[RiskSource] | None = None
    ) -> RiskViewEntry:
        return cls(
            value=entry.label,
            description=entry.description,
            sentiment=entry.sentiment,
            defining_metric=entry.defining_metric,
            parameters=entry.parameters,
            classification=entry.qualified_key,
            sources=sources or [],
        )


class RiskView(CatalogModel):
    state_validation: RiskViewEntry
    data_availability: RiskViewEntry
    exit_window: RiskViewEntry
    sequencer_failure: RiskViewEntry
    proposer_failure: RiskViewEntry
    destination_token: RiskViewEntry
    validated_by: RiskViewEntry

    def items(self) -> list[tuple[str, RiskViewEntry]]:
        """Dimensions in display order."""
        return [(name, getattr(self, name)) for name in RISK_DIMENSIONS]
