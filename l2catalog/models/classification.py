"""Classification table entry — canonical wording shared across records."""

from __future__ import annotations

from enum import Enum

from l2catalog.models.base import CatalogModel, NonEmptyStr
from l2catalog.models.references import Reference, Risk


class Sentiment(str, Enum):
    """How a value reads to users on the risk rosette."""

    GOOD = "good"
    WARNING = "warning"
    BAD = "bad"
    NEUTRAL = "neutral"


class ClassificationEntry(CatalogModel):
    """One canonical entry of a shared classification table.

    ``parameters`` records the arguments a parametrised entry was
    resolved with (for example ``(upgrade_delay, exit_delay)`` for the
    exit window), so consumers can see the underlying values and not
    only the rendered prose.
    """

    category: NonEmptyStr
    key: NonEmptyStr
    label: NonEmptyStr
    description: str = ""
    sentiment: Sentiment | None = None
    defining_metric: int | None = None
    parameters: tuple[int | str, ...] = ()
    risks: list[Risk] = []
    references: list[Reference] = []

    @property
    def qualified_key(self) -> str:
        """``CATEGORY.KEY`` form used in logs and error messages."""
        return f"{self.category}.{self.key}"
