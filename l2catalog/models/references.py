"""Evidence references attached to risk and technology sections."""

from __future__ import annotations

from pydantic import Field

from l2catalog.models.base import CatalogModel, NonEmptyStr


class Reference(CatalogModel):
    """A labelled link to the evidence behind a claim."""

    text: NonEmptyStr
    href: NonEmptyStr


class RiskSource(CatalogModel):
    """Contract-level source backing a risk view entry."""

    contract: NonEmptyStr
    references: list[NonEmptyStr] = Field(min_length=1)


class Risk(CatalogModel):
    """A single risk statement, e.g. "Funds can be stolen if" + text."""

    category: NonEmptyStr
    text: NonEmptyStr
    is_critical: bool = False
