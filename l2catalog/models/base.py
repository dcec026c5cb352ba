"""Shared model base — frozen, camelCase on the wire, snake_case in Python."""

from __future__ import annotations

import re
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, StringConstraints
from pydantic.alias_generators import to_camel

ADDRESS_PATTERN = re.compile(r"^0x[a-fA-F0-9]{40}$")


def _check_not_blank(value: str) -> str:
    if not value.strip():
        raise ValueError("must not be blank")
    return value


# Kept verbatim; only empty or whitespace-only values are rejected.
NonEmptyStr = Annotated[str, StringConstraints(min_length=1), AfterValidator(_check_not_blank)]


def _check_address(value: str) -> str:
    if not ADDRESS_PATTERN.fullmatch(value):
        raise ValueError(f"{value!r} is not a 20-byte hex address")
    return value


EthereumAddress = Annotated[str, AfterValidator(_check_address)]


class CatalogModel(BaseModel):
    """Base for every catalog record model.

    Records are immutable once built.  Serialized field names follow the
    camelCase names consumed by the catalog front-end; both spellings are
    accepted on input.  Unknown fields are rejected so that a typo in a
    project definition surfaces as a schema violation.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def to_wire(self) -> dict:
        """Return the JSON-compatible, camelCase representation."""
        return self.model_dump(mode="json", by_alias=True)
