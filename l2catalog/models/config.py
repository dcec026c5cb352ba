"""Operational configuration of a project: escrows, activity API, liveness."""

from __future__ import annotations

from enum import Enum
from typing import Literal, Union

from pydantic import Field, PositiveInt, field_validator

from l2catalog.models.base import CatalogModel, EthereumAddress, NonEmptyStr
from l2catalog.models.contracts import Upgradeability

ALL_TOKENS = "*"

# Either the wildcard "*" (every token held by the escrow) or an explicit,
# non-empty list of token symbols.
TokenSelection = Union[Literal["*"], list[NonEmptyStr]]


class EscrowConfig(CatalogModel):
    """An L1 contract holding user funds, tracked for TVL."""

    address: EthereumAddress
    since_timestamp: int = Field(ge=0)
    tokens: TokenSelection
    name: str | None = None
    description: str | None = None
    upgradeability: Upgradeability | None = None
    upgradable_by: list[NonEmptyStr] = []
    upgrade_delay: str | None = None

    @field_validator("tokens")
    @classmethod
    def _tokens_not_empty(cls, value: TokenSelection) -> TokenSelection:
        if value != ALL_TOKENS and not value:
            raise ValueError("tokens must be '*' or a non-empty list of symbols")
        return value

    @property
    def all_tokens(self) -> bool:
        """Whether the escrow is tracked for every token it holds."""
        return self.tokens == ALL_TOKENS


class AssessCount(str, Enum):
    """Adjustment applied to the raw transaction count of a block."""

    IDENTITY = "identity"
    SUBTRACT_ONE = "subtract_one"  # OP stack blocks carry one system deposit tx

    def apply(self, count: int) -> int:
        if self is AssessCount.SUBTRACT_ONE:
            return max(count - 1, 0)
        return count


class TransactionApi(CatalogModel):
    """Polling endpoint used to count L2 activity."""

    type: NonEmptyStr = "rpc"
    url: NonEmptyStr
    calls_per_minute: PositiveInt
    start_block: int = Field(default=0, ge=0)
    assess_count: AssessCount = AssessCount.IDENTITY


class LivenessTracker(CatalogModel):
    """How to recognise one kind of L1 liveness event."""

    formula: Literal["transfer", "functionCall", "sharpSubmission"]
    since_timestamp: int = Field(ge=0)
    from_: EthereumAddress | None = Field(default=None, alias="from")
    to: EthereumAddress | None = None
    address: EthereumAddress | None = None
    selector: str | None = None
    function_signature: str | None = None


class LivenessConfig(CatalogModel):
    proof_submissions: list[LivenessTracker] = []
    batch_submissions: list[LivenessTracker] = []
    state_updates: list[LivenessTracker] = []


class ProjectConfig(CatalogModel):
    escrows: list[EscrowConfig]
    transaction_api: TransactionApi
    liveness: LivenessConfig | None = None
