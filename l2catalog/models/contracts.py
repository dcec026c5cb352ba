"""Contract, permission, and upgradeability models."""

from __future__ import annotations

from enum import Enum

from l2catalog.models.base import CatalogModel, EthereumAddress, NonEmptyStr
from l2catalog.models.references import Reference, Risk


class Upgradeability(CatalogModel):
    """How a discovered contract can be upgraded."""

    type: NonEmptyStr  # "immutable", "EIP1967 proxy", "gnosis safe", ...
    admin: EthereumAddress | None = None
    implementation: EthereumAddress | None = None


class ContractDetails(CatalogModel):
    """A contract listed on the project page."""

    name: NonEmptyStr
    address: EthereumAddress
    description: str | None = None
    upgradeability: Upgradeability | None = None
    upgradable_by: list[NonEmptyStr] = []
    upgrade_delay: str | None = None
    references: list[Reference] = []


class AccountType(str, Enum):
    EOA = "EOA"
    MULTISIG = "MultiSig"
    CONTRACT = "Contract"


class PermissionAccount(CatalogModel):
    address: EthereumAddress
    type: AccountType


class PermissionEntry(CatalogModel):
    """An actor and the capabilities it holds over the system."""

    name: NonEmptyStr
    accounts: list[PermissionAccount]
    description: NonEmptyStr
    references: list[Reference] = []


class ProjectContracts(CatalogModel):
    addresses: list[ContractDetails]
    risks: list[Risk] = []
