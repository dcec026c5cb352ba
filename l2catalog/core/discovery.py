"""Read-only accessor over a project's discovery snapshot.

A discovery snapshot is the output of an earlier, external collection
step: the project's L1 contracts with their addresses, upgradeability,
and read-only field values.  This module never fetches anything; it only
answers questions about the snapshot, and it fails loudly instead of
substituting defaults when the snapshot lacks an answer.

Snapshot layout on disk: ``{discovery_path}/{project}/discovered.json``.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from l2catalog.core.errors import (
    InvalidAddressError,
    InvalidTimestampError,
    MissingFieldError,
    SchemaViolationError,
    SnapshotNotFoundError,
    UnknownRoleError,
)
from l2catalog.core.options import merge_options
from l2catalog.models.base import ADDRESS_PATTERN, CatalogModel, EthereumAddress, NonEmptyStr
from l2catalog.models.config import EscrowConfig, TokenSelection
from l2catalog.models.contracts import (
    AccountType,
    ContractDetails,
    PermissionAccount,
    PermissionEntry,
    Upgradeability,
)

logger = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "discovered.json"

GNOSIS_SAFE = "gnosis safe"


# ---------------------------------------------------------------------------
# Snapshot models
# ---------------------------------------------------------------------------

class DiscoveredContract(CatalogModel):
    name: NonEmptyStr
    address: EthereumAddress
    upgradeability: Upgradeability = Upgradeability(type="immutable")
    values: dict[str, Any] = {}


class DiscoverySnapshot(CatalogModel):
    """Frozen result of one discovery run for one project."""

    name: NonEmptyStr
    chain: str = "ethereum"
    block_number: int = 0
    contracts: list[DiscoveredContract]
    eoas: list[EthereumAddress] = []


def load_snapshot(discovery_path: Path, project: str) -> DiscoverySnapshot:
    """Load ``{discovery_path}/{project}/discovered.json``."""
    path = Path(discovery_path) / project / SNAPSHOT_FILENAME
    if not path.exists():
        raise SnapshotNotFoundError(f"No discovery snapshot for {project!r} at {path}")
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaViolationError(project, [f"{path}: {exc}"]) from exc
    try:
        snapshot = DiscoverySnapshot.model_validate(raw)
    except ValidationError as exc:
        raise SchemaViolationError(
            project, [f"{path}: {err['msg']} at {err['loc']}" for err in exc.errors()]
        ) from exc
    logger.debug(
        "Loaded discovery snapshot for %s (%d contracts, block %d)",
        project,
        len(snapshot.contracts),
        snapshot.block_number,
    )
    return snapshot


# ---------------------------------------------------------------------------
# OP stack vocabulary
# ---------------------------------------------------------------------------

# role key -> (contract holding it, description of the role)
OP_STACK_ROLES: dict[str, tuple[str, str]] = {
    "batcherHash": (
        "SystemConfig",
        "Central actor allowed to submit transaction batches to L1.",
    ),
    "PROPOSER": (
        "L2OutputOracle",
        "Central actor allowed to post new L2 state roots to L1.",
    ),
    "GUARDIAN": (
        "OptimismPortal",
        "Actor allowed to pause withdrawals.",
    ),
    "CHALLENGER": (
        "L2OutputOracle",
        "Actor allowed to delete state roots proposed by a Proposer.",
    ),
}

OP_STACK_CONTRACTS: dict[str, str] = {
    "L2OutputOracle": (
        "The L2OutputOracle contract contains a list of proposed state roots "
        "which Proposers assert to be a result of block execution. Currently only "
        "the PROPOSER address can submit new state roots."
    ),
    "OptimismPortal": (
        "The OptimismPortal contract is the main entry point to deposit funds from "
        "L1 to L2. It also allows to prove and finalize withdrawals."
    ),
    "SystemConfig": (
        "It contains configuration parameters such as the Sequencer address, the "
        "L2 gas limit and the unsafe block signer address."
    ),
    "L1CrossDomainMessenger": (
        "The L1 Cross Domain Messenger (L1xDM) contract sends messages from L1 to "
        "L2, and relays messages from L2 onto L1. In the event that a message sent "
        "from L1 to L2 is rejected for exceeding the L2 epoch gas limit, it can be "
        "resubmitted via this contract's replay function."
    ),
    "L1StandardBridge": (
        "The L1StandardBridge contract is the main entry point to deposit ERC20 "
        "tokens from L1 to L2. This contract can store any token."
    ),
}


def _as_address(value: Any) -> str:
    """Accept a 20-byte address or a left-padded 32-byte word."""
    text = str(value)
    if len(text) == 66 and text.startswith("0x"):
        text = "0x" + text[-40:]
    if not ADDRESS_PATTERN.fullmatch(text):
        raise InvalidAddressError(f"{value!r} is not an address")
    return text


# ---------------------------------------------------------------------------
# Accessor
# ---------------------------------------------------------------------------

class ProjectDiscovery:
    """Answers questions about one project's discovery snapshot.

    Parameters
    ----------
    snapshot:
        The project's frozen discovery snapshot.
    """

    def __init__(self, snapshot: DiscoverySnapshot) -> None:
        self._snapshot = snapshot
        self._by_name = {c.name: c for c in snapshot.contracts}
        self._by_address = {c.address.lower(): c for c in snapshot.contracts}

    @property
    def project(self) -> str:
        return self._snapshot.name

    @property
    def snapshot(self) -> DiscoverySnapshot:
        return self._snapshot

    # -- Raw lookups --------------------------------------------------------

    def get_contract(self, name: str) -> DiscoveredContract:
        contract = self._by_name.get(name)
        if contract is None:
            raise MissingFieldError(self.project, name)
        return contract

    def find_contract_by_address(self, address: str) -> DiscoveredContract | None:
        return self._by_address.get(address.lower())

    def get_contract_value(self, contract_name: str, field_name: str) -> Any:
        """Return a discovered field value.

        Raises
        ------
        MissingFieldError
            If the contract or the field is absent from the snapshot.
        """
        contract = self.get_contract(contract_name)
        if field_name not in contract.values:
            raise MissingFieldError(self.project, contract_name, field_name)
        return contract.values[field_name]

    def get_address_type(self, address: str) -> AccountType:
        contract = self.find_contract_by_address(address)
        if contract is None:
            return AccountType.EOA
        if contract.upgradeability.type == GNOSIS_SAFE:
            return AccountType.MULTISIG
        return AccountType.CONTRACT

    def _account(self, address: str) -> PermissionAccount:
        return PermissionAccount(address=address, type=self.get_address_type(address))

    # -- Escrows ------------------------------------------------------------

    def get_escrow_details(
        self,
        *,
        address: str,
        since_timestamp: int,
        tokens: TokenSelection,
        name: str | None = None,
        description: str | None = None,
        upgradable_by: Sequence[str] | None = None,
        upgrade_delay: str | None = None,
    ) -> EscrowConfig:
        """Validate caller-supplied escrow parameters into an ``EscrowConfig``.

        When the address is a discovered contract, its name and
        upgradeability are attached; an explicit *name* wins.

        Raises
        ------
        InvalidAddressError
            If *address* is not a 20-byte hex address.
        InvalidTimestampError
            If *since_timestamp* is not a non-negative integer.
        SchemaViolationError
            If *tokens* is neither ``"*"`` nor a non-empty symbol list.
        """
        if not isinstance(address, str) or not ADDRESS_PATTERN.fullmatch(address):
            raise InvalidAddressError(f"Escrow address {address!r} is not an address")
        if (
            isinstance(since_timestamp, bool)
            or not isinstance(since_timestamp, int)
            or since_timestamp < 0
        ):
            raise InvalidTimestampError(
                f"Escrow {address} has invalid sinceTimestamp {since_timestamp!r}"
            )

        discovered = self.find_contract_by_address(address)
        params = merge_options(
            {
                "name": discovered.name if discovered else None,
                "upgradeability": discovered.upgradeability if discovered else None,
            },
            {
                "address": address,
                "since_timestamp": since_timestamp,
                "tokens": tokens,
                "description": description,
                "upgradable_by": list(upgradable_by or []),
                "upgrade_delay": upgrade_delay,
            },
            {"name": name} if name is not None else None,
        )
        try:
            return EscrowConfig.model_validate(params)
        except ValidationError as exc:
            raise SchemaViolationError(
                self.project,
                [f"escrow {address}: {err['msg']} at {err['loc']}" for err in exc.errors()],
            ) from exc

    # -- Permissions --------------------------------------------------------

    def get_multisig_permission(self, name: str, description: str) -> list[PermissionEntry]:
        """The multisig itself plus an entry listing its participants."""
        contract = self.get_contract(name)
        threshold = self.get_contract_value(name, "getThreshold")
        owners = [_as_address(o) for o in self.get_contract_value(name, "getOwners")]
        return [
            PermissionEntry(
                name=name,
                accounts=[PermissionAccount(address=contract.address, type=AccountType.MULTISIG)],
                description=(
                    f"{description} This is a Gnosis Safe with {threshold} / "
                    f"{len(owners)} threshold."
                ),
            ),
            PermissionEntry(
                name=f"{name} participants",
                accounts=[self._account(owner) for owner in owners],
                description=f"Those are the participants of the {name}.",
            ),
        ]

    def get_op_stack_permissions(
        self,
        role_map: Mapping[str, str],
        descriptions: Mapping[str, str] | None = None,
    ) -> list[PermissionEntry]:
        """Resolve OP stack role keys to permission entries.

        *role_map* maps a role key (``"PROPOSER"``, ``"batcherHash"``, ...)
        to the display name of the permission.  *descriptions* optionally
        replaces the default description per role key.

        Raises
        ------
        UnknownRoleError
            If a role key is not an OP stack role or has no discovered holder.
        """
        entries: list[PermissionEntry] = []
        for role, display_name in role_map.items():
            if role not in OP_STACK_ROLES:
                raise UnknownRoleError(
                    f"Unknown OP stack role {role!r}. Known roles: {sorted(OP_STACK_ROLES)}"
                )
            contract_name, default_description = OP_STACK_ROLES[role]
            try:
                holder = _as_address(self.get_contract_value(contract_name, role))
            except MissingFieldError as exc:
                raise UnknownRoleError(
                    f"Role {role!r} has no discovered holder in {self.project!r}"
                ) from exc
            entries.append(
                PermissionEntry(
                    name=display_name,
                    accounts=[self._account(holder)],
                    description=(descriptions or {}).get(role, default_description),
                )
            )
        return entries

    # -- Contracts ----------------------------------------------------------

    def get_contract_details(
        self, name: str, metadata: Mapping[str, Any] | str | None = None
    ) -> ContractDetails:
        """Describe a discovered contract; *metadata* fields override discovery.

        A plain string *metadata* is taken as the description.
        """
        if isinstance(metadata, str):
            metadata = {"description": metadata}
        contract = self.get_contract(name)
        params = merge_options(
            {
                "name": contract.name,
                "address": contract.address,
                "upgradeability": contract.upgradeability,
            },
            metadata,
        )
        try:
            return ContractDetails.model_validate(params)
        except ValidationError as exc:
            raise SchemaViolationError(
                self.project,
                [f"contract {name}: {err['msg']} at {err['loc']}" for err in exc.errors()],
            ) from exc

    def get_op_stack_contract_details(
        self,
        metadata: Mapping[str, Any] | None = None,
        overrides: Mapping[str, Mapping[str, Any]] | None = None,
    ) -> list[ContractDetails]:
        """Details for the standard OP stack L1 contracts.

        *metadata* applies to every contract (typically upgrade info);
        *overrides* is keyed by contract name and wins over both.
        """
        return [
            self.get_contract_details(
                name,
                merge_options(
                    {"description": description},
                    metadata,
                    (overrides or {}).get(name),
                ),
            )
            for name, description in OP_STACK_CONTRACTS.items()
        ]
