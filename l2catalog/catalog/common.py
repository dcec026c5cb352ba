"""Default classification tables and shared constants for project definitions.

Every project definition draws its risk, exit, operator, and
data-availability wording from here so the same situation reads the
same way on every project page.
"""

from __future__ import annotations

from pathlib import Path

from l2catalog.core.formatting import format_seconds
from l2catalog.core.tables import ClassificationTables
from l2catalog.models.classification import ClassificationEntry, Sentiment
from l2catalog.models.references import Risk
from l2catalog.models.technology import StateDerivation

# Not readable from discovery: lives in the op-node rollup config.
OP_STACK_SEQUENCING_WINDOW_SECONDS = 3600 * 12

SEVEN_DAYS = 7 * 86_400
THIRTY_DAYS = 30 * 86_400


# ---------------------------------------------------------------------------
# RISK_VIEW templates
# ---------------------------------------------------------------------------

def exit_window(upgrade_delay: int, exit_delay: int) -> ClassificationEntry:
    """Time users have to exit before an unwanted upgrade lands."""
    window = upgrade_delay - exit_delay
    if upgrade_delay == 0:
        description = (
            "There is no window for users to exit in case of an unwanted regular "
            "upgrade since contracts are instantly upgradable."
        )
    elif window <= 0:
        description = (
            "There is no window for users to exit in case of an unwanted upgrade "
            f"since the upgrade delay ({format_seconds(upgrade_delay)}) is not longer "
            f"than the exit delay ({format_seconds(exit_delay)})."
        )
    else:
        description = (
            f"Users have {format_seconds(window)} to exit funds in case of an "
            f"unwanted upgrade. There is a {format_seconds(upgrade_delay)} delay "
            "before an upgrade is applied, and withdrawals can take up to "
            f"{format_seconds(exit_delay)} to be processed."
        )

    if window < SEVEN_DAYS:
        sentiment = Sentiment.BAD
    elif window < THIRTY_DAYS:
        sentiment = Sentiment.WARNING
    else:
        sentiment = Sentiment.GOOD

    return ClassificationEntry(
        category="RISK_VIEW",
        key="EXIT_WINDOW",
        label="None" if window <= 0 else format_seconds(window),
        description=description,
        sentiment=sentiment,
        defining_metric=window,
        parameters=(upgrade_delay, exit_delay),
    )


def sequencer_self_sequence(delay: int) -> ClassificationEntry:
    description = (
        "In the event of a sequencer failure, users can force transactions to be "
        "included in the project's chain by sending them to L1."
    )
    if delay > 0:
        description += f" There is a {format_seconds(delay)} delay on this operation."
    return ClassificationEntry(
        category="RISK_VIEW",
        key="SEQUENCER_SELF_SEQUENCE",
        label="Self sequence",
        description=description,
        sentiment=Sentiment.GOOD,
        defining_metric=delay,
        parameters=(delay,),
    )


def native_and_canonical(*native_tokens: str) -> ClassificationEntry:
    tokens = native_tokens or ("ETH",)
    verb = "is" if len(tokens) == 1 else "are"
    return ClassificationEntry(
        category="RISK_VIEW",
        key="NATIVE_AND_CANONICAL",
        label="Native & Canonical",
        description=(
            f"{', '.join(tokens)} {verb} native on the L2, the rest is minted by "
            "the project's canonical bridge."
        ),
        sentiment=Sentiment.GOOD,
        parameters=tokens,
    )


# ---------------------------------------------------------------------------
# EXITS templates
# ---------------------------------------------------------------------------

def regular_exit(kind: str, proof: str) -> ClassificationEntry:
    """A withdrawal through the normal operator flow.

    *kind* is ``"optimistic"`` or ``"zk"``; *proof* is ``"merkle proof"``
    or ``"no proof"``.
    """
    if kind not in ("optimistic", "zk"):
        raise ValueError(f"Unknown exit kind {kind!r}")
    if proof not in ("merkle proof", "no proof"):
        raise ValueError(f"Unknown exit proof {proof!r}")

    if kind == "optimistic":
        finalization = "Finalization happens after the challenge period has passed."
    else:
        finalization = "Finalization happens once a validity proof is verified on L1."
    description = (
        "The user initiates the withdrawal by submitting a regular transaction on "
        "this chain. When the block containing that transaction is finalized the "
        f"funds become available for withdrawal on L1. {finalization}"
    )
    if proof == "merkle proof":
        description += (
            " Finally the user submits an L1 transaction to claim the funds. This "
            "transaction requires a merkle proof."
        )
    return ClassificationEntry(
        category="EXITS",
        key="REGULAR",
        label="Regular exit",
        description=description,
        parameters=(kind, proof),
    )


def forced_exit(mode: str) -> ClassificationEntry:
    if mode not in ("all-withdrawals", "forced-withdrawals"):
        raise ValueError(f"Unknown forced exit mode {mode!r}")
    description = (
        "If the user experiences censorship from the operator with regular exit "
        "they can submit their withdrawal requests directly on L1. The system is "
        "then obliged to service this request."
    )
    if mode == "all-withdrawals":
        description += (
            " Once the force operation is submitted and if the request is "
            "serviced, the operation follows the flow of a regular exit."
        )
    return ClassificationEntry(
        category="EXITS",
        key="FORCED",
        label="Forced exit",
        description=description,
        parameters=(mode,),
    )


# ---------------------------------------------------------------------------
# Static entries
# ---------------------------------------------------------------------------

_STATIC_ENTRIES: list[ClassificationEntry] = [
    ClassificationEntry(
        category="RISK_VIEW",
        key="STATE_NONE",
        label="None",
        description=(
            "Currently the system permits invalid state roots. More details in "
            "project overview."
        ),
        sentiment=Sentiment.BAD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="STATE_FP_INT",
        label="Fraud proofs (INT)",
        description=(
            "Fraud proofs allow actors watching the chain to prove that the state "
            "is incorrect. Interactive proofs (INT) require multiple transactions "
            "over time to resolve."
        ),
        sentiment=Sentiment.GOOD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="STATE_ZKP_SN",
        label="ZK proofs (SN)",
        description="SNARKs are zero knowledge proofs that ensure state correctness.",
        sentiment=Sentiment.GOOD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="DATA_ON_CHAIN",
        label="On chain",
        description=(
            "All of the data needed for proof construction is published on chain."
        ),
        sentiment=Sentiment.GOOD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="DATA_EXTERNAL_DAC",
        label="External (DAC)",
        description=(
            "Proof construction relies fully on data that is NOT published on "
            "chain. There exists a Data Availability Committee (DAC) that makes "
            "the data available."
        ),
        sentiment=Sentiment.WARNING,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="SEQUENCER_NO_MECHANISM",
        label="No mechanism",
        description=(
            "There is no mechanism to have transactions be included if the "
            "sequencer is down or censoring."
        ),
        sentiment=Sentiment.BAD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="PROPOSER_CANNOT_WITHDRAW",
        label="Cannot withdraw",
        description=(
            "Only the whitelisted proposers can publish state roots on L1, so in "
            "the event of failure the withdrawals are frozen."
        ),
        sentiment=Sentiment.BAD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="PROPOSER_SELF_PROPOSE_ROOTS",
        label="Self propose",
        description=(
            "Anyone can become a Proposer after some time delay if the whitelisted "
            "proposers stop publishing state roots."
        ),
        sentiment=Sentiment.GOOD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="CANONICAL",
        label="Canonical",
        description="The tokens are minted by the project's canonical bridge.",
        sentiment=Sentiment.GOOD,
    ),
    ClassificationEntry(
        category="RISK_VIEW",
        key="VALIDATED_BY_ETHEREUM",
        label="Ethereum",
        description="Smart contracts on Ethereum validate all bridge transfers.",
        sentiment=Sentiment.GOOD,
    ),
    ClassificationEntry(
        category="DATA_AVAILABILITY",
        key="ON_CHAIN_CANONICAL",
        label="All data required for proofs is published on chain",
        description=(
            "All the data that is used to construct the system state is published "
            "on chain in the form of cheap calldata. This ensures that anyone can "
            "compute the state of the system by re-executing the transactions."
        ),
    ),
    ClassificationEntry(
        category="DATA_AVAILABILITY",
        key="DAC",
        label="Data is stored off chain by a committee",
        description=(
            "Transaction data is kept by a Data Availability Committee and only "
            "a commitment to it is posted on chain."
        ),
        risks=[
            Risk(
                category="Funds can be lost if",
                text="the Data Availability Committee withholds the data.",
                is_critical=True,
            )
        ],
    ),
    ClassificationEntry(
        category="OPERATOR",
        key="CENTRALIZED_OPERATOR",
        label="The system has a centralized operator",
        description=(
            "The operator is the only entity that can propose blocks. A live and "
            "trustworthy operator is vital to the health of the system."
        ),
        risks=[
            Risk(
                category="MEV can be extracted if",
                text=(
                    "the operator exploits their centralized position and "
                    "frontruns user transactions."
                ),
            )
        ],
    ),
    ClassificationEntry(
        category="FORCE_TRANSACTIONS",
        key="CANONICAL_ORDERING",
        label="Users can force any transaction",
        description=(
            "Because the state of the system is based on transactions submitted "
            "on the underlying host chain and anyone can submit their transactions "
            "there it allows the users to circumvent censorship by interacting "
            "with the smart contract on the host chain directly."
        ),
    ),
    ClassificationEntry(
        category="FORCE_TRANSACTIONS",
        key="NO_MECHANISM",
        label="No forced transactions",
        description=(
            "There is no mechanism that allows users to force their transactions "
            "into the chain."
        ),
        risks=[
            Risk(
                category="Users can be censored if",
                text="the operator refuses to include their transactions.",
            )
        ],
    ),
    ClassificationEntry(
        category="EXITS",
        key="RISK_CENTRALIZED_VALIDATOR",
        label="Centralized validator",
        description="Exits depend on a single permissioned validator.",
        risks=[
            Risk(
                category="Funds can be frozen if",
                text=(
                    "the centralized validator goes down. Users cannot produce "
                    "blocks themselves and exiting the system requires new block "
                    "production."
                ),
                is_critical=True,
            )
        ],
    ),
    ClassificationEntry(
        category="CONTRACTS",
        key="UPGRADE_NO_DELAY_RISK",
        label="Upgrade without delay",
        description="Contracts can be upgraded instantly.",
        risks=[
            Risk(
                category="Funds can be stolen if",
                text=(
                    "a contract receives a malicious code upgrade. There is no "
                    "delay on code upgrades."
                ),
            )
        ],
    ),
    ClassificationEntry(
        category="LIVENESS",
        key="OPTIMISTIC_ROLLUP_STATE_UPDATES_WARNING",
        label="State updates",
        description=(
            "Please note, the state is not finalized until the finality period "
            "passes."
        ),
    ),
    ClassificationEntry(
        category="NUGGETS",
        key="L2BEAT_03",
        label="/images/thumbnails/l2beat-03.png",
    ),
    ClassificationEntry(
        category="NUGGETS",
        key="OPTIMISM_04",
        label="/images/thumbnails/optimism-04.png",
    ),
    ClassificationEntry(
        category="NUGGETS",
        key="MODULAR_ROLLUP",
        label="/images/thumbnails/modular-rollup.png",
    ),
]


def build_default_tables(
    overlay_path: Path | None = None, *, freeze: bool = True
) -> ClassificationTables:
    """Populate the shared tables, optionally overlaid from a JSON file."""
    tables = ClassificationTables.from_entries(_STATIC_ENTRIES)
    tables.add_template("RISK_VIEW", "EXIT_WINDOW", exit_window)
    tables.add_template("RISK_VIEW", "SEQUENCER_SELF_SEQUENCE", sequencer_self_sequence)
    tables.add_template("RISK_VIEW", "NATIVE_AND_CANONICAL", native_and_canonical)
    tables.add_template("EXITS", "REGULAR", regular_exit)
    tables.add_template("EXITS", "FORCED", forced_exit)
    if overlay_path is not None:
        tables.load_overlay(overlay_path)
    if freeze:
        tables.freeze()
    return tables


def op_stack_derivation(chain_name: str) -> StateDerivation:
    """State derivation description shared by OP stack chains."""
    return StateDerivation(
        node_software=(
            f"The rollup node is composed of two software components: op-node, "
            f"implementing consensus related logic, and op-geth, implementing "
            f"execution logic. {chain_name} runs the standard OP stack node "
            "configured for its own rollup parameters."
        ),
        compression_scheme=(
            "Data batches are compressed using the zlib algorithm with best "
            "compression level."
        ),
        genesis_state=(
            f"The genesis file of {chain_name} is published in the superchain "
            "registry and can be used to initialise a node from scratch."
        ),
        data_format=(
            "The format specification of Sequencer's data batches can be found "
            "in the OP stack derivation specification."
        ),
    )
