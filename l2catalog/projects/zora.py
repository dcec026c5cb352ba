"""Zora — OP stack rollup focused on bringing media onchain."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from l2catalog.catalog.common import OP_STACK_SEQUENCING_WINDOW_SECONDS, op_stack_derivation
from l2catalog.core.builder import RecordContext
from l2catalog.core.formatting import format_seconds
from l2catalog.core.options import merge_options
from l2catalog.models.config import ALL_TOKENS, AssessCount

PROJECT_ID = "zora"

UPGRADES_PROXY = {
    "upgradable_by": ["ProxyAdmin"],
    "upgrade_delay": "No delay",
}

UPGRADE_DELAY = 0

PORTAL_DEPOSIT_REF = (
    "https://etherscan.io/address/0x43260ee547c3965bb2a0174763bb8FEcC650BA4A#code#F1#L434"
)
ORACLE_SRC = "https://etherscan.io/address/0x9eedde6b4D3263b97209Ba860eDF3Fc6a8fB6a44#code#F1"
PORTAL_SRC = "https://etherscan.io/address/0x43260ee547c3965bb2a0174763bb8fecc650ba4a#code#F1"


def define(ctx: RecordContext) -> Mapping[str, Any]:
    discovery = ctx.discovery
    finalization_period = discovery.get_contract_value(
        "L2OutputOracle", "FINALIZATION_PERIOD_SECONDS"
    )

    return {
        "display": {
            "name": "Zora",
            "slug": "zora",
            "warning": (
                "Fraud proof system is currently under development. Users need to "
                "trust the block proposer to submit correct L1 state roots."
            ),
            "description": (
                "Zora is a fast, cost-efficient, and scalable Layer 2 built to help "
                "bring media onchain, powered by the OP Stack."
            ),
            "purpose": "Universal, NFTs",
            "provider": "OP Stack",
            "category": "Optimistic Rollup",
            "data_availability_mode": "TxData",
            "links": {
                "websites": ["https://zora.energy/", "https://zora.co/"],
                "documentation": ["https://docs.zora.co/docs/zora-network/intro"],
                "explorers": [
                    "https://explorer.zora.energy/",
                    "https://zora.superscan.network",
                ],
                "repositories": ["https://github.com/ourzora/optimism"],
                "social_media": [
                    "https://twitter.com/ourZORA",
                    "https://instagram.com/our.zora",
                    "https://zora.community",
                ],
            },
            "activity_data_source": "Blockchain RPC",
            "liveness": {
                "warnings": {
                    "stateUpdates": ctx.entry(
                        "LIVENESS", "OPTIMISTIC_ROLLUP_STATE_UPDATES_WARNING"
                    ).description,
                },
                "explanation": (
                    "Zora is an Optimistic rollup that posts transaction data to the "
                    "L1. For a transaction to be considered final, it has to be posted "
                    "within a tx batch on L1 that links to a previous finalized batch. "
                    "If the previous batch is missing, transaction finalization can be "
                    "delayed up to "
                    f"{format_seconds(OP_STACK_SEQUENCING_WINDOW_SECONDS)} or until it "
                    "gets published. The state root gets finalized "
                    f"{format_seconds(finalization_period)} after it has been posted."
                ),
            },
            "tags": ["op-stack", "nft"],
        },
        "config": {
            "escrows": [
                discovery.get_escrow_details(
                    address="0x1a0ad011913A150f69f6A19DF447A0CfD9551054",
                    since_timestamp=1686607200,
                    tokens=["ETH"],
                    description="Main entry point for users depositing ETH.",
                    **UPGRADES_PROXY,
                ),
                discovery.get_escrow_details(
                    address="0x3e2Ea9B92B7E48A52296fD261dc26fd995284631",
                    since_timestamp=1686607200,
                    tokens=ALL_TOKENS,
                    description=(
                        "Main entry point for users depositing ERC20 token that do "
                        "not require custom gateway."
                    ),
                    **UPGRADES_PROXY,
                ),
            ],
            "transaction_api": {
                "type": "rpc",
                "start_block": 1,
                "url": "https://rpc.zora.co",
                "calls_per_minute": 1500,
                "assess_count": AssessCount.SUBTRACT_ONE,
            },
            "liveness": {
                "proof_submissions": [],
                "batch_submissions": [
                    {
                        "formula": "transfer",
                        "from": "0x625726c858dBF78c0125436C943Bf4b4bE9d9033",
                        "to": "0x6F54Ca6F6EdE96662024Ffd61BFd18f3f4e34DFf",
                        "since_timestamp": 1686695915,
                    }
                ],
                "state_updates": [
                    {
                        "formula": "functionCall",
                        "address": "0x9E6204F750cD866b299594e2aC9eA824E2e5f95c",
                        "selector": "0x9aaab648",
                        "function_signature": (
                            "function proposeL2Output(bytes32 _outputRoot, uint256 "
                            "_l2BlockNumber, bytes32 _l1Blockhash, uint256 _l1BlockNumber)"
                        ),
                        "since_timestamp": 1686694007,
                    }
                ],
            },
        },
        "risk_view": {
            "state_validation": ctx.risk("STATE_NONE"),
            "data_availability": ctx.risk(
                "DATA_ON_CHAIN",
                sources=[{"contract": "OptimismPortal", "references": [PORTAL_DEPOSIT_REF]}],
            ),
            "exit_window": ctx.risk(
                "EXIT_WINDOW",
                UPGRADE_DELAY,
                finalization_period,
                sources=[
                    {
                        "contract": "OptimismPortal",
                        "references": [
                            "https://etherscan.io/address/0x1a0ad011913A150f69f6A19DF447A0CfD9551054"
                        ],
                    }
                ],
            ),
            # The window lives in the node config, which discovery cannot read.
            "sequencer_failure": ctx.risk(
                "SEQUENCER_SELF_SEQUENCE",
                OP_STACK_SEQUENCING_WINDOW_SECONDS,
                sources=[{"contract": "OptimismPortal", "references": [PORTAL_DEPOSIT_REF]}],
            ),
            "proposer_failure": ctx.risk(
                "PROPOSER_CANNOT_WITHDRAW",
                sources=[{"contract": "L2OutputOracle", "references": [f"{ORACLE_SRC}#L186"]}],
            ),
            "destination_token": ctx.risk("NATIVE_AND_CANONICAL", "ETH"),
            "validated_by": ctx.risk("VALIDATED_BY_ETHEREUM"),
        },
        "stage_criteria": {
            "stage0": {
                "calls_itself_rollup": True,
                "state_roots_posted_to_l1": True,
                "data_availability_on_l1": True,
                "rollup_node_source_available": True,
            },
            "stage1": {
                "state_verification_on_l1": False,
                "fraud_proof_system_at_least_5_outsiders": None,
                "users_have_7_days_to_exit": False,
                "users_can_exit_without_cooperation": False,
                "security_council_properly_set_up": None,
            },
            "stage2": {
                "proof_system_overridden_only_in_case_of_a_bug": None,
                "fraud_proof_system_is_permissionless": None,
                "delay_with_30d_exit_window": False,
            },
        },
        "stage_context": {
            "rollup_node_link": (
                "https://github.com/ethereum-optimism/optimism/tree/develop/op-node"
            ),
        },
        "state_derivation": op_stack_derivation("Zora"),
        "technology": _technology(ctx),
        "permissions": [
            *discovery.get_multisig_permission(
                "ZoraMultisig",
                "This address is the owner of the following contracts: ProxyAdmin, "
                "SystemConfig. It is also designated as a Guardian of the "
                "OptimismPortal, meaning it can halt withdrawals. It can upgrade the "
                "bridge implementation potentially gaining access to all funds, and "
                "change the sequencer, state root proposer or any other system "
                "component (unlimited upgrade power).",
            ),
            *discovery.get_multisig_permission(
                "ChallengerMultisig",
                "This address is the permissioned challenger of the system. It can "
                "delete non finalized roots without going through the fault proof "
                "process.",
            ),
            *discovery.get_op_stack_permissions(
                {
                    "batcherHash": "Sequencer",
                    "PROPOSER": "Proposer",
                    "GUARDIAN": "Guardian",
                    "CHALLENGER": "Challenger",
                }
            ),
        ],
        "contracts": {
            "addresses": [
                *discovery.get_op_stack_contract_details(UPGRADES_PROXY),
                discovery.get_contract_details(
                    "L1ERC721Bridge",
                    merge_options(
                        {
                            "description": (
                                "The L1ERC721Bridge contract is the main entry point "
                                "to deposit ERC721 tokens from L1 to L2."
                            ),
                        },
                        UPGRADES_PROXY,
                    ),
                ),
            ],
            "risks": ctx.risks("CONTRACTS", "UPGRADE_NO_DELAY_RISK"),
        },
        "milestones": [
            {
                "name": "Zora Network Launch",
                "link": "https://twitter.com/ourZORA/status/1671602234994622464",
                "date": "2023-06-21T00:00:00Z",
                "description": "Zora Network is live on mainnet.",
            }
        ],
        "knowledge_nuggets": [
            {
                "title": "How Optimism compresses data",
                "url": "https://twitter.com/bkiepuszewski/status/1508740414492323840?s=20&t=vMgR4jW1ssap-A-MBsO4Jw",
                "thumbnail": ctx.thumbnail("L2BEAT_03"),
            },
            {
                "title": "Bedrock Explainer",
                "url": "https://community.optimism.io/docs/developers/bedrock/explainer/",
                "thumbnail": ctx.thumbnail("OPTIMISM_04"),
            },
            {
                "title": "Modular Rollup Theory",
                "url": "https://www.youtube.com/watch?v=jnVjhp41pcc",
                "thumbnail": ctx.thumbnail("MODULAR_ROLLUP"),
            },
        ],
    }


def _technology(ctx: RecordContext) -> dict[str, Any]:
    return {
        "state_correctness": {
            "name": "Fraud proofs are in development",
            "description": (
                "Ultimately, OP stack chains will use interactive fraud proofs to "
                "enforce state correctness. This feature is currently in development "
                "and the system permits invalid state roots."
            ),
            "risks": [
                {
                    "category": "Funds can be stolen if",
                    "text": "an invalid state root is submitted to the system.",
                    "is_critical": True,
                }
            ],
            "references": [
                {
                    "text": "L2OutputOracle.sol#L141 - Etherscan source code, deleteL2Outputs function",
                    "href": f"{ORACLE_SRC}#L141",
                }
            ],
        },
        "data_availability": ctx.choice(
            "DATA_AVAILABILITY",
            "ON_CHAIN_CANONICAL",
            references=[
                {
                    "text": "Derivation: Batch submission - OP Stack specs",
                    "href": "https://github.com/ourzora/optimism/blob/develop/specs/derivation.md#batch-submission",
                },
                {
                    "text": "BatchInbox - Etherscan address",
                    "href": "https://etherscan.io/address/0x6f54ca6f6ede96662024ffd61bfd18f3f4e34dff",
                },
                {
                    "text": "OptimismPortal.sol#L434 - Etherscan source code, depositTransaction function",
                    "href": f"{PORTAL_SRC}#L434",
                },
            ],
        ),
        "operator": ctx.choice(
            "OPERATOR",
            "CENTRALIZED_OPERATOR",
            references=[
                {
                    "text": "L2OutputOracle.sol#L30 - Etherscan source code, CHALLENGER address",
                    "href": f"{ORACLE_SRC}#L30",
                },
                {
                    "text": "L2OutputOracle.sol#L35 - Etherscan source code, PROPOSER address",
                    "href": f"{ORACLE_SRC}#L35",
                },
                {
                    "text": "Decentralizing the sequencer - OP Stack docs",
                    "href": "https://community.optimism.io/docs/protocol/#decentralizing-the-sequencer",
                },
            ],
        ),
        "force_transactions": ctx.choice(
            "FORCE_TRANSACTIONS",
            "CANONICAL_ORDERING",
            references=[
                {
                    "text": "Sequencing Window - OP Stack specs",
                    "href": "https://github.com/ourzora/optimism/blob/51eeb76efeb32b3df3e978f311188aa29f5e3e94/specs/glossary.md#sequencing-window",
                },
                {
                    "text": "OptimismPortal.sol#L434 - Etherscan source code, depositTransaction function",
                    "href": f"{PORTAL_SRC}#L434",
                },
            ],
        ),
        "exit_mechanisms": [
            ctx.choice(
                "EXITS",
                "REGULAR",
                "optimistic",
                "merkle proof",
                references=[
                    {
                        "text": "OptimismPortal.sol#L242 - Etherscan source code, proveWithdrawalTransaction function",
                        "href": f"{PORTAL_SRC}#L242",
                    },
                    {
                        "text": "OptimismPortal.sol#L325 - Etherscan source code, finalizeWithdrawalTransaction function",
                        "href": f"{PORTAL_SRC}#L325",
                    },
                    {
                        "text": "L2OutputOracle.sol#L185 - Etherscan source code, PROPOSER check",
                        "href": f"{ORACLE_SRC}#L185",
                    },
                ],
                risks=ctx.risks("EXITS", "RISK_CENTRALIZED_VALIDATOR"),
            ),
            ctx.choice(
                "EXITS",
                "FORCED",
                "all-withdrawals",
                references=[
                    {
                        "text": "Forced withdrawal from an OP Stack blockchain",
                        "href": "https://stack.optimism.io/docs/security/forced-withdrawal/",
                    }
                ],
            ),
        ],
        "smart_contracts": {
            "name": "EVM compatible smart contracts are supported",
            "description": (
                "OP stack chains are pursuing the EVM Equivalence model. No changes "
                "to smart contracts are required regardless of the language they are "
                "written in, i.e. anything deployed on L1 can be deployed on L2."
            ),
            "references": [
                {
                    "text": "Introducing EVM Equivalence",
                    "href": "https://medium.com/ethereum-optimism/introducing-evm-equivalence-5c2021deb306",
                }
            ],
        },
    }
