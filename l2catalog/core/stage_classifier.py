"""Stage classifier — pure mapping from stage criteria to a ``StageResult``.

Rule table (evaluated per tier, in order Stage 0, 1, 2):

==========================  ==========================================
Tier content                Outcome
==========================  ==========================================
any ``VIOLATED``            tier not met; stop
``NOT_APPLICABLE`` on a     tier not met; stop; result is flagged
certainty-required field    ``under_review``
``NOT_APPLICABLE`` on any   ignored (excluded from failure)
other field
otherwise                   tier met; continue with the next tier
==========================  ==========================================

The result tier is the highest met tier, or ``None`` when Stage 0 is
not met.  Violations take precedence over undecided fields in the same
tier.  Because evaluation only ever stops earlier when a field gets
worse, turning a ``SATISFIED`` field into ``VIOLATED`` can never raise
the tier.
"""

from __future__ import annotations

from l2catalog.models.stages import (
    CriterionState,
    MissingRequirements,
    RequirementOutcome,
    StageContext,
    StageCriteria,
    StageResult,
    StageSummary,
)

STAGE_LABELS: tuple[str, ...] = ("Stage 0", "Stage 1", "Stage 2")
NO_STAGE_LABEL = "Not applicable"
UNDER_REVIEW_LABEL = "Under review"

REQUIREMENT_DESCRIPTIONS: dict[str, str] = {
    # stage 0
    "calls_itself_rollup": "The project calls itself a rollup.",
    "state_roots_posted_to_l1": "L2 state roots are posted to Ethereum L1.",
    "data_availability_on_l1": "Inputs for the state transition function are posted to L1.",
    "rollup_node_source_available": (
        "A source-available node exists that can recreate the state from L1 data."
    ),
    # stage 1
    "state_verification_on_l1": "A complete and functional proof system is deployed.",
    "fraud_proof_system_at_least_5_outsiders": (
        "Fraud proof submission is open to at least 5 outside actors."
    ),
    "users_have_7_days_to_exit": (
        "Upgrades executed by actors with more centralized control than a Security "
        "Council provide at least 7d for users to exit."
    ),
    "users_can_exit_without_cooperation": (
        "Users are able to exit without the help of the permissioned operators."
    ),
    "security_council_properly_set_up": "The Security Council is properly set up.",
    # stage 2
    "proof_system_overridden_only_in_case_of_a_bug": (
        "The Security Council is limited to acting on soundness errors provable "
        "on-chain."
    ),
    "fraud_proof_system_is_permissionless": "Fraud proof submission is open to everyone.",
    "delay_with_30d_exit_window": (
        "Upgrades unrelated to on-chain provable bugs provide at least 30d to exit."
    ),
}

# Fields whose NOT_APPLICABLE value stops evaluation and flags the result
# for review, per tier.  Every other NOT_APPLICABLE field is ignored.
CERTAINTY_REQUIRED: tuple[frozenset[str], ...] = (
    frozenset(
        {
            "calls_itself_rollup",
            "state_roots_posted_to_l1",
            "data_availability_on_l1",
            "rollup_node_source_available",
        }
    ),
    frozenset(
        {
            "state_verification_on_l1",
            "users_have_7_days_to_exit",
            "users_can_exit_without_cooperation",
        }
    ),
    frozenset({"delay_with_30d_exit_window"}),
)


def _tier_summary(index: int, states: dict[str, CriterionState]) -> StageSummary:
    return StageSummary(
        stage=STAGE_LABELS[index],
        requirements=[
            RequirementOutcome(
                key=key, state=state, description=REQUIREMENT_DESCRIPTIONS[key]
            )
            for key, state in states.items()
        ],
    )


def get_stage(
    criteria: StageCriteria, context: StageContext | None = None
) -> StageResult:
    """Classify a project by its stage criteria.

    Deterministic and side-effect free: equal criteria always yield an
    equal result.
    """
    context = context or StageContext()
    tiers = [tier.states() for tier in criteria.tiers()]
    summary = [_tier_summary(i, states) for i, states in enumerate(tiers)]

    reached: int | None = None
    under_review = False
    missing: MissingRequirements | None = None

    for index, states in enumerate(tiers):
        violated = [k for k, s in states.items() if s is CriterionState.VIOLATED]
        undecided = [
            k
            for k, s in states.items()
            if s is CriterionState.NOT_APPLICABLE and k in CERTAINTY_REQUIRED[index]
        ]
        if violated or undecided:
            under_review = not violated
            missing = MissingRequirements(
                next_stage=STAGE_LABELS[index],
                requirements=[REQUIREMENT_DESCRIPTIONS[k] for k in violated + undecided],
            )
            break
        reached = index

    if under_review:
        label = UNDER_REVIEW_LABEL
    elif reached is None:
        label = NO_STAGE_LABEL
    else:
        label = STAGE_LABELS[reached]

    return StageResult(
        stage=label,
        tier=reached,
        under_review=under_review,
        missing=missing,
        summary=summary,
        context=context,
    )
