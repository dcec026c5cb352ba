"""l2catalog data models — all Pydantic v2, all frozen (immutable)."""

from l2catalog.models.base import CatalogModel
from l2catalog.models.classification import ClassificationEntry, Sentiment
from l2catalog.models.config import (
    ALL_TOKENS,
    AssessCount,
    EscrowConfig,
    LivenessConfig,
    LivenessTracker,
    ProjectConfig,
    TransactionApi,
)
from l2catalog.models.contracts import (
    AccountType,
    ContractDetails,
    PermissionAccount,
    PermissionEntry,
    ProjectContracts,
    Upgradeability,
)
from l2catalog.models.display import LivenessDisplay, ProjectDisplay, ProjectLinks
from l2catalog.models.project import KnowledgeNugget, Milestone, ProjectRecord
from l2catalog.models.references import Reference, Risk, RiskSource
from l2catalog.models.risk_view import RISK_DIMENSIONS, RiskView, RiskViewEntry
from l2catalog.models.stages import (
    CriterionState,
    MissingRequirements,
    Stage0Criteria,
    Stage1Criteria,
    Stage2Criteria,
    StageContext,
    StageCriteria,
    StageResult,
    StageSummary,
)
from l2catalog.models.technology import StateDerivation, Technology, TechnologyChoice

__all__ = [
    "CatalogModel",
    # classification
    "ClassificationEntry",
    "Sentiment",
    # references
    "Reference",
    "Risk",
    "RiskSource",
    # config
    "ALL_TOKENS",
    "AssessCount",
    "EscrowConfig",
    "LivenessConfig",
    "LivenessTracker",
    "ProjectConfig",
    "TransactionApi",
    # contracts
    "AccountType",
    "ContractDetails",
    "PermissionAccount",
    "PermissionEntry",
    "ProjectContracts",
    "Upgradeability",
    # display
    "LivenessDisplay",
    "ProjectDisplay",
    "ProjectLinks",
    # risk view
    "RISK_DIMENSIONS",
    "RiskView",
    "RiskViewEntry",
    # stages
    "CriterionState",
    "MissingRequirements",
    "Stage0Criteria",
    "Stage1Criteria",
    "Stage2Criteria",
    "StageContext",
    "StageCriteria",
    "StageResult",
    "StageSummary",
    # technology
    "StateDerivation",
    "Technology",
    "TechnologyChoice",
    # project
    "KnowledgeNugget",
    "Milestone",
    "ProjectRecord",
]
