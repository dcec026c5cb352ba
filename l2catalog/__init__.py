"""l2catalog: typed, schema-validated registry of Layer 2 project records.

Records are composed from per-project discovery snapshots and shared
classification tables, validated once at catalog build time, and
served read-only to consumers (CLI, JSON Lines export).
"""

__version__ = "0.1.0"
__description__ = "Typed registry of Layer 2 project records"

from l2catalog.core.builder import ProjectRecordBuilder
from l2catalog.core.catalog import CatalogBuilder
from l2catalog.core.registry import ProjectRegistry
from l2catalog.core.stage_classifier import get_stage
from l2catalog.cli.app import app as cli

__all__ = [
    "CatalogBuilder",
    "ProjectRecordBuilder",
    "ProjectRegistry",
    "get_stage",
    "cli",
    "__version__",
]
