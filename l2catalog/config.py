"""Catalog build configuration — env-driven.

Centralized config using pydantic-settings.  Reads from a .env file and
L2CATALOG_* environment variables.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class CatalogConfig(BaseSettings):
    """Catalog build configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export L2CATALOG_LOG_LEVEL=DEBUG
        export L2CATALOG_DISCOVERY_PATH=/data/discovery
        export L2CATALOG_ABORT_ON_ERROR=false

    Or via .env file::

        L2CATALOG_EXPORT_PATH=build/projects.jsonl
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="L2CATALOG_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Runtime environment
    environment: str = "development"
    log_level: str = "INFO"

    # Inputs
    discovery_path: Path = Path("discovery")
    tables_overlay_path: Path | None = None

    # Output
    export_path: Path = Path("build/projects.jsonl")

    # Build policy
    abort_on_error: bool = True  # False: skip failing records, report them
    max_workers: int = 1  # >1 builds records in a thread pool

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


# Module-level singleton: import as `from l2catalog.config import config`
config = CatalogConfig()
