"""Catalog build error taxonomy.

Every error is raised at construction time and surfaced to the operator
running the build.  None of them are retried.
"""

from __future__ import annotations


class CatalogError(Exception):
    """Base class for every failure raised while building the catalog."""


class UnknownKeyError(CatalogError, KeyError):
    """Raised when a classification table has no entry for a key."""

    def __init__(self, category: str, key: str) -> None:
        self.category = category
        self.key = key
        super().__init__(f"Unknown classification {category}.{key}")

    def __str__(self) -> str:
        return self.args[0]


class MissingFieldError(CatalogError, LookupError):
    """Raised when a discovery snapshot lacks a contract or a contract field."""

    def __init__(self, project: str, contract: str, field: str | None = None) -> None:
        self.project = project
        self.contract = contract
        self.field = field
        target = f"{contract}.{field}" if field else contract
        super().__init__(f"Discovery snapshot for {project!r} has no {target}")


class SnapshotNotFoundError(CatalogError, FileNotFoundError):
    """Raised when no discovery snapshot exists for a project."""


class UnknownRoleError(CatalogError, LookupError):
    """Raised when a role name has no discovered holder."""


class InvalidAddressError(CatalogError, ValueError):
    """Raised when a value is not a 20-byte hex address."""


class InvalidTimestampError(CatalogError, ValueError):
    """Raised when a timestamp is not a non-negative unix time in seconds."""


class SchemaViolationError(CatalogError, ValueError):
    """Raised when a composed record does not satisfy the project schema."""

    def __init__(self, project_id: str, problems: list[str]) -> None:
        self.project_id = project_id
        self.problems = list(problems)
        super().__init__(
            f"Project {project_id!r} violates the record schema: "
            + "; ".join(self.problems)
        )


class DuplicateIdError(CatalogError, ValueError):
    """Raised when a record id is registered twice."""


class NotFoundError(CatalogError, KeyError):
    """Raised when a registry lookup misses."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else ""


class RegistryFrozenError(CatalogError, RuntimeError):
    """Raised when a frozen registry or table set is written to."""


class InvalidOverlayError(CatalogError, ValueError):
    """Raised when a classification table overlay file cannot be loaded."""
