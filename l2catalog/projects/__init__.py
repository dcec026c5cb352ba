"""Project definitions — registry mapping project id to its definition.

Usage::

    from l2catalog.projects import PROJECT_DEFINITIONS, get_definition

    definition = get_definition("zora")
    record = builder.build("zora", snapshot, definition)
"""

from __future__ import annotations

from l2catalog.core.builder import ProjectDefinition
from l2catalog.projects import zora

PROJECT_DEFINITIONS: dict[str, ProjectDefinition] = {
    zora.PROJECT_ID: zora.define,
}


def get_definition(project_id: str) -> ProjectDefinition:
    """Return the definition for *project_id*.

    Raises ``KeyError`` if the project is not defined.
    """
    try:
        return PROJECT_DEFINITIONS[project_id]
    except KeyError:
        raise KeyError(
            f"Unknown project {project_id!r}. "
            f"Defined projects: {sorted(PROJECT_DEFINITIONS)}"
        ) from None


__all__ = ["PROJECT_DEFINITIONS", "get_definition"]
