"""Shared catalog vocabulary: default classification tables and constants."""

from l2catalog.catalog.common import (
    OP_STACK_SEQUENCING_WINDOW_SECONDS,
    build_default_tables,
    op_stack_derivation,
)

__all__ = [
    "OP_STACK_SEQUENCING_WINDOW_SECONDS",
    "build_default_tables",
    "op_stack_derivation",
]
