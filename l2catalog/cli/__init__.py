"""l2catalog CLI — Typer-based command-line interface.

Provides the ``l2catalog`` command with subcommands for building the
catalog, listing projects, and showing a single project's record.

All output uses Rich for formatted terminal display.
"""
