"""mpak CLI — Typer-based command-line interface.

Provides the ``mpak`` command with subcommands for searching the catalog,
inspecting bundles and skills, and resolving skill references with
integrity verification.

All output uses Rich for formatted terminal display.
"""
