"""CLI command implementations."""

from __future__ import annotations

import typer
from rich.console import Console

from mpak.errors import InvalidNameError, MpakError, MpakIntegrityError

EXIT_ERROR = 1
EXIT_INTEGRITY = 2


def fail(console: Console, exc: Exception) -> typer.Exit:
    """Report an SDK error and return the matching ``typer.Exit``.

    Integrity mismatches get their own exit code so scripts can treat them
    as a security event rather than an ordinary failure.
    """
    if isinstance(exc, MpakIntegrityError):
        console.print("[bold red]Integrity check failed.[/bold red]")
        console.print(f"  expected: {exc.expected}")
        console.print(f"  actual:   {exc.actual}")
        return typer.Exit(code=EXIT_INTEGRITY)
    if isinstance(exc, (MpakError, InvalidNameError)):
        console.print(f"[bold red]Error:[/bold red] {exc}")
        return typer.Exit(code=EXIT_ERROR)
    raise exc
