"""``mpak resolve NAME`` — fetch a skill from any source and verify it.

Exit codes: 0 on success, 1 for ordinary failures, 2 when the content does
not match the supplied integrity descriptor.  On a mismatch nothing of the
content is printed.
"""

from __future__ import annotations

from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console

from mpak.cli.commands import EXIT_ERROR, fail
from mpak.client import MpakClient
from mpak.core.hasher import content_address
from mpak.errors import InvalidNameError, MpakError
from mpak.models.references import LATEST, SourceKind, parse_reference

console = Console()


def resolve_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Skill name (@scope/name for registry sources)."),
    source: SourceKind = typer.Option(SourceKind.REGISTRY, "--source", "-s", help="Where to fetch from."),
    version: str = typer.Option(LATEST, "--version", help="Version or release tag."),
    repo: str = typer.Option(None, "--repo", help="owner/repo (vcs-release)."),
    path: str = typer.Option(None, "--path", help="Asset path within the release (vcs-release)."),
    url: str = typer.Option(None, "--url", help="Download URL (direct-url)."),
    integrity: str = typer.Option(None, "--integrity", "-i", help="Expected digest: sha256:<hex>, sha256-<hex>, or <hex>."),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Print only the content."),
) -> None:
    """Resolve a skill reference and print its content."""
    client: MpakClient = ctx.obj

    data: dict[str, Any] = {"source": source.value, "name": name, "version": version}
    if integrity is not None:
        data["integrity"] = integrity
    if source is SourceKind.VCS_RELEASE:
        data.update(repo=repo, path=path)
    elif source is SourceKind.DIRECT_URL:
        data["url"] = url

    try:
        ref = parse_reference(data)
    except ValidationError as exc:
        console.print(f"[bold red]Invalid reference:[/bold red] {exc.errors()[0]['msg']}")
        raise typer.Exit(code=EXIT_ERROR)

    try:
        resolved = client.resolve_skill_ref(ref)
    except (MpakError, InvalidNameError) as exc:
        raise fail(console, exc)

    if not quiet:
        status = "[green]verified[/green]" if resolved.verified else "[yellow]unverified[/yellow]"
        console.print(f"[bold]{name}[/bold]@{resolved.version} from {resolved.source.value} ({status})")
        console.print(f"[dim]{content_address(resolved.content.encode('utf-8'))}[/dim]")
    console.print(resolved.content, markup=False, highlight=False)
