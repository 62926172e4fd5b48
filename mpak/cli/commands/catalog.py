"""``mpak search-bundles|search-skills|bundle|versions|skill`` — catalog browsing."""

from __future__ import annotations

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from mpak.cli.commands import fail
from mpak.client import MpakClient
from mpak.errors import InvalidNameError, MpakError

console = Console()


def search_bundles_cmd(
    ctx: typer.Context,
    query: str = typer.Argument(None, help="Search text."),
    type_: str = typer.Option(None, "--type", help="Server type filter (e.g. node, python)."),
    sort: str = typer.Option(None, help="Sort order."),
    limit: int = typer.Option(None, help="Maximum results."),
    offset: int = typer.Option(None, help="Pagination offset."),
) -> None:
    """Search the bundle catalog and print a results table."""
    client: MpakClient = ctx.obj
    try:
        result = client.search_bundles(query, type=type_, sort=sort, limit=limit, offset=offset)
    except MpakError as exc:
        raise fail(console, exc)

    if not result.bundles:
        console.print("[dim]No bundles found.[/dim]")
        return

    table = Table(title=f"Bundles ({result.total})")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Description")
    for bundle in result.bundles:
        table.add_row(bundle.name, bundle.latest_version or "-", (bundle.description or "")[:60])
    console.print(table)


def search_skills_cmd(
    ctx: typer.Context,
    query: str = typer.Argument(None, help="Search text."),
    tags: str = typer.Option(None, help="Comma-separated tags."),
    category: str = typer.Option(None, help="Category filter."),
    surface: str = typer.Option(None, help="Surface filter (e.g. claude-code)."),
    sort: str = typer.Option(None, help="Sort order."),
    limit: int = typer.Option(None, help="Maximum results."),
    offset: int = typer.Option(None, help="Pagination offset."),
) -> None:
    """Search the skill catalog and print a results table."""
    client: MpakClient = ctx.obj
    try:
        result = client.search_skills(
            query,
            tags=tags,
            category=category,
            surface=surface,
            sort=sort,
            limit=limit,
            offset=offset,
        )
    except MpakError as exc:
        raise fail(console, exc)

    if not result.skills:
        console.print("[dim]No skills found.[/dim]")
        return

    table = Table(title=f"Skills ({result.total})")
    table.add_column("Name", style="cyan")
    table.add_column("Version", style="green")
    table.add_column("Tags")
    for skill in result.skills:
        version = skill.latest_version or skill.version or "-"
        table.add_row(skill.name, version, ", ".join(skill.tags))
    console.print(table)


def bundle_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Scoped bundle name (@scope/name)."),
) -> None:
    """Show bundle details."""
    client: MpakClient = ctx.obj
    try:
        bundle = client.get_bundle(name)
    except (MpakError, InvalidNameError) as exc:
        raise fail(console, exc)

    lines = [
        f"[bold]Latest:[/bold]  {bundle.latest_version or '-'}",
        f"[bold]License:[/bold] {bundle.license or '-'}",
        f"[bold]Versions:[/bold] {len(bundle.versions)}",
    ]
    if bundle.description:
        lines.insert(0, bundle.description + "\n")
    console.print(Panel("\n".join(lines), title=bundle.name, border_style="cyan"))


def versions_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Scoped bundle name (@scope/name)."),
) -> None:
    """List the published versions of a bundle."""
    client: MpakClient = ctx.obj
    try:
        versions = client.get_bundle_versions(name)
    except (MpakError, InvalidNameError) as exc:
        raise fail(console, exc)

    table = Table(title=f"{versions.name} (latest {versions.latest})")
    table.add_column("Version", style="green")
    table.add_column("Platforms")
    table.add_column("Downloads", justify="right")
    for info in versions.versions:
        platforms = ", ".join(f"{p.os}/{p.arch}" for p in info.platforms) or "-"
        table.add_row(info.version, platforms, str(info.downloads))
    console.print(table)


def skill_cmd(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Scoped skill name (@scope/name)."),
) -> None:
    """Show skill details."""
    client: MpakClient = ctx.obj
    try:
        skill = client.get_skill(name)
    except (MpakError, InvalidNameError) as exc:
        raise fail(console, exc)

    lines = [
        f"[bold]Latest:[/bold]   {skill.latest_version or '-'}",
        f"[bold]Category:[/bold] {skill.category or '-'}",
        f"[bold]Tags:[/bold]     {', '.join(skill.tags) or '-'}",
    ]
    if skill.description:
        lines.insert(0, skill.description + "\n")
    console.print(Panel("\n".join(lines), title=skill.name, border_style="cyan"))
