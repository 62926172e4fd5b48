"""Main Typer application — global options and command registration.

Entry point: ``mpak`` (configured via pyproject.toml project.scripts).
"""

from __future__ import annotations

import logging

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler

from mpak.cli.commands import EXIT_ERROR
from mpak.cli.commands.catalog import bundle_cmd, search_bundles_cmd, search_skills_cmd, skill_cmd, versions_cmd
from mpak.cli.commands.resolve import resolve_cmd
from mpak.client import MpakClient
from mpak.config import ClientSettings

app = typer.Typer(
    name="mpak",
    help="mpak: browse the registry and fetch verified skills.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    registry_url: str = typer.Option(None, "--registry-url", help="Registry API base URL."),
    timeout: int = typer.Option(None, "--timeout", help="Request timeout in milliseconds."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Build the shared client from settings and command-line overrides."""
    try:
        settings = ClientSettings()
        client = ctx.obj if isinstance(ctx.obj, MpakClient) else None
        if client is None:
            client = MpakClient(registry_url=registry_url, timeout=timeout, settings=settings)
    except ValidationError as exc:
        Console(stderr=True).print(f"[bold red]Invalid configuration:[/bold red] {exc.errors()[0]['msg']}")
        raise typer.Exit(code=EXIT_ERROR)

    level = logging.DEBUG if verbose else getattr(logging, settings.log_level.upper(), logging.WARNING)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )
    ctx.obj = client


app.command(name="search-bundles", help="Search the bundle catalog.")(search_bundles_cmd)
app.command(name="search-skills", help="Search the skill catalog.")(search_skills_cmd)
app.command(name="bundle", help="Show bundle details.")(bundle_cmd)
app.command(name="versions", help="List the published versions of a bundle.")(versions_cmd)
app.command(name="skill", help="Show skill details.")(skill_cmd)
app.command(name="resolve", help="Resolve a skill reference and verify its integrity.")(resolve_cmd)


@app.command(name="platform", help="Show the detected platform.")
def platform_cmd() -> None:
    """Print the os/arch pair used for platform-scoped downloads."""
    detected = MpakClient.detect_platform()
    Console().print(f"[cyan]{detected.os}[/cyan]/[cyan]{detected.arch}[/cyan]")


def main() -> None:
    """CLI entry point."""
    app()


if __name__ == "__main__":
    main()
