#!/usr/bin/env python3
"""
Main CLI entry point for cmdpal
"""

from enum import Enum
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.text import Text

from cmdpal import __version__
from cmdpal.catalog import build_registry, save_example_catalog
from cmdpal.config.settings import (
    get_catalog_path,
    get_env_info,
    get_max_visible,
    validate_all_env_vars,
)
from cmdpal.core.context import filter_by_context
from cmdpal.core.fuzzy import FuzzyMatcher
from cmdpal.core.models import EnvironmentSnapshot, ViewMode
from cmdpal.core.registry import CommandRegistry
from cmdpal.error_handling import handle_error, info_user, setup_logging, warn_user
from cmdpal.exceptions import CmdpalError
from cmdpal.host.demo import DemoSession

console = Console()

app = typer.Typer(
    name="cmdpal",
    help="Fuzzy command palette for music production hosts",
    no_args_is_help=True,
)


class ContextFact(str, Enum):
    """Demo-session facts that can be set for `search --context`."""
    track = "track"
    device = "device"
    clip = "clip"
    playing = "playing"
    arrangement = "arrangement"


def snapshot_from_facts(facts: List[ContextFact]) -> EnvironmentSnapshot:
    chosen = set(facts)
    return EnvironmentSnapshot(
        has_selected_track=ContextFact.track in chosen,
        has_selected_device=ContextFact.device in chosen,
        has_selected_clip=ContextFact.clip in chosen,
        is_playing=ContextFact.playing in chosen,
        view_mode=ViewMode.ARRANGEMENT if ContextFact.arrangement in chosen else ViewMode.SESSION,
    )


def _registry(ctx: typer.Context) -> CommandRegistry:
    return ctx.obj["registry"]


def _highlighted(matcher: FuzzyMatcher, query: str, title: str) -> Text:
    text = Text()
    for segment in matcher.highlight(query, title):
        text.append(segment.text, style="bold cyan" if segment.matched else "")
    return text


# Callback for global options
@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress non-error output"),
    catalog: Optional[Path] = typer.Option(
        None, "--catalog", envvar="CMDPAL_CATALOG", help="Path to a YAML action catalog"
    ),
):
    """
    cmdpal - fuzzy command palette

    Searches a catalog of host actions, hides the ones whose preconditions
    are not met, and dispatches the chosen action.

    [bold]Examples:[/bold]

    Search for an action:
        [cyan]cmdpal search "add eq"[/cyan]

    Search with a track selected:
        [cyan]cmdpal search delete -x track[/cyan]

    Open the interactive palette:
        [cyan]cmdpal run[/cyan]
    """
    if verbose and quiet:
        typer.echo("Error: --verbose and --quiet are mutually exclusive", err=True)
        raise typer.Exit(1)

    setup_logging(verbose=verbose, quiet=quiet)

    for problem in validate_all_env_vars():
        warn_user(problem)

    try:
        registry, reports = build_registry(catalog)
    except CmdpalError as e:
        handle_error(e, "loading catalog", show_details=verbose)

    if not quiet:
        for report in reports:
            if not report.ok:
                warn_user(
                    f"{len(report.errors)} invalid entries in batch '{report.category}'",
                    suggestion="; ".join(report.errors),
                )

    ctx.obj = {"registry": registry, "catalog_path": catalog or get_catalog_path()}


@app.command("list")
def list_cmd(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only show this category"),
) -> None:
    """List catalog entries in registration order.

    Examples:
        cmdpal list
        cmdpal list -c Transport
    """
    registry = _registry(ctx)
    entries = registry.get_by_category(category) if category else registry.get_all()

    if not entries:
        if category:
            console.print(f"[yellow]No commands in category {category}[/yellow]")
        else:
            console.print("[yellow]No commands[/yellow]")
        return

    table = Table()
    table.add_column("ID", style="dim")
    table.add_column("Title", min_width=15)
    table.add_column("Category", style="yellow")
    table.add_column("Action")
    table.add_column("Requires", style="dim")

    for entry in entries:
        table.add_row(
            entry.id,
            entry.title,
            entry.category,
            entry.action_key,
            ", ".join(sorted(r.value for r in entry.requires)),
        )

    console.print(table)
    console.print(f"[dim]{len(entries)} of {registry.count()} commands[/dim]")


@app.command()
def categories(ctx: typer.Context) -> None:
    """List categories with command counts."""
    registry = _registry(ctx)
    names = registry.get_categories()

    if not names:
        console.print("[yellow]No categories[/yellow]")
        return

    table = Table()
    table.add_column("Category", min_width=15)
    table.add_column("Commands", justify="right", width=9)
    for name in names:
        table.add_row(name, str(len(registry.get_by_category(name))))

    console.print(table)


@app.command()
def search(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Fuzzy search text"),
    limit: int = typer.Option(10, "--limit", "-n", min=1, help="Maximum results to show"),
    context: Optional[List[ContextFact]] = typer.Option(
        None, "--context", "-x", help="Environment fact to assume (repeatable)"
    ),
) -> None:
    """Rank catalog entries against a query.

    Without --context every entry is eligible. With it, entries whose
    preconditions are not met by the given facts are hidden.

    Examples:
        cmdpal search play
        cmdpal search "del dev" -x track -x device
    """
    registry = _registry(ctx)
    matcher = FuzzyMatcher()

    snapshot = snapshot_from_facts(context) if context else None
    candidates = filter_by_context(registry.get_all(), snapshot)
    results = matcher.search(query, candidates)

    if not results:
        console.print(f"[yellow]No commands match '{query}'[/yellow]")
        return

    table = Table()
    table.add_column("#", justify="right", width=3)
    table.add_column("Title", min_width=15)
    table.add_column("Category", style="yellow")
    table.add_column("Action", style="dim")
    table.add_column("Score", justify="right", width=6)

    stripped = query.strip()
    for position, result in enumerate(results[:limit], 1):
        entry = result.entry
        table.add_row(
            str(position),
            _highlighted(matcher, stripped, entry.title),
            entry.category,
            entry.action_key,
            str(result.score),
        )

    console.print(table)
    console.print(f"[dim]{len(results)} of {len(candidates)} commands[/dim]")


@app.command("exec")
def exec_cmd(
    ctx: typer.Context,
    action: str = typer.Argument(..., help="Action key or catalog entry id"),
) -> None:
    """Run an action against a fresh demo session.

    Examples:
        cmdpal exec transport.play
        cmdpal exec device.addEqEight
    """
    registry = _registry(ctx)
    entry = registry.get_by_id(action)
    action_key = entry.action_key if entry else action

    session = DemoSession.with_defaults()
    dispatcher = session.build_dispatcher()
    try:
        result = dispatcher.execute(action_key)
    except CmdpalError as e:
        handle_error(e, f"executing {action_key}")

    console.print(f"[green]✓[/green] {result}")


@app.command()
def init(ctx: typer.Context) -> None:
    """Create an example user catalog."""
    path = ctx.obj["catalog_path"]

    if save_example_catalog(path):
        console.print(f"[green]✓[/green] Created example catalog at {path}")
    else:
        info_user(
            f"Catalog already exists at {path}",
            suggestion="Edit it directly, or pass --catalog to write somewhere else",
        )


@app.command()
def env() -> None:
    """Show cmdpal environment variables and their current values."""
    table = Table()
    table.add_column("Variable", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Default", style="dim")
    table.add_column("Description", style="dim")

    for name, info in get_env_info().items():
        if not info["is_set"]:
            value = "[dim]unset[/dim]"
        elif info["valid"]:
            value = info["value"]
        else:
            value = f"[red]{info['value']} (invalid)[/red]"
        default = info["default"]
        table.add_row(name, value, "" if default is None else str(default), info["description"])

    console.print(table)


@app.command()
def run(ctx: typer.Context) -> None:
    """Open the interactive palette against a demo session."""
    from cmdpal.ui.palette_screen import PaletteApp

    PaletteApp(_registry(ctx), max_visible=get_max_visible()).run()


@app.command()
def version() -> None:
    """Show cmdpal version"""
    typer.echo(f"cmdpal version {__version__}")


if __name__ == "__main__":
    app()
