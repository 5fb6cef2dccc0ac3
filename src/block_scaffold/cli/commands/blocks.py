"""Block commands: list, fetch, route-exists and routes."""

from __future__ import annotations

import json as json_lib
from pathlib import Path
from typing import Optional

import httpx
import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from block_scaffold.blocks.presentation import print_blocks
from block_scaffold.blocks.registry import fetch_block_list
from block_scaffold.blocks.routes import depth_router_config, load_routes, route_exists
from block_scaffold.blocks.sync import build_clone_context, sync_block_repo
from block_scaffold.cli.ui import SpinnerReporter, select_with_arrows
from block_scaffold.core.config import load_settings
from block_scaffold.errors import BlockError

console = Console()


def _fail(title: str, exc: Exception) -> None:
    console.print(Panel(str(exc), title=title, border_style="red"))
    raise typer.Exit(1)


def _read_routes(routes_file: Path) -> list[dict]:
    if not routes_file.is_file():
        console.print(f"[red]Error:[/red] Routes file not found: {routes_file}")
        raise typer.Exit(1)
    try:
        return load_routes(routes_file)
    except BlockError as e:
        _fail("Routes Error", e)


def list_blocks(
    git_url: str = typer.Argument(..., help="Repository that publishes blocks"),
    link: bool = typer.Option(True, "--link/--no-link", help="Show a preview link next to each block"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON (machine-parseable)"),
    select: bool = typer.Option(False, "--select", help="Pick a block interactively and print its path"),
    github_token: Optional[str] = typer.Option(
        None,
        "--github-token",
        help="GitHub token for API requests (or set GH_TOKEN / GITHUB_TOKEN)",
    ),
) -> None:
    """List the blocks a repository publishes."""
    try:
        settings = load_settings(Path.cwd())
        blocks = fetch_block_list(
            git_url,
            SpinnerReporter(console),
            settings=settings,
            github_token=github_token,
        )
    except (BlockError, httpx.HTTPError, ValueError) as e:
        _fail("Fetch Error", e)

    choices = print_blocks(blocks, has_link=link and not json_output, preview_host=settings.preview_host)

    # JSON output for scripting (use print() to avoid Rich markup)
    if json_output:
        print(json_lib.dumps([entry.to_dict() for entry in blocks], indent=2, ensure_ascii=False))
        return

    if not choices:
        console.print("[dim]No blocks found[/dim]")
        return

    if select:
        selected = select_with_arrows(
            {choice.value: choice.name for choice in choices},
            prompt_text="Select a block",
            console=console,
        )
        print(selected)
        return

    table = Table.grid(padding=(0, 2))
    table.add_column()
    table.add_column(style="magenta")
    for choice in choices:
        table.add_row(choice.name, ", ".join(choice.tags))
    console.print(Panel(table, title=f"[bold]Blocks in {git_url}[/bold]", border_style="cyan"))
    console.print(f"[dim]{len(choices)} block(s)[/dim]")


def fetch(
    block_url: str = typer.Argument(..., help="Block or repository URL (…/tree/<branch>/<path> accepted)"),
    branch: Optional[str] = typer.Option(None, "--branch", "-b", help="Branch to check out"),
    cache_dir: Optional[Path] = typer.Option(
        None,
        "--cache-dir",
        help="Directory holding cached block repositories",
    ),
) -> None:
    """Clone a block repository into the local cache, or update it."""
    try:
        settings = load_settings(Path.cwd())
        ctx = build_clone_context(
            block_url,
            cache_dir or settings.cache_dir,
            branch=branch,
            default_branch=settings.default_branch,
        )
        clone_dir = sync_block_repo(ctx, SpinnerReporter(console))
    except (BlockError, ValueError) as e:
        _fail("Git Error", e)

    block_dir = clone_dir / ctx.path if ctx.path else clone_dir
    console.print(f"[green]✓[/green] Block source ready at [bold]{block_dir}[/bold]")


def route_exists_cmd(
    path: str = typer.Argument(..., help="Full route path, e.g. /user/list"),
    routes_file: Path = typer.Option(..., "--routes", "-r", help="JSON or YAML route config"),
) -> None:
    """Exit 0 when PATH is an existing route, 1 otherwise."""
    routes = _read_routes(routes_file)
    if route_exists(path, routes):
        print("true")
        return
    print("false")
    raise typer.Exit(1)


def routes_cmd(
    routes_file: Path = typer.Option(..., "--routes", "-r", help="JSON or YAML route config"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON (machine-parseable)"),
) -> None:
    """Show the routes that can host nested blocks."""
    nodes = depth_router_config(_read_routes(routes_file))

    if json_output:
        print(json_lib.dumps([node.to_dict() for node in nodes], indent=2))
        return

    if not nodes:
        console.print("[dim]No parent routes found[/dim]")
        return
    for node in nodes:
        children = ", ".join(child.key for child in node.children)
        console.print(f"[cyan]{node.key}[/cyan] [dim]({children})[/dim]")


__all__ = ["fetch", "list_blocks", "route_exists_cmd", "routes_cmd"]
