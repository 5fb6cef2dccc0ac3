"""
Block Scaffold CLI - list, preview and fetch reusable UI code blocks.

Usage:
    blocks list https://github.com/ant-design/pro-blocks
    blocks fetch https://github.com/ant-design/pro-blocks/tree/master/AccountCenter
    blocks route-exists /user/list --routes config/routes.json
"""

from importlib.metadata import PackageNotFoundError, version
from typing import Optional

import typer
from rich.console import Console

from block_scaffold.cli.commands.blocks import fetch, list_blocks, route_exists_cmd, routes_cmd

try:
    __version__ = version("block-scaffold")
except PackageNotFoundError:
    __version__ = "0.0.0"

console = Console()

app = typer.Typer(
    name="blocks",
    help="List, preview and fetch reusable UI code blocks from git repositories",
    add_completion=False,
    no_args_is_help=True,
)

app.command("list")(list_blocks)
app.command("fetch")(fetch)
app.command("route-exists")(route_exists_cmd)
app.command("routes")(routes_cmd)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"block-scaffold {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version_flag: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """List, preview and fetch reusable UI code blocks."""


def main():
    app()


if __name__ == "__main__":
    main()
