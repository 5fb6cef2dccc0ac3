"""Reusable UI helpers for block CLI interactions."""

from __future__ import annotations

from typing import Dict, Optional, Protocol

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.status import Status
from rich.table import Table


class ProgressReporter(Protocol):
    """Progress sink notified around each network call or git step."""

    def start(self, message: str) -> None: ...

    def succeed(self) -> None: ...

    def fail(self) -> None: ...


class NullReporter:
    """Reporter that discards every notification."""

    def start(self, message: str) -> None:
        pass

    def succeed(self) -> None:
        pass

    def fail(self) -> None:
        pass


class SpinnerReporter:
    """Render one spinner per step and leave a ✔/✖ line behind it."""

    def __init__(self, console: Optional[Console] = None):
        self.console = _resolve_console(console)
        self.message: str | None = None
        self._status: Status | None = None

    def start(self, message: str) -> None:
        # A new step closes whatever was still spinning.
        self._stop()
        self.message = message
        self._status = self.console.status(message, spinner="dots")
        self._status.start()

    def succeed(self) -> None:
        if self._stop():
            self.console.print(f"[green]✔[/green] {self.message}")

    def fail(self) -> None:
        if self._stop():
            self.console.print(f"[red]✖[/red] {self.message}")

    def _stop(self) -> bool:
        if self._status is None:
            return False
        self._status.stop()
        self._status = None
        return True


def get_key() -> str:
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP or key == readchar.key.CTRL_P:
        return "up"
    if key == readchar.key.DOWN or key == readchar.key.CTRL_N:
        return "down"

    if key == readchar.key.ENTER:
        return "enter"

    if key == readchar.key.ESC or key == "\x1b":
        return "escape"

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def _resolve_console(console: Optional[Console]) -> Console:
    return console or Console()


def select_with_arrows(
    options: Dict[str, str],
    prompt_text: str = "Select a block",
    default_key: str | None = None,
    console: Console | None = None,
) -> str:
    """
    Interactive selection using arrow keys with Rich Live display.

    ``options`` maps the value returned on Enter to the label rendered for it.
    """
    console = _resolve_console(console)
    option_keys = list(options.keys())
    if not option_keys:
        console.print("[yellow]Nothing to select.[/yellow]")
        raise typer.Exit(1)
    if default_key and default_key in option_keys:
        selected_index = option_keys.index(default_key)
    else:
        selected_index = 0

    def create_selection_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(justify="left")

        for i, key in enumerate(option_keys):
            pointer = "▶" if i == selected_index else " "
            table.add_row(pointer, options[key])

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2),
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
                if key == "up":
                    selected_index = (selected_index - 1) % len(option_keys)
                elif key == "down":
                    selected_index = (selected_index + 1) % len(option_keys)
                elif key == "enter":
                    return option_keys[selected_index]
                elif key == "escape":
                    console.print("\n[yellow]Selection cancelled[/yellow]")
                    raise typer.Exit(1)

                live.update(create_selection_panel(), refresh=True)

            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)


__all__ = [
    "NullReporter",
    "ProgressReporter",
    "SpinnerReporter",
    "get_key",
    "select_with_arrows",
]
