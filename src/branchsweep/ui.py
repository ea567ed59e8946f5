"""Terminal checklist for picking branches."""

from collections.abc import Sequence
from typing import Optional

import readchar
from rich.console import Console
from rich.live import Live
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table


def get_key() -> str:
    """Read one keypress and name the ones the checklist cares about."""
    key = readchar.readkey()

    if key in (readchar.key.UP, readchar.key.CTRL_P, "k"):
        return "up"
    if key in (readchar.key.DOWN, readchar.key.CTRL_N, "j"):
        return "down"
    if key in (readchar.key.ENTER, readchar.key.CR, readchar.key.LF):
        return "enter"
    if key in (" ", readchar.key.SPACE):
        return "space"
    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def checklist_select(
    names: Sequence[str],
    defaults: Sequence[bool],
    prompt: str = "Space to select/unselect, Enter to confirm",
    console: Optional[Console] = None,
) -> list[int]:
    """Show names as a checklist and return the indices left checked.

    Blocks until Enter. Confirming with nothing checked is allowed and
    returns an empty list.
    """
    console = console or Console()
    checked = {i for i, default in enumerate(defaults) if default}
    cursor = 0

    def build_panel() -> Panel:
        table = Table.grid(padding=(0, 1))
        table.add_column(style="cyan", width=2)
        table.add_column()

        for i, name in enumerate(names):
            box = "[green]☑[/green]" if i in checked else "[bright_black]☐[/bright_black]"
            pointer = "▶" if i == cursor else " "
            table.add_row(pointer, f"{box} {escape(name)}")

        table.add_row("", "")
        table.add_row("", f"[dim]{len(checked)}/{len(names)} selected · a toggles all[/dim]")
        return Panel(table, title=f"[bold]{prompt}[/bold]", border_style="cyan", expand=False)

    if not names:
        return []

    with Live(build_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            key = get_key()
            if key == "up":
                cursor = (cursor - 1) % len(names)
            elif key == "down":
                cursor = (cursor + 1) % len(names)
            elif key == "space":
                checked ^= {cursor}
            elif key == "a":
                checked = set() if len(checked) == len(names) else set(range(len(names)))
            elif key == "enter":
                break
            live.update(build_panel(), refresh=True)

    return sorted(checked)
