"""Reusable rendering pieces for the TUI and the CLI."""
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import TYPE_CHECKING

from rich.console import Console, Group
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..commands import Mode
from ..models import Message

if TYPE_CHECKING:
    from .state import Session, Status


# ═══════════════════════════════════════════════════════════════════════════════
# VIEW MODEL
# ═══════════════════════════════════════════════════════════════════════════════

# Rows around the list body: title, borders, header rule, bottom line.
CHROME_ROWS = 6
PREVIEW_WIDTH = 60
LABEL_WIDTH = 30

KEY_HINT = "↑/↓ move  PgUp/PgDn page  Space toggle  : command  Esc quit"


@dataclass(frozen=True)
class View:
    """Read-only snapshot handed to the renderer once per tick."""

    rows: tuple[Message, ...]
    focused_id: int | None
    scroll_offset: int
    total: int
    selected: int
    mode: Mode
    buffer: str
    status: Status | None


def build_view(session: Session, window: int | None = None) -> View:
    window = session.window if window is None else max(1, window)
    visible = session.cursor.visible_range(window)
    return View(
        rows=tuple(session.store.iter(visible.start, visible.stop)),
        focused_id=session.cursor.focused_id,
        scroll_offset=session.cursor.scroll_offset,
        total=len(session.store),
        selected=session.store.count_selected(),
        mode=session.interpreter.mode,
        buffer=session.interpreter.buffer,
        status=session.status,
    )


def _truncate(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    return value[: max(0, width - 3)] + "..."


def render_view(view: View):
    """Render the message list, title and bottom line as one rich renderable."""
    position = view.scroll_offset + 1 if view.total else 0
    title = Text.assemble(
        ("Select Messages to Export", "magenta"),
        f" ({position}/{view.total})  ",
        (f"{view.selected} selected", "cyan"),
    )

    table = Table(title=title, expand=True, show_edge=True, pad_edge=False)
    table.add_column("Sel", width=5, no_wrap=True)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Message", ratio=3, no_wrap=True)
    table.add_column("Source", ratio=1, no_wrap=True, style="dim")

    for msg in view.rows:
        indicator = "[x]" if msg.selected else "[ ]"
        style = "bold yellow" if msg.id == view.focused_id else None
        table.add_row(
            Text(indicator),
            str(msg.id),
            Text(_truncate(msg.first_line, PREVIEW_WIDTH)),
            Text(_truncate(msg.source_label or "", LABEL_WIDTH)),
            style=style,
        )

    if not view.total:
        table.add_row("", "", Text("(no messages)", style="dim"), "")

    if view.mode is Mode.COMMAND_ENTRY:
        bottom = Text(f":{view.buffer}")
    elif view.status is not None:
        bottom = Text(view.status.text, style="red" if view.status.is_error else "green")
    else:
        bottom = Text(KEY_HINT, style="dim")

    return Group(table, bottom)


def render_to_ansi(view: View, width: int = 100) -> str:
    """Render a view to a string with ANSI colour codes."""
    buf = io.StringIO()
    console = Console(file=buf, width=max(20, width), force_terminal=True, color_system="standard")
    console.print(render_view(view), end="")
    return buf.getvalue()


# ═══════════════════════════════════════════════════════════════════════════════
# CLI PANELS
# ═══════════════════════════════════════════════════════════════════════════════

def _stat_value(value: str | int) -> str:
    return f"{value:,}" if isinstance(value, int) else escape(str(value))


def render_result_panel(
    console: Console,
    message: str,
    stats: dict[str, str | int] | None = None,
    is_error: bool = False,
) -> None:
    """Print the closing summary of a browse run.

    Args:
        console: Where to print
        message: Headline, shown with a tick or a cross
        stats: Label/value lines under the headline; ints get thousands separators
        is_error: Red "Error" panel instead of the green one
    """
    icon, style = ("✗", "red") if is_error else ("✓", "green")
    content = f"[bold {style}]{icon} {message}[/bold {style}]"

    lines = [f"  {k}: [cyan]{_stat_value(v)}[/cyan]" for k, v in (stats or {}).items()]
    if lines:
        content += "\n\n" + "\n".join(lines)

    console.print(Panel.fit(content, title="Result" if not is_error else "Error"))
    console.print()


def render_error(
    console: Console,
    title: str,
    cause: str,
    action: str | None = None,
) -> None:
    """Print a red panel for a failure that ends the command (title, cause, next step)."""
    content = f"[bold red]✗ {title}[/bold red]\n\n"
    content += f"[yellow]Cause:[/yellow] {escape(cause)}\n"

    if action:
        content += f"\n[dim]→ {action}[/dim]"

    console.print(Panel.fit(content, border_style="red", title="Error"))
    console.print()


def render_stats_table(console: Console, stats: dict[str, str | int], title: str = "Stats") -> None:
    table = Table(title=f"[bold]{title}[/bold]", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", style="cyan", justify="right")

    for key, value in stats.items():
        table.add_row(key, _stat_value(value))

    console.print(table)
    console.print()
