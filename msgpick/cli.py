from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import questionary
import typer
from rich.console import Console
from rich.panel import Panel

from .errors import LoadError
from .export import resolve_export_path
from .loader import detect_format, iter_units
from .logging import setup_logging
from .settings import SOURCE_FORMATS, load_settings
from .store import MessageStore
from .tui.components import render_error, render_result_panel, render_stats_table
from .tui.state import Session

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="msgpick: browse a message collection and export the selected messages",
    rich_markup_mode="rich",
)
console = Console()


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _resolve_source(source: Optional[Path], configured: Optional[Path]) -> Path:
    """Pick the source directory: argument, then settings, then ask."""
    if source is not None:
        return source
    if configured is not None:
        return configured
    answer = questionary.path("Message directory:", only_directories=True).ask()
    if not answer:
        raise typer.Exit(code=1)
    return Path(answer)


def _check_format(fmt: str) -> str:
    fmt = (fmt or "auto").strip().lower()
    if fmt not in SOURCE_FORMATS:
        raise typer.BadParameter(f"format must be one of: {', '.join(SOURCE_FORMATS)}")
    return fmt


def _load(source: Path, fmt: str, pattern: str) -> MessageStore:
    try:
        with console.status(f"[cyan]Loading messages from {source}...[/]"):
            return MessageStore.load(iter_units(source, fmt, pattern))
    except LoadError as exc:
        logger.error("Load failed: %s", exc)
        render_error(
            console,
            "Could not load messages",
            str(exc),
            "Check the source directory and --format, then try again",
        )
        raise typer.Exit(code=1)


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback(invoke_without_command=True)
def _root(ctx: typer.Context):
    """
    [bold]msgpick[/bold]: curate a message collection and export the selection.

    [dim]Run without arguments to browse the configured source directory.[/dim]

    [bold]Examples:[/bold]
      python -m msgpick browse ./package     # Discord data package or .txt folder
      python -m msgpick status ./notes       # Count messages without opening the UI
    """
    if ctx.invoked_subcommand is None:
        _browse()


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("browse", help="[bold cyan]B[/bold cyan]rowse messages and export a selection")
def browse(
    source: Optional[Path] = typer.Argument(None, help="Directory holding the messages"),
    fmt: str = typer.Option("", "--format", "-f", help="auto, text or discord"),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="Glob for the text layout"),
    export_dir: Optional[Path] = typer.Option(None, "--export-dir", help="Directory for the artifact"),
    export_name: Optional[str] = typer.Option(None, "--export-name", help="Artifact file name"),
    timestamp: Optional[bool] = typer.Option(
        None, "--timestamp/--no-timestamp", help="Stamp the artifact name with the export time"
    ),
):
    """Load the collection and open the interactive picker."""
    _browse(source, fmt, pattern, export_dir, export_name, timestamp)


def _browse(
    source: Optional[Path] = None,
    fmt: str = "",
    pattern: Optional[str] = None,
    export_dir: Optional[Path] = None,
    export_name: Optional[str] = None,
    timestamp: Optional[bool] = None,
) -> None:
    from .tui.terminal import TerminalUI

    s = load_settings()
    if export_dir is not None:
        s.MSGPICK_EXPORT_DIR = export_dir
    if export_name:
        s.MSGPICK_EXPORT_NAME = export_name
    if timestamp is not None:
        s.MSGPICK_EXPORT_TIMESTAMP = timestamp

    log_file = setup_logging(s)
    src = _resolve_source(source, s.MSGPICK_SOURCE_DIR)
    store = _load(src, _check_format(fmt or s.MSGPICK_SOURCE_FORMAT), pattern or s.MSGPICK_TEXT_PATTERN)

    session = Session.create(store, resolve_export_path(s))
    logger.info("Browsing %d message(s) from %s", len(store), src)
    TerminalUI(session).run()

    stats: dict[str, str | int] = {
        "Messages": len(store),
        "Selected": store.count_selected(),
        "Log": str(log_file),
    }
    if session.exports:
        stats["Last export"] = str(session.exports[-1])
        render_result_panel(console, "Exited the application", stats)
    else:
        stats["Export"] = "none (selection discarded)"
        render_result_panel(console, "Exited without exporting", stats)


@app.command("status", help="[bold cyan]S[/bold cyan]how configuration and collection stats")
@app.command("stats", hidden=True)  # Alias
def status(
    source: Optional[Path] = typer.Argument(None, help="Directory holding the messages"),
    fmt: str = typer.Option("", "--format", "-f", help="auto, text or discord"),
    pattern: Optional[str] = typer.Option(None, "--pattern", help="Glob for the text layout"),
):
    """Show configuration and collection stats without opening the UI."""
    s = load_settings()
    src = source or s.MSGPICK_SOURCE_DIR

    console.print(Panel.fit(
        "\n".join([
            f"[bold]Source:[/bold]   {src or '[red](not set)[/red]'}",
            f"[bold]Format:[/bold]   {fmt or s.MSGPICK_SOURCE_FORMAT}",
            f"[bold]Export:[/bold]   {resolve_export_path(s)}",
            f"[bold]Logs:[/bold]     {s.MSGPICK_LOG_DIR} ({s.MSGPICK_LOG_LEVEL})",
        ]),
        title="[bold]Configuration[/bold]",
    ))

    if src is None:
        console.print("[dim]Pass a source directory or set MSGPICK_SOURCE_DIR.[/dim]")
        raise typer.Exit(code=1)

    fmt = _check_format(fmt or s.MSGPICK_SOURCE_FORMAT)
    store = _load(src, fmt, pattern or s.MSGPICK_TEXT_PATTERN)
    messages = list(store)
    render_stats_table(
        console,
        {
            "Layout": detect_format(Path(src)) if fmt == "auto" else fmt,
            "Messages": len(messages),
            "Characters": sum(len(m.content) for m in messages),
            "Labelled": sum(1 for m in messages if m.source_label),
        },
        title="Collection",
    )
