"""Command-mode line editing, parsing and dispatch."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Union

from .errors import NothingSelected, WriteError
from .export import export_selection

if TYPE_CHECKING:
    from .tui.state import Session

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMAND VALUES
# ═══════════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Export:
    pass


@dataclass(frozen=True)
class ToggleCurrent:
    pass


@dataclass(frozen=True)
class ToggleRange:
    start: int
    end: int
    value: bool


@dataclass(frozen=True)
class SelectAll:
    pass


@dataclass(frozen=True)
class DeselectAll:
    pass


@dataclass(frozen=True)
class Quit:
    pass


@dataclass(frozen=True)
class Unknown:
    raw_text: str


Command = Union[Export, ToggleCurrent, ToggleRange, SelectAll, DeselectAll, Quit, Unknown]

QUIT_WORDS = {"q", "quit", "exit"}
NULLARY = {
    "export": Export,
    "toggle": ToggleCurrent,
    "all": SelectAll,
    "none": DeselectAll,
}
RANGE_WORDS = {"select": True, "deselect": False}


def _parse_id(token: str) -> int | None:
    if not token.isdecimal():
        return None
    return int(token)


def parse_command(line: str) -> Command:
    """Parse one committed command line.

    Matching is strict: a known keyword followed by unexpected tokens is
    `Unknown`, never a truncated match.
    """
    raw = line.strip()
    tokens = raw.split()
    if not tokens:
        return Unknown("")

    head, args = tokens[0], tokens[1:]
    if head in QUIT_WORDS and not args:
        return Quit()
    if head in NULLARY and not args:
        return NULLARY[head]()
    if head in RANGE_WORDS and len(args) == 2:
        start, end = _parse_id(args[0]), _parse_id(args[1])
        if start is not None and end is not None:
            return ToggleRange(start, end, RANGE_WORDS[head])
    return Unknown(raw)


# ═══════════════════════════════════════════════════════════════════════════════
# INTERPRETER
# ═══════════════════════════════════════════════════════════════════════════════

class Mode(str, Enum):
    BROWSING = "browsing"
    COMMAND_ENTRY = "command_entry"


@dataclass
class DispatchResult:
    """What happened when a command ran; rendered as the status line."""

    command: Command
    message: str | None = None
    is_error: bool = False
    quit: bool = False
    artifact: Path | None = None


class CommandInterpreter:
    """Two-state machine: browsing, or typing a command line.

    The line buffer is the only state kept between commits; it is never
    executed before `commit`.
    """

    def __init__(self) -> None:
        self.mode = Mode.BROWSING
        self.buffer = ""

    @property
    def entering(self) -> bool:
        return self.mode is Mode.COMMAND_ENTRY

    def begin(self) -> None:
        self.mode = Mode.COMMAND_ENTRY
        self.buffer = ""

    def feed(self, char: str) -> None:
        if self.entering:
            self.buffer += char

    def backspace(self) -> None:
        """Delete one character; on an empty line leave command mode."""
        if not self.entering:
            return
        if self.buffer:
            self.buffer = self.buffer[:-1]
        else:
            self.cancel()

    def cancel(self) -> None:
        self.mode = Mode.BROWSING
        self.buffer = ""

    def commit(self, session: Session) -> DispatchResult:
        """Parse the buffer, return to browsing and run the command."""
        line = self.buffer
        self.cancel()
        return dispatch(parse_command(line), session)


def dispatch(command: Command, session: Session) -> DispatchResult:
    """Run a parsed command against the session.

    User errors (empty selection, failed write, unknown input) come back as
    an error result. `InvalidId` is a caller defect and propagates.
    """
    store = session.store
    engine = session.selection

    if isinstance(command, Export):
        try:
            path = export_selection(store, session.export_path)
        except NothingSelected as exc:
            return DispatchResult(command, str(exc), is_error=True)
        except WriteError as exc:
            return DispatchResult(command, str(exc), is_error=True)
        count = store.count_selected()
        return DispatchResult(command, f"Exported {count} message(s) to {path}", artifact=path)

    if isinstance(command, Quit):
        return DispatchResult(command, quit=True)

    if isinstance(command, ToggleCurrent):
        value = engine.toggle_current(session.cursor)
        if value is None:
            return DispatchResult(command, "No message focused", is_error=True)
        state = "selected" if value else "deselected"
        return DispatchResult(command, f"#{session.cursor.focused_id} {state}")

    if isinstance(command, SelectAll):
        engine.select_all()
        return DispatchResult(command, f"Selected all {len(store)} message(s)")

    if isinstance(command, DeselectAll):
        engine.deselect_all()
        return DispatchResult(command, "Deselected all messages")

    if isinstance(command, ToggleRange):
        last = len(store) - 1
        bad = [i for i in (command.start, command.end) if i > last]
        if bad:
            return DispatchResult(
                command,
                f"Id {bad[0]} out of range (0..{last})" if last >= 0 else "Collection is empty",
                is_error=True,
            )
        n = engine.select_range(command.start, command.end, command.value)
        verb = "Selected" if command.value else "Deselected"
        return DispatchResult(command, f"{verb} {n} message(s)")

    if command.raw_text:
        logger.info("Rejected command: %r", command.raw_text)
        return DispatchResult(command, f"Unknown command: {command.raw_text}", is_error=True)
    return DispatchResult(command)
