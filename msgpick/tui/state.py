"""Session state owned by the application loop."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from ..commands import CommandInterpreter, DispatchResult
from ..cursor import Cursor
from ..selection import SelectionEngine
from ..store import MessageStore


@dataclass
class Status:
    """Transient line shown under the list until the next keystroke."""

    text: str
    is_error: bool = False


@dataclass
class Session:
    """Everything one interactive run works on.

    The loop owns this object and hands it to each component for the
    duration of a single event; nothing keeps its own copy of the store.
    """

    store: MessageStore
    cursor: Cursor
    selection: SelectionEngine
    export_path: Path
    interpreter: CommandInterpreter = field(default_factory=CommandInterpreter)
    status: Status | None = None
    running: bool = True
    # List rows available on screen; refreshed by the renderer on resize.
    window: int = 20
    last_result: DispatchResult | None = None
    exports: list[Path] = field(default_factory=list)

    @classmethod
    def create(cls, store: MessageStore, export_path: Path, window: int = 20) -> Session:
        return cls(
            store=store,
            cursor=Cursor(store),
            selection=SelectionEngine(store),
            export_path=Path(export_path),
            window=max(1, window),
        )

    def notify(self, text: str | None, is_error: bool = False) -> None:
        self.status = Status(text, is_error) if text else None
