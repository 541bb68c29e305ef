"""Abstract input events, independent of the terminal library."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class EventKind(str, Enum):
    CHAR = "char"
    NAV = "nav"
    MODE_TRIGGER = "mode_trigger"
    COMMIT = "commit"
    CANCEL = "cancel"
    BACKSPACE = "backspace"
    RESIZE = "resize"
    QUIT = "quit"


class Nav(str, Enum):
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"


@dataclass(frozen=True)
class InputEvent:
    kind: EventKind
    char: str | None = None
    nav: Nav | None = None
    rows: int | None = None

    @classmethod
    def key(cls, char: str) -> InputEvent:
        return cls(EventKind.CHAR, char=char)

    @classmethod
    def move(cls, nav: Nav) -> InputEvent:
        return cls(EventKind.NAV, nav=nav)

    @classmethod
    def resize(cls, rows: int) -> InputEvent:
        return cls(EventKind.RESIZE, rows=rows)


def text_events(text: str) -> list[InputEvent]:
    """Events for typing `text` character by character."""
    return [InputEvent.key(c) for c in text]
