"""Error taxonomy shared by the core and the terminal front-end."""
from __future__ import annotations

from pathlib import Path


class MsgpickError(Exception):
    """Base class for every error raised by msgpick."""


class LoadError(MsgpickError):
    """The source collection could not be read or decoded.

    Fatal at startup: the session never starts with a partial collection.
    """

    def __init__(self, message: str, unit: str | None = None):
        self.unit = unit
        if unit:
            message = f"{message} (unit: {unit})"
        super().__init__(message)


class InvalidId(MsgpickError, IndexError):
    """A message id outside ``0..N-1`` reached the store.

    This is a caller defect, not a user error; the dispatcher never catches it.
    """

    def __init__(self, message_id: int, count: int):
        self.message_id = message_id
        self.count = count
        super().__init__(f"message id {message_id} out of range (collection has {count})")


class NothingSelected(MsgpickError):
    """Export was requested while no message is selected."""

    def __init__(self) -> None:
        super().__init__("Nothing selected: refusing to write an empty export")


class WriteError(MsgpickError):
    """The artifact could not be written or published."""

    def __init__(self, path: Path, cause: BaseException | None = None):
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Failed to write {path}{detail}")
