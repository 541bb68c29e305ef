"""Plain value types passed between the loader, the store and the UI."""
from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class RawUnit:
    """One message as produced by a loader, before decoding.

    `content` may still be bytes; the store decodes it as UTF-8.
    """

    content: str | bytes
    source_label: str | None = None


@dataclass(frozen=True)
class Message:
    """Read-only view of a stored message.

    `selected` is the flag at the moment the view was read from the store;
    the store remains the only owner of the live flag.
    """

    id: int
    content: str
    source_label: str | None = field(default=None, compare=False)
    selected: bool = True

    @property
    def first_line(self) -> str:
        for line in self.content.splitlines():
            if line.strip():
                return line.strip()
        return ""
