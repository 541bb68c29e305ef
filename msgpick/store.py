"""In-memory message index with per-message selection flags."""
from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .errors import InvalidId, LoadError
from .models import Message, RawUnit

logger = logging.getLogger(__name__)


def _decode(unit: RawUnit, ordinal: int) -> str:
    label = unit.source_label or f"#{ordinal}"
    content = unit.content
    if isinstance(content, str):
        try:
            content.encode("utf-8")
        except UnicodeEncodeError as exc:
            raise LoadError(f"Message is not valid UTF-8 text ({exc.reason})", unit=label) from exc
        return content
    if isinstance(content, (bytes, bytearray)):
        try:
            return bytes(content).decode("utf-8")
        except UnicodeDecodeError as exc:
            raise LoadError(f"Message is not valid UTF-8 text ({exc.reason})", unit=label) from exc
    raise LoadError(f"Unsupported message content type {type(content).__name__}", unit=label)


class MessageStore:
    """Ordered, immutable message collection plus mutable selection flags.

    Ids are the dense positions ``0..N-1`` in load order. Every message
    starts selected. Flags change only through `set_selected`, `set_all`
    and `set_range`; everything else reads.
    """

    def __init__(self, contents: list[str], labels: list[str | None] | None = None):
        self._contents: tuple[str, ...] = tuple(contents)
        if labels is None:
            labels = [None] * len(self._contents)
        if len(labels) != len(self._contents):
            raise ValueError("labels and contents must have the same length")
        self._labels: tuple[str | None, ...] = tuple(labels)
        self._flags: list[bool] = [True] * len(self._contents)
        self._selected_count = len(self._contents)

    @classmethod
    def load(cls, units: Iterable[RawUnit]) -> MessageStore:
        """Consume a loader stream once and build the collection.

        Any unit that cannot be read or decoded aborts the whole load; a
        partial collection would silently produce an incomplete export.

        Raises:
            LoadError: source unreadable or a unit is not text
        """
        contents: list[str] = []
        labels: list[str | None] = []
        ordinal = 0
        try:
            for unit in units:
                contents.append(_decode(unit, ordinal))
                labels.append(unit.source_label)
                ordinal += 1
        except OSError as exc:
            raise LoadError(f"Source unreadable after {ordinal} message(s): {exc}") from exc
        store = cls(contents, labels)
        logger.info("Loaded %d message(s)", len(store))
        return store

    def __len__(self) -> int:
        return len(self._contents)

    def __iter__(self) -> Iterator[Message]:
        return self.iter()

    def _check(self, message_id: int) -> None:
        if isinstance(message_id, bool) or not isinstance(message_id, int):
            raise InvalidId(message_id, len(self._contents))
        if not 0 <= message_id < len(self._contents):
            raise InvalidId(message_id, len(self._contents))

    def get(self, message_id: int) -> Message:
        self._check(message_id)
        return Message(
            id=message_id,
            content=self._contents[message_id],
            source_label=self._labels[message_id],
            selected=self._flags[message_id],
        )

    def iter(self, start: int = 0, stop: int | None = None) -> Iterator[Message]:
        """Yield messages in id order, reading each flag as it goes."""
        end = len(self._contents) if stop is None else min(stop, len(self._contents))
        for message_id in range(max(0, start), end):
            yield self.get(message_id)

    def is_selected(self, message_id: int) -> bool:
        self._check(message_id)
        return self._flags[message_id]

    def set_selected(self, message_id: int, value: bool) -> None:
        self._check(message_id)
        value = bool(value)
        if self._flags[message_id] == value:
            return
        self._flags[message_id] = value
        self._selected_count += 1 if value else -1

    def set_all(self, value: bool) -> None:
        value = bool(value)
        self._flags = [value] * len(self._contents)
        self._selected_count = len(self._contents) if value else 0

    def set_range(self, lo: int, hi: int, value: bool) -> None:
        """Set the inclusive id range ``[lo, hi]``; both ends must be valid."""
        self._check(lo)
        self._check(hi)
        if lo > hi:
            lo, hi = hi, lo
        for message_id in range(lo, hi + 1):
            self.set_selected(message_id, value)

    def count_selected(self) -> int:
        return self._selected_count

    def selected_ids(self) -> list[int]:
        """Ids currently selected, ascending. Always derived from live flags."""
        return [i for i, flag in enumerate(self._flags) if flag]
