"""Focus and scroll tracking for the message list."""
from __future__ import annotations

from .store import MessageStore


class Cursor:
    """Focused message id plus scroll offset.

    The window height belongs to the renderer and is passed into every
    move. Requests outside the collection clamp silently: browsing is never
    an error. On an empty collection `focused_id` stays ``None``.
    """

    def __init__(self, store: MessageStore):
        self.store = store
        self.focused_id: int | None = 0 if len(store) else None
        self.scroll_offset: int = 0

    def _count(self) -> int:
        return len(self.store)

    def _settle(self, target: int, window: int) -> None:
        count = self._count()
        if not count:
            self.focused_id = None
            self.scroll_offset = 0
            return
        self.focused_id = max(0, min(target, count - 1))
        self.reflow(window)

    def reflow(self, window: int) -> None:
        """Recompute `scroll_offset` so the focused row is inside the window."""
        if self.focused_id is None:
            self.scroll_offset = 0
            return
        window = max(1, int(window))
        if self.focused_id < self.scroll_offset:
            self.scroll_offset = self.focused_id
        elif self.focused_id >= self.scroll_offset + window:
            self.scroll_offset = self.focused_id - window + 1
        # Don't leave blank rows at the bottom after a grow/resize.
        max_offset = max(0, self._count() - window)
        self.scroll_offset = max(0, min(self.scroll_offset, max_offset, self.focused_id))

    def move_to(self, message_id: int, window: int) -> None:
        if self.focused_id is None:
            return
        self._settle(message_id, window)

    def move_next(self, window: int) -> None:
        if self.focused_id is None:
            return
        self._settle(self.focused_id + 1, window)

    def move_prev(self, window: int) -> None:
        if self.focused_id is None:
            return
        self._settle(self.focused_id - 1, window)

    def page_next(self, window: int) -> None:
        if self.focused_id is None:
            return
        self._settle(self.focused_id + max(1, window), window)

    def page_prev(self, window: int) -> None:
        if self.focused_id is None:
            return
        self._settle(self.focused_id - max(1, window), window)

    def move_first(self, window: int) -> None:
        self.move_to(0, window)

    def move_last(self, window: int) -> None:
        self.move_to(self._count() - 1, window)

    def visible_range(self, window: int) -> range:
        """Ids on screen for the given window height."""
        window = max(1, int(window))
        return range(self.scroll_offset, min(self._count(), self.scroll_offset + window))
