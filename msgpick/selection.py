"""Selection operations over the message store."""
from __future__ import annotations

from typing import TYPE_CHECKING

from .store import MessageStore

if TYPE_CHECKING:
    from .cursor import Cursor


class SelectionEngine:
    """The only component that changes selection flags.

    Every operation delegates to the store, so the store's flags stay the
    single source of truth.
    """

    def __init__(self, store: MessageStore):
        self.store = store

    def toggle(self, message_id: int) -> bool:
        """Flip one flag and return the new value.

        Raises:
            InvalidId: message_id outside the collection
        """
        value = not self.store.is_selected(message_id)
        self.store.set_selected(message_id, value)
        return value

    def toggle_current(self, cursor: Cursor) -> bool | None:
        """Toggle the focused message; ``None`` when nothing is focused."""
        if cursor.focused_id is None:
            return None
        return self.toggle(cursor.focused_id)

    def select_all(self) -> None:
        self.store.set_all(True)

    def deselect_all(self) -> None:
        self.store.set_all(False)

    def select_range(self, id_a: int, id_b: int, value: bool) -> int:
        """Set the inclusive range between two ids, in either order.

        Returns:
            Number of messages in the range
        """
        lo, hi = min(id_a, id_b), max(id_a, id_b)
        self.store.set_range(lo, hi, value)
        return hi - lo + 1
