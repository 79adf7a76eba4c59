"""Sliding-window viewport over the filtered list.

The window scrolls one row at a time. While the window has slack the cursor
row moves; once the cursor reaches the last visible row (or the first), the
list scrolls underneath it instead. Nothing wraps around.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Viewport:
    """Visible window of ``height`` rows starting at list index ``offset``.

    ``cursor`` is the highlighted row inside the window, so the selected list
    index is ``offset + cursor``. Operations take ``count``, the current
    length of the filtered list, since the list changes under the viewport.
    """

    height: int
    offset: int = 0
    cursor: int = 0

    def __post_init__(self) -> None:
        if self.height < 1:
            raise ValueError(f"viewport height must be positive, got {self.height}")

    def reset(self) -> None:
        self.offset = 0
        self.cursor = 0

    def visible_rows(self, count: int) -> int:
        """Number of list items currently shown in the window."""
        return max(0, min(self.height, count - self.offset))

    def move_up(self, count: int) -> None:
        if count == 0:
            return
        if self.cursor > 0:
            self.cursor -= 1
        elif self.offset > 0:
            self.offset -= 1

    def move_down(self, count: int) -> None:
        if count == 0:
            return
        last_row = self.visible_rows(count) - 1
        if self.cursor == last_row:
            if self.offset + self.height < count:
                self.offset = min(self.offset + 1, max(0, count - self.height))
        else:
            self.cursor = min(
                self.cursor + 1,
                min(count - self.offset - 1, self.height - 1),
            )

    def selected_index(self, count: int) -> int | None:
        """Index of the highlighted item, or ``None`` for an empty list."""
        if count == 0:
            return None
        return self.offset + self.cursor

    def resize(self, height: int, count: int) -> None:
        """Adopt a new window height, keeping the selected item on screen."""
        if height < 1:
            raise ValueError(f"viewport height must be positive, got {height}")
        self.height = height
        if count == 0:
            self.reset()
            return

        selected = min(self.offset + self.cursor, count - 1)
        self.offset = min(self.offset, max(0, count - height))
        if selected < self.offset:
            self.offset = selected
        elif selected >= self.offset + height:
            self.offset = selected - height + 1
        self.cursor = selected - self.offset
