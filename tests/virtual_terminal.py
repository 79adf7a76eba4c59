"""Virtual terminal for testing -- implements the Terminal protocol in-memory.

This module provides a ``VirtualTerminal`` class that satisfies the
``regpick.terminal.Terminal`` protocol without performing any real I/O.
Every presented frame is captured for assertions and input events are
replayed from a script.
"""

from __future__ import annotations

from collections import deque

from regpick.errors import TerminalEventError
from regpick.events import Event, classify
from regpick.keybindings import KeybindingsManager
from regpick.terminal import Style


class VirtualTerminal:
    """In-memory terminal that records frames and replays scripted input.

    Parameters
    ----------
    rows:
        Number of terminal rows (height).
    columns:
        Number of terminal columns (width).
    """

    def __init__(self, rows: int = 24, columns: int = 80) -> None:
        self._rows = rows
        self._columns = columns
        self._cells: list[list[tuple[str, Style]]] = []
        self._events: deque[Event] = deque()
        self._resizes: dict[int, tuple[int, int]] = {}
        self._polls = 0
        self.cursor: tuple[int, int] = (0, 0)
        self.frames: list[list[list[tuple[str, Style]]]] = []
        self.cursors: list[tuple[int, int]] = []
        self.started = False
        self.stopped = False

    # -- Terminal protocol: properties --------------------------------------

    @property
    def rows(self) -> int:
        return self._rows

    @rows.setter
    def rows(self, value: int) -> None:
        self._rows = value

    @property
    def columns(self) -> int:
        return self._columns

    @columns.setter
    def columns(self, value: int) -> None:
        self._columns = value

    # -- lifecycle ----------------------------------------------------------

    def __enter__(self) -> VirtualTerminal:
        self.started = True
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stopped = True

    # -- Terminal protocol: drawing -----------------------------------------

    def clear(self) -> None:
        self._cells = [
            [(" ", Style.NORMAL)] * self._columns for _ in range(self._rows)
        ]

    def set_cell(self, x: int, y: int, ch: str, style: Style) -> None:
        if 0 <= y < len(self._cells) and 0 <= x < len(self._cells[y]):
            self._cells[y][x] = (ch, style)

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def present(self) -> None:
        self.frames.append([list(row) for row in self._cells])
        self.cursors.append(self.cursor)

    # -- Terminal protocol: input -------------------------------------------

    def poll_event(self) -> Event:
        """Pop the next scripted event.

        Raises ``TerminalEventError`` once the script is exhausted, the way a
        closed tty would.
        """
        self._polls += 1
        size = self._resizes.pop(self._polls, None)
        if size is not None:
            self._rows, self._columns = size
            return Event("other")
        if not self._events:
            raise TerminalEventError("no more scripted input")
        return self._events.popleft()

    # -- Test helpers -------------------------------------------------------

    def feed(self, *events: Event) -> VirtualTerminal:
        """Queue classified events."""
        self._events.extend(events)
        return self

    def feed_keys(
        self, *data: str, keybindings: KeybindingsManager | None = None
    ) -> VirtualTerminal:
        """Queue raw key sequences, classified with *keybindings*."""
        kb = keybindings or KeybindingsManager()
        self._events.extend(classify(d, kb) for d in data)
        return self

    def resize_on_poll(self, poll: int, rows: int, columns: int) -> None:
        """Change size when poll number *poll* (1-based) happens."""
        self._resizes[poll] = (rows, columns)

    def screen(self, frame: int = -1) -> list[str]:
        """Text of every row of a presented frame."""
        return ["".join(ch for ch, _ in row) for row in self.frames[frame]]

    def highlighted_rows(self, frame: int = -1) -> list[int]:
        """Rows drawn entirely in the highlight style."""
        return [
            y
            for y, row in enumerate(self.frames[frame])
            if row and all(style is Style.HIGHLIGHT for _, style in row)
        ]
