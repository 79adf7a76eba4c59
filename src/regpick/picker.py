"""Interactive selection session: query editing, filtering and navigation.

A :class:`Picker` owns the query, the filtered list and the viewport. It is
driven one :class:`~regpick.events.Event` at a time, either directly through
:meth:`Picker.handle_event` or by :meth:`Picker.run`, which alternates
between drawing a frame and blocking on the terminal for the next event
until the session ends with a :class:`Chosen` or :class:`Cancelled` result.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence, Union

from regpick.config import PickerConfig
from regpick.errors import InvalidPatternError
from regpick.events import Event
from regpick.filter import filter_lines
from regpick.render import FramePlan, draw_frame, plan_frame
from regpick.terminal import Terminal
from regpick.viewport import Viewport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Chosen:
    text: str


@dataclass(frozen=True)
class Cancelled:
    pass


SessionResult = Union[Chosen, Cancelled]


class Picker:
    """Selection state machine over an immutable list of lines."""

    def __init__(
        self,
        lines: Sequence[str],
        config: PickerConfig | None = None,
        *,
        height: int = 1,
    ) -> None:
        self._config = config or PickerConfig()
        self._lines: tuple[str, ...] = tuple(lines)
        self._query = ""
        self._filtered: list[str] = list(self._lines)
        self._viewport = Viewport(height=height)
        self._result: SessionResult | None = None

    # -- state --------------------------------------------------------------

    @property
    def lines(self) -> tuple[str, ...]:
        return self._lines

    @property
    def query(self) -> str:
        return self._query

    @property
    def filtered(self) -> list[str]:
        return list(self._filtered)

    @property
    def viewport(self) -> Viewport:
        return self._viewport

    @property
    def result(self) -> SessionResult | None:
        return self._result

    @property
    def running(self) -> bool:
        return self._result is None

    def selected(self) -> str | None:
        """The highlighted line, or ``None`` when nothing matches."""
        index = self._viewport.selected_index(len(self._filtered))
        if index is None:
            return None
        return self._filtered[index]

    # -- event handling -----------------------------------------------------

    def handle_event(self, event: Event) -> SessionResult | None:
        """Apply one event. Returns the session result once it is decided."""
        if self._result is not None:
            raise RuntimeError("picker session already finished")

        count = len(self._filtered)
        if event.kind == "char":
            self._insert(event.text)
        elif event.kind == "paste":
            for ch in event.text:
                if ch.isprintable():
                    self._insert(ch)
        elif event.kind == "delete":
            self._delete()
        elif event.kind == "up":
            self._viewport.move_up(count)
        elif event.kind == "down":
            self._viewport.move_down(count)
        elif event.kind == "confirm":
            selected = self.selected()
            self._result = Cancelled() if selected is None else Chosen(selected)
        elif event.kind == "cancel":
            self._result = Cancelled()

        return self._result

    def _insert(self, ch: str) -> None:
        self._query += ch
        self._refilter()

    def _delete(self) -> None:
        if not self._query:
            return
        self._query = self._query[:-1]
        self._refilter()

    def _refilter(self) -> None:
        try:
            self._filtered = filter_lines(
                self._lines, self._query, ignore_case=self._config.ignore_case
            )
        except InvalidPatternError as exc:
            # Keep the last valid list so the user can type on towards a
            # pattern that compiles.
            logger.debug("%s; keeping %d previous matches", exc, len(self._filtered))
            return
        self._viewport.reset()

    # -- rendering / loop ---------------------------------------------------

    def resize(self, terminal_rows: int) -> None:
        """Fit the viewport to a terminal with *terminal_rows* rows."""
        self._viewport.resize(
            self._config.list_height(terminal_rows), len(self._filtered)
        )

    def frame(self, width: int) -> FramePlan:
        return plan_frame(
            self._config.prompt,
            self._query,
            self._filtered,
            self._viewport,
            width,
            header_rows=self._config.header_rows,
        )

    def run(self, terminal: Terminal) -> SessionResult:
        """Drive the session on *terminal* until it is chosen or cancelled.

        Terminal errors propagate unchanged; restoring the terminal is the
        job of whoever opened it.
        """
        logger.debug("picker session started with %d lines", len(self._lines))
        while True:
            self.resize(terminal.rows)
            draw_frame(terminal, self.frame(terminal.columns))
            result = self.handle_event(terminal.poll_event())
            if result is not None:
                logger.debug("picker session finished: %r", result)
                return result
