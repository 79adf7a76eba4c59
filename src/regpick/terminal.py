"""Terminal abstraction for the picker.

Provides a ``Terminal`` protocol describing the drawing and input
capabilities the picker relies on, and a concrete ``ProcessTerminal`` that
drives the controlling tty with raw mode, the alternate screen, bracketed
paste and ANSI escape sequences.

Keys are read from ``/dev/tty`` rather than stdin so that the list of lines
can be piped into the process while the user still types at the terminal.
"""

from __future__ import annotations

import codecs
import logging
import os
import select
import signal
import termios
import tty
from collections import deque
from enum import Enum
from typing import Protocol

from regpick.errors import (
    TerminalError,
    TerminalEventError,
    TerminalInitError,
    TerminalWriteError,
)
from regpick.events import Event, classify, paste_event
from regpick.keybindings import KeybindingsManager, get_keybindings
from regpick.stdin_buffer import StdinBuffer
from regpick.utils import cell_chars

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# ANSI escape constants
# ---------------------------------------------------------------------------

_ALT_SCREEN_ENABLE = "\x1b[?1049h"
_ALT_SCREEN_DISABLE = "\x1b[?1049l"
_BRACKETED_PASTE_ENABLE = "\x1b[?2004h"
_BRACKETED_PASTE_DISABLE = "\x1b[?2004l"
_HIDE_CURSOR = "\x1b[?25l"
_SHOW_CURSOR = "\x1b[?25h"
_CLEAR_SCREEN = "\x1b[2J\x1b[H"
_MOVE_FMT = "\x1b[{};{}H"

# Time to wait for the rest of an escape sequence before treating a lone
# ESC as the escape key.
ESCAPE_TIMEOUT = 0.025


class Style(Enum):
    """The two attribute pairs the picker draws with."""

    NORMAL = "\x1b[0;37;40m"
    HIGHLIGHT = "\x1b[0;31;47m"


# ---------------------------------------------------------------------------
# Terminal protocol
# ---------------------------------------------------------------------------


class Terminal(Protocol):
    """Interface for the terminal capabilities the picker uses."""

    @property
    def columns(self) -> int: ...

    @property
    def rows(self) -> int: ...

    def clear(self) -> None: ...

    def set_cell(self, x: int, y: int, ch: str, style: Style) -> None: ...

    def set_cursor(self, x: int, y: int) -> None: ...

    def present(self) -> None: ...

    def poll_event(self) -> Event: ...


def draw_text(terminal: Terminal, y: int, text: str, style: Style) -> None:
    """Draw *text* from column 0 of row *y*, one grapheme per cell.

    Zero-width clusters are merged into the preceding cell; a wide cluster
    claims the following cell too, which is left empty.
    """
    x = 0
    prev = ""
    columns = terminal.columns
    for g, width in cell_chars(text):
        if width == 0:
            if x > 0:
                prev += g
                terminal.set_cell(x - 1, y, prev, style)
            continue
        if x + width > columns:
            break
        terminal.set_cell(x, y, g, style)
        if width == 2:
            terminal.set_cell(x + 1, y, "", style)
        prev = g
        x += width


# ---------------------------------------------------------------------------
# ProcessTerminal implementation
# ---------------------------------------------------------------------------


class ProcessTerminal:
    """Concrete terminal backed by the process's controlling tty.

    Use it as a context manager: entering switches the tty to raw mode and
    the alternate screen, leaving restores the previous state on every exit
    path.
    """

    def __init__(
        self,
        keybindings: KeybindingsManager | None = None,
        *,
        tty_path: str = "/dev/tty",
        escape_timeout: float = ESCAPE_TIMEOUT,
    ) -> None:
        self._keybindings = keybindings or get_keybindings()
        self._tty_path = tty_path
        self._escape_timeout = escape_timeout
        self._fd: int | None = None
        self._original_termios: list | None = None
        self._prev_sigwinch_handler: signal.Handlers | None = None
        self._wake_r: int | None = None
        self._wake_w: int | None = None
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
        self._stdin_buffer = StdinBuffer()
        self._events: deque[Event] = deque()
        self._cells: list[list[tuple[str, Style]]] = []
        self._cursor: tuple[int, int] = (0, 0)
        self._write_log_path: str = os.environ.get("REGPICK_WRITE_LOG", "")

        self._stdin_buffer.on_data(self._on_buffer_data)
        self._stdin_buffer.on_paste(self._on_buffer_paste)

    # -- context manager ----------------------------------------------------

    def __enter__(self) -> ProcessTerminal:
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    # -- properties ---------------------------------------------------------

    @property
    def columns(self) -> int:
        return self._size().columns

    @property
    def rows(self) -> int:
        return self._size().lines

    def _size(self) -> os.terminal_size:
        if self._fd is not None:
            try:
                return os.get_terminal_size(self._fd)
            except OSError:
                pass
        return os.terminal_size((80, 24))

    # -- start / stop -------------------------------------------------------

    def start(self) -> None:
        """Open the tty, enable raw mode, the alternate screen and paste mode."""
        try:
            self._fd = os.open(self._tty_path, os.O_RDWR | os.O_NOCTTY)
            self._original_termios = termios.tcgetattr(self._fd)
            tty.setraw(self._fd)
            self._install_sigwinch_handler()
            self._raw_write(
                _ALT_SCREEN_ENABLE + _BRACKETED_PASTE_ENABLE + _CLEAR_SCREEN
            )
        except (OSError, termios.error, TerminalError) as exc:
            # __exit__ does not run when __enter__ fails
            self.stop()
            raise TerminalInitError(
                f"cannot initialise terminal {self._tty_path}: {exc}"
            ) from exc

        logger.debug("terminal started on %s (%dx%d)", self._tty_path, self.columns, self.rows)

    def stop(self) -> None:
        """Restore terminal state and release the tty. Safe to call twice."""
        if self._fd is None:
            return

        try:
            if self._original_termios is not None:
                try:
                    self._raw_write(
                        _BRACKETED_PASTE_DISABLE + _SHOW_CURSOR + _ALT_SCREEN_DISABLE
                    )
                finally:
                    self._restore_mode()
        finally:
            self._remove_sigwinch_handler()
            os.close(self._fd)
            self._fd = None
            self._stdin_buffer.clear()
            self._events.clear()
            logger.debug("terminal stopped")

    def _restore_mode(self) -> None:
        original, self._original_termios = self._original_termios, None
        try:
            termios.tcsetattr(self._fd, termios.TCSADRAIN, original)
        except termios.error as exc:
            raise TerminalError(f"cannot restore terminal mode: {exc}") from exc

    # -- drawing ------------------------------------------------------------

    def clear(self) -> None:
        """Blank the back buffer, sized to the current terminal dimensions."""
        columns, rows = self.columns, self.rows
        self._cells = [[(" ", Style.NORMAL)] * columns for _ in range(rows)]

    def set_cell(self, x: int, y: int, ch: str, style: Style) -> None:
        if 0 <= y < len(self._cells) and 0 <= x < len(self._cells[y]):
            self._cells[y][x] = (ch, style)

    def set_cursor(self, x: int, y: int) -> None:
        self._cursor = (x, y)

    def present(self) -> None:
        """Write the back buffer to the screen and place the cursor."""
        out: list[str] = [_HIDE_CURSOR]
        for y, row in enumerate(self._cells):
            out.append(_MOVE_FMT.format(y + 1, 1))
            current: Style | None = None
            for ch, style in row:
                if style is not current:
                    out.append(style.value)
                    current = style
                out.append(ch)
        out.append("\x1b[0m")
        x, y = self._cursor
        out.append(_MOVE_FMT.format(y + 1, x + 1))
        out.append(_SHOW_CURSOR)
        self._raw_write("".join(out))

    # -- input --------------------------------------------------------------

    def poll_event(self) -> Event:
        """Block until the next input event and return it classified.

        A terminal resize wakes the call up and is reported as an ``"other"``
        event so the caller redraws at the new size.
        """
        if self._fd is None:
            raise TerminalEventError("terminal is not started")

        while not self._events:
            timeout = self._escape_timeout if self._stdin_buffer.pending else None
            watched = [self._fd]
            if self._wake_r is not None:
                watched.append(self._wake_r)
            try:
                ready, _, _ = select.select(watched, [], [], timeout)
            except (OSError, ValueError) as exc:
                raise TerminalEventError(f"waiting for input failed: {exc}") from exc

            if not ready:
                for sequence in self._stdin_buffer.flush():
                    self._on_buffer_data(sequence)
                continue

            if self._wake_r is not None and self._wake_r in ready:
                self._drain_wakeup()
                self._events.append(Event("other"))

            if self._fd in ready:
                self._read_input()

        return self._events.popleft()

    def _read_input(self) -> None:
        try:
            raw = os.read(self._fd, 4096)
        except OSError as exc:
            raise TerminalEventError(f"reading terminal input failed: {exc}") from exc
        if not raw:
            raise TerminalEventError("terminal input closed")
        self._stdin_buffer.process(self._decoder.decode(raw))

    def _on_buffer_data(self, data: str) -> None:
        self._events.append(classify(data, self._keybindings))

    def _on_buffer_paste(self, data: str) -> None:
        self._events.append(paste_event(data))

    # -- private: SIGWINCH --------------------------------------------------

    def _install_sigwinch_handler(self) -> None:
        self._wake_r, self._wake_w = os.pipe()
        os.set_blocking(self._wake_w, False)
        try:
            self._prev_sigwinch_handler = signal.signal(
                signal.SIGWINCH, self._on_sigwinch
            )
        except ValueError:
            # signal handlers can only be set from the main thread
            logger.debug("resize notifications unavailable outside the main thread")
            self._prev_sigwinch_handler = None

    def _remove_sigwinch_handler(self) -> None:
        if self._prev_sigwinch_handler is not None:
            signal.signal(signal.SIGWINCH, self._prev_sigwinch_handler)
            self._prev_sigwinch_handler = None
        for fd in (self._wake_r, self._wake_w):
            if fd is not None:
                os.close(fd)
        self._wake_r = self._wake_w = None

    def _on_sigwinch(self, signum: int, frame: object) -> None:
        if self._wake_w is not None:
            try:
                os.write(self._wake_w, b"\0")
            except BlockingIOError:
                pass

    def _drain_wakeup(self) -> None:
        try:
            os.read(self._wake_r, 512)
        except BlockingIOError:
            pass

    # -- private: raw write -------------------------------------------------

    def _raw_write(self, data: str) -> None:
        """Write directly to the tty, bypassing buffering."""
        if self._fd is None:
            return
        encoded = data.encode("utf-8")
        while encoded:
            try:
                written = os.write(self._fd, encoded)
            except OSError as exc:
                raise TerminalWriteError(f"writing to terminal failed: {exc}") from exc
            encoded = encoded[written:]

        if self._write_log_path:
            try:
                with open(self._write_log_path, "a", encoding="utf-8") as f:
                    f.write(data)
            except OSError:
                logger.debug("cannot append to write log %s", self._write_log_path)
