"""StdinBuffer buffers terminal input and emits complete key sequences.

A read from the tty can end in the middle of an escape sequence, e.g. only
``ESC [`` of an arrow key. Those bytes are held back until the sequence is
complete so they are never mistaken for an Escape keypress followed by
literal characters.

The buffer never waits on its own: the reader decides how long to wait for
the rest of a sequence and calls :meth:`StdinBuffer.flush` once it gives up.
"""

from __future__ import annotations

import re
from typing import Callable, Literal

ESC = "\x1b"
BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"

SequenceStatus = Literal["complete", "incomplete", "not-escape"]

_SGR_MOUSE_RE = re.compile(r"<\d+;\d+;\d+[Mm]")
_ST = ESC + "\\"


def sequence_status(data: str) -> SequenceStatus:
    """Classify *data* as a complete escape sequence, a prefix of one, or text."""
    if not data.startswith(ESC):
        return "not-escape"
    if len(data) == 1:
        return "incomplete"

    introducer, body = data[1], data[2:]
    if introducer == "[":
        return _csi_status(body)
    if introducer == "]":
        # OSC may also end with BEL
        done = data.endswith(_ST) or data.endswith("\x07")
    elif introducer in "P_":
        # DCS, APC
        done = data.endswith(_ST)
    elif introducer == "O":
        # SS3: one final character
        done = len(body) >= 1
    else:
        # ESC + key is an alt/meta combination
        done = True
    return "complete" if done else "incomplete"


def _csi_status(body: str) -> SequenceStatus:
    if body.startswith("M"):
        # X10 mouse report: three raw bytes follow
        return "complete" if len(body) >= 4 else "incomplete"
    if not body or not "\x40" <= body[-1] <= "\x7e":
        return "incomplete"
    if body.startswith("<") and not _SGR_MOUSE_RE.fullmatch(body):
        return "incomplete"
    return "complete"


def split_sequences(data: str) -> tuple[list[str], str]:
    """Split *data* into complete sequences and an unfinished tail.

    Plain characters come out one per item.
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        if data[pos] != ESC:
            sequences.append(data[pos])
            pos += 1
            continue
        for end in range(pos + 1, len(data) + 1):
            if sequence_status(data[pos:end]) == "complete":
                sequences.append(data[pos:end])
                pos = end
                break
        else:
            return sequences, data[pos:]
    return sequences, ""


class StdinBuffer:
    """Turns raw tty chunks into key sequences and paste payloads.

    Sequences go to the ``on_data`` callback one at a time; text between
    bracketed paste markers goes to ``on_paste`` in one piece.
    """

    def __init__(self) -> None:
        self._buffer = ""
        self._paste: str | None = None
        self._on_data: Callable[[str], None] | None = None
        self._on_paste: Callable[[str], None] | None = None

    def on_data(self, callback: Callable[[str], None]) -> None:
        self._on_data = callback

    def on_paste(self, callback: Callable[[str], None]) -> None:
        self._on_paste = callback

    @property
    def pending(self) -> bool:
        """True while an escape sequence or a paste is only partly received."""
        return bool(self._buffer) or self._paste is not None

    def process(self, data: str) -> None:
        """Feed one chunk of decoded tty input."""
        while data:
            if self._paste is not None:
                data = self._continue_paste(data)
                continue

            self._buffer += data
            data = ""
            start = self._buffer.find(BRACKETED_PASTE_START)
            if start != -1:
                before = self._buffer[:start]
                data = self._buffer[start + len(BRACKETED_PASTE_START) :]
                self._buffer = ""
                self._paste = ""
                # a sequence left unfinished by the paste marker is dropped
                self._emit_all(split_sequences(before)[0])
                continue

            sequences, self._buffer = split_sequences(self._buffer)
            self._emit_all(sequences)

    def _continue_paste(self, data: str) -> str:
        """Add *data* to the open paste; return whatever follows its end."""
        assert self._paste is not None
        self._paste += data
        end = self._paste.find(BRACKETED_PASTE_END)
        if end == -1:
            return ""
        content = self._paste[:end]
        rest = self._paste[end + len(BRACKETED_PASTE_END) :]
        self._paste = None
        if self._on_paste:
            self._on_paste(content)
        return rest

    def _emit_all(self, sequences: list[str]) -> None:
        if self._on_data:
            for sequence in sequences:
                self._on_data(sequence)

    def flush(self) -> list[str]:
        """Give up waiting and return the buffered bytes as one sequence.

        An unterminated paste is delivered to ``on_paste`` as it stands.
        """
        if self._paste is not None:
            content, self._paste = self._paste, None
            if self._on_paste:
                self._on_paste(content)
            return []
        if not self._buffer:
            return []
        sequence, self._buffer = self._buffer, ""
        return [sequence]

    def clear(self) -> None:
        self._buffer = ""
        self._paste = None

    def get_buffer(self) -> str:
        return self._buffer
