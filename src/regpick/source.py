"""Reading the candidate lines handed to the picker."""

from __future__ import annotations

from typing import Iterable

from regpick.utils import strip_ansi


def read_lines(stream: Iterable[str], *, trim_blank: bool = False) -> list[str]:
    """Collect the lines of *stream* with terminators and ANSI codes removed.

    With *trim_blank*, empty and whitespace-only lines are dropped.
    """
    lines: list[str] = []
    for raw in stream:
        line = strip_ansi(raw.rstrip("\r\n"))
        if trim_blank and not line.strip():
            continue
        lines.append(line)
    return lines
