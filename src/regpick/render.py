"""Projection of picker state onto screen rows.

``plan_frame`` turns the query, the filtered list and the viewport into the
exact lines to draw; ``draw_frame`` hands such a plan to a terminal. Neither
keeps any state of its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from regpick.terminal import Style, Terminal, draw_text
from regpick.utils import sanitize_line, truncate_to_width, visible_width
from regpick.viewport import Viewport


@dataclass(frozen=True)
class DrawLine:
    """One screen row: already truncated and padded to the frame width."""

    row: int
    text: str
    highlighted: bool = False


@dataclass(frozen=True)
class FramePlan:
    header: DrawLine
    items: list[DrawLine] = field(default_factory=list)
    cursor_x: int = 0
    cursor_y: int = 0
    # The cell under the text cursor is free (query not truncated)
    cursor_slot: bool = True


def fit_line(text: str, width: int) -> str:
    """Cut *text* to exactly *width* columns, padding with spaces."""
    return truncate_to_width(sanitize_line(text), width, "", pad=True)


def plan_frame(
    prompt: str,
    query: str,
    filtered: Sequence[str],
    viewport: Viewport,
    width: int,
    *,
    header_rows: int = 1,
) -> FramePlan:
    """Build the draw instructions for one frame.

    Row 0 holds the prompt and query; items start at row *header_rows*.
    Rows of the viewport past the end of the list get no instruction.
    """
    query_line = sanitize_line(prompt + query)
    header = DrawLine(0, truncate_to_width(query_line, width, "", pad=True))

    items = [
        DrawLine(
            header_rows + y,
            fit_line(filtered[viewport.offset + y], width),
            highlighted=y == viewport.cursor,
        )
        for y in range(viewport.visible_rows(len(filtered)))
    ]

    query_width = visible_width(query_line)
    return FramePlan(
        header=header,
        items=items,
        cursor_x=min(query_width, max(0, width - 1)),
        cursor_y=0,
        cursor_slot=query_width < width,
    )


def draw_frame(terminal: Terminal, plan: FramePlan) -> None:
    """Clear the terminal, draw every planned row and present the frame."""
    terminal.clear()
    for line in [plan.header, *plan.items]:
        style = Style.HIGHLIGHT if line.highlighted else Style.NORMAL
        draw_text(terminal, line.row, line.text, style)
    if plan.cursor_slot:
        terminal.set_cell(plan.cursor_x, plan.cursor_y, " ", Style.HIGHLIGHT)
    terminal.set_cursor(plan.cursor_x, plan.cursor_y)
    terminal.present()
