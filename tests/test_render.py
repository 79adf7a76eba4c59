"""Tests for regpick.render -- frame planning and drawing."""

from __future__ import annotations

from regpick.render import DrawLine, draw_frame, fit_line, plan_frame
from regpick.terminal import Style
from regpick.utils import visible_width
from regpick.viewport import Viewport

from .virtual_terminal import VirtualTerminal

FRUIT = ["apple", "banana", "cherry"]


class TestFitLine:
    def test_pads_short_lines(self) -> None:
        assert fit_line("abc", 6) == "abc   "

    def test_truncates_long_lines_without_wrapping(self) -> None:
        assert fit_line("abcdefghij", 4) == "abcd"

    def test_wide_characters_never_overflow(self) -> None:
        line = fit_line("日本語", 5)
        assert line == "日本 "
        assert visible_width(line) == 5

    def test_tabs_and_control_characters(self) -> None:
        assert fit_line("a\tb\x07c", 8) == "a   bc  "


class TestPlanFrame:
    def test_header_is_prompt_and_query(self) -> None:
        plan = plan_frame("QUERY> ", "an", FRUIT, Viewport(height=5), 12)
        assert plan.header == DrawLine(0, "QUERY> an   ")
        assert (plan.cursor_x, plan.cursor_y) == (9, 0)
        assert plan.cursor_slot

    def test_items_below_header(self) -> None:
        plan = plan_frame("> ", "", FRUIT, Viewport(height=5), 8)
        assert plan.items == [
            DrawLine(1, "apple   ", highlighted=True),
            DrawLine(2, "banana  "),
            DrawLine(3, "cherry  "),
        ]

    def test_highlight_follows_cursor(self) -> None:
        plan = plan_frame("> ", "", FRUIT, Viewport(height=5, cursor=2), 8)
        assert [line.highlighted for line in plan.items] == [False, False, True]

    def test_only_window_is_planned(self) -> None:
        lines = [f"l{i}" for i in range(10)]
        plan = plan_frame("> ", "", lines, Viewport(height=3, offset=4, cursor=1), 4)
        assert [line.text for line in plan.items] == ["l4  ", "l5  ", "l6  "]
        assert [line.row for line in plan.items] == [1, 2, 3]
        assert plan.items[1].highlighted

    def test_rows_past_the_list_are_not_planned(self) -> None:
        plan = plan_frame("> ", "", ["only"], Viewport(height=10), 6)
        assert len(plan.items) == 1

    def test_empty_list_has_header_only(self) -> None:
        plan = plan_frame("> ", "zz", [], Viewport(height=4), 6)
        assert plan.items == []
        assert plan.header.text == "> zz  "

    def test_header_rows_shift_items(self) -> None:
        plan = plan_frame("> ", "", FRUIT, Viewport(height=2), 8, header_rows=2)
        assert [line.row for line in plan.items] == [2, 3]

    def test_long_query_is_truncated(self) -> None:
        plan = plan_frame("> ", "abcdefgh", FRUIT, Viewport(height=2), 6)
        assert plan.header.text == "> abcd"
        assert plan.cursor_x == 5
        assert not plan.cursor_slot


class TestDrawFrame:
    def test_draws_header_items_and_cursor(self) -> None:
        term = VirtualTerminal(rows=5, columns=10)
        plan = plan_frame("Q> ", "a", FRUIT, Viewport(height=4, cursor=1), 10)
        draw_frame(term, plan)

        assert len(term.frames) == 1
        assert term.screen() == [
            "Q> a      ",
            "apple     ",
            "banana    ",
            "cherry    ",
            "          ",
        ]
        assert term.highlighted_rows() == [2]
        assert term.cursors[-1] == (4, 0)

    def test_cursor_slot_is_highlighted(self) -> None:
        term = VirtualTerminal(rows=3, columns=10)
        draw_frame(term, plan_frame("> ", "x", FRUIT, Viewport(height=2), 10))
        header = term.frames[-1][0]
        assert header[3] == (" ", Style.HIGHLIGHT)
        assert header[2] == ("x", Style.NORMAL)

    def test_redraw_overwrites_previous_frame(self) -> None:
        term = VirtualTerminal(rows=4, columns=8)
        draw_frame(term, plan_frame("> ", "", FRUIT, Viewport(height=3), 8))
        draw_frame(term, plan_frame("> ", "an", ["banana"], Viewport(height=3), 8))
        assert term.screen() == ["> an    ", "banana  ", "        ", "        "]

    def test_wide_characters_take_two_cells(self) -> None:
        term = VirtualTerminal(rows=2, columns=6)
        draw_frame(term, plan_frame("> ", "", ["日本x"], Viewport(height=1), 6))
        row = term.frames[-1][1]
        assert [ch for ch, _ in row] == ["日", "", "本", "", "x", " "]
