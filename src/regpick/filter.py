"""Regular-expression filtering of the source lines."""

from __future__ import annotations

import re
from typing import Sequence

from regpick.errors import InvalidPatternError


def compile_query(query: str, *, ignore_case: bool = False) -> re.Pattern[str]:
    """Compile *query*, raising :class:`InvalidPatternError` on bad syntax."""
    flags = re.IGNORECASE if ignore_case else 0
    try:
        return re.compile(query, flags)
    except (re.error, OverflowError, RecursionError) as exc:
        # huge repeat counts and very deep nesting fail outside re.error
        raise InvalidPatternError(query, exc) from exc


def filter_lines(
    source: Sequence[str],
    query: str,
    *,
    ignore_case: bool = False,
) -> list[str]:
    """Return the lines of *source* matched anywhere by *query*, in order.

    An empty query matches everything. Every call rescans the whole source.
    """
    if not query:
        return list(source)

    pattern = compile_query(query, ignore_case=ignore_case)
    return [line for line in source if pattern.search(line)]
