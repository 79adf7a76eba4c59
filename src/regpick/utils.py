"""Terminal text utilities: ANSI stripping, width measurement, truncation.

Every picker row is exactly one screen line, so the helpers here measure
text in terminal columns (grapheme clusters via ``grapheme``, column widths
via ``wcwidth``) and cut it at cluster boundaries.
"""

from __future__ import annotations

import re
import unicodedata

import grapheme
import wcwidth as _wcwidth

TAB_WIDTH = 3

# CSI (any final byte), OSC and APC strings terminated by BEL or ST
_ANSI_RE = re.compile(
    r"\x1b\[[0-?]*[ -/]*[@-~]"
    r"|\x1b\][^\x07\x1b]*(?:\x07|\x1b\\)"
    r"|\x1b_[^\x07\x1b]*(?:\x07|\x1b\\)"
)

# C0 and C1 controls except TAB
_CONTROL_RE = re.compile(r"[\x00-\x08\x0a-\x1f\x7f-\x9f]")

# ---------------------------------------------------------------------------
# Width cache
# ---------------------------------------------------------------------------

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _remember(text: str, width: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[text] = width
    return width


# ---------------------------------------------------------------------------
# Cluster width
# ---------------------------------------------------------------------------


def _is_emoji_cluster(cluster: str) -> bool:
    for ch in cluster:
        cp = ord(ch)
        # VS16, ZWJ, skin tones, regional indicators
        if cp in (0xFE0F, 0x200D) or 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return True
    first = ord(cluster[0])
    return first >= 0x1F000 or 0x2600 <= first <= 0x27BF


def cluster_width(cluster: str) -> int:
    """Columns taken by one grapheme cluster: 0, 1 or 2."""
    if not cluster:
        return 0
    if cluster == "\t":
        return TAB_WIDTH
    if len(cluster) > 1:
        if _is_emoji_cluster(cluster):
            return 2
        category = unicodedata.category(cluster[0])
        if category[0] == "M" or category == "Cf":
            return 0
    return max(_wcwidth.wcwidth(cluster[0]), 0)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def strip_ansi(text: str) -> str:
    """Remove CSI, OSC and APC escape sequences from *text*."""
    if "\x1b" not in text:
        return text
    return _ANSI_RE.sub("", text)


def sanitize_line(text: str) -> str:
    """Make *text* safe to draw on a single row.

    Tabs become ``TAB_WIDTH`` spaces; every other control character,
    including a stray ESC, is dropped.
    """
    return _CONTROL_RE.sub("", text.replace("\t", " " * TAB_WIDTH))


def visible_width(text: str) -> int:
    """Terminal columns needed to show *text*, escape sequences excluded."""
    text = strip_ansi(text)
    if text.isascii() and text.isprintable():
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached
    return _remember(text, sum(cluster_width(g) for g in grapheme.graphemes(text)))


def cell_chars(text: str) -> list[tuple[str, int]]:
    """Split *text* into ``(cluster, width)`` pairs for cell drawing.

    Zero-width clusters are kept so callers can attach them to the previous
    cell; wide clusters report a width of 2.
    """
    return [(g, cluster_width(g)) for g in grapheme.graphemes(text)]


def truncate_to_width(
    text: str,
    max_width: int,
    ellipsis: str = "",
    pad: bool = False,
) -> str:
    """Cut plain *text* down to *max_width* columns.

    When the text is too wide it is cut at a cluster boundary and *ellipsis*
    is appended inside the limit. With *pad* the result is filled up with
    spaces to exactly *max_width* columns; a wide cluster that no longer fits
    leaves a one-column gap that gets padded too.
    """
    if max_width <= 0:
        return ""

    width = visible_width(text)
    if width > max_width:
        room = max_width - visible_width(ellipsis)
        if room <= 0:
            text, ellipsis = ellipsis, ""
            room = max_width
        kept: list[str] = []
        used = 0
        for g, w in cell_chars(text):
            if used + w > room:
                break
            kept.append(g)
            used += w
        text = "".join(kept) + ellipsis
        width = used + visible_width(ellipsis)

    if pad and width < max_width:
        text += " " * (max_width - width)
    return text
