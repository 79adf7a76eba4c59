"""Keyboard input parsing and matching for the picker.

``parse_key`` names one raw input sequence (``"\\x1b[A"`` -> ``"up"``,
``"\\x0e"`` -> ``"ctrl+n"``) and ``matches_key`` compares raw input with a
key identifier written the way keybinding configuration spells it.
Only the legacy VT/xterm encodings are understood; the picker never turns on
an extended keyboard protocol.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    up = "up"
    down = "down"
    left = "left"
    right = "right"
    page_up = "pageUp"
    page_down = "pageDown"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# Modifier bits as encoded by xterm: the CSI parameter is ``bits + 1``
MODIFIERS: dict[str, int] = {"shift": 1, "alt": 2, "ctrl": 4}

KEY_ALIASES: dict[str, str] = {
    "esc": "escape",
    "return": "enter",
    "pageup": "pageUp",
    "pagedown": "pageDown",
}

# ---------------------------------------------------------------------------
# Sequence tables
# ---------------------------------------------------------------------------

_CSI_LETTERS = {"A": "up", "B": "down", "C": "right", "D": "left", "H": "home", "F": "end"}
_CSI_NUMBERS = {"2": "insert", "3": "delete", "5": "pageUp", "6": "pageDown"}

LEGACY_KEY_SEQUENCES: dict[str, str] = {
    **{f"\x1b[{letter}": name for letter, name in _CSI_LETTERS.items()},
    **{f"\x1bO{letter}": name for letter, name in _CSI_LETTERS.items()},
    **{f"\x1b[{number}~": name for number, name in _CSI_NUMBERS.items()},
    # rxvt and linux console spellings of home/end
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[7~": "home",
    "\x1b[8~": "end",
    "\x1bOM": "enter",
}


def _modified_sequences(modifier: int) -> dict[str, str]:
    """``CSI 1;<m>X`` and ``CSI n;<m>~`` forms of the navigation keys."""
    code = modifier + 1
    table = {f"\x1b[1;{code}{letter}": name for letter, name in _CSI_LETTERS.items()}
    table.update({f"\x1b[{number};{code}~": name for number, name in _CSI_NUMBERS.items()})
    return table


LEGACY_SHIFT_SEQUENCES = {**_modified_sequences(MODIFIERS["shift"]), "\x1b[Z": "tab"}
LEGACY_ALT_SEQUENCES = _modified_sequences(MODIFIERS["alt"])
LEGACY_CTRL_SEQUENCES = _modified_sequences(MODIFIERS["ctrl"])

# Every multi-byte sequence above, already spelled as a key id
_SEQUENCE_KEYS: dict[str, KeyId] = {
    **LEGACY_KEY_SEQUENCES,
    **{seq: f"alt+{name}" for seq, name in LEGACY_ALT_SEQUENCES.items()},
    **{seq: f"shift+{name}" for seq, name in LEGACY_SHIFT_SEQUENCES.items()},
    **{seq: f"ctrl+{name}" for seq, name in LEGACY_CTRL_SEQUENCES.items()},
}

_SINGLE_KEYS: dict[str, KeyId] = {
    "\x1b": "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x00": "ctrl+space",
}


def _ctrl_letter(ch: str) -> str | None:
    code = ord(ch)
    if 1 <= code <= 26:
        return chr(code + ord("a") - 1)
    return None


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_key_id(key_id: str) -> tuple[int, str] | None:
    """Split a key identifier like ``"ctrl+shift+a"`` into its components.

    Returns ``(modifiers, key)`` with *modifiers* as a bitmask (shift=1,
    alt=2, ctrl=4) and *key* in canonical spelling, or ``None`` for an empty
    identifier or an unknown modifier. Letters combined with ctrl or alt are
    case-insensitive.
    """
    if not key_id:
        return None
    if key_id == "+":
        return (0, "+")

    if key_id.endswith("++"):
        parts = key_id[:-2].split("+") + ["+"]
    else:
        parts = key_id.split("+")
    *mods, key = parts

    modifier = 0
    for mod in mods:
        bit = MODIFIERS.get(mod.lower())
        if bit is None:
            return None
        modifier |= bit

    key = KEY_ALIASES.get(key.lower(), key)
    if len(key) == 1 and modifier & (MODIFIERS["ctrl"] | MODIFIERS["alt"]):
        key = key.lower()
    return (modifier, key)


def parse_key(data: str) -> KeyId | None:
    """Name the key that produced *data*, or ``None`` if it is not a key.

    The result uses the ``matches_key`` spelling, e.g. ``"a"``,
    ``"ctrl+a"``, ``"shift+tab"``, ``"pageDown"``.
    """
    if not data:
        return None
    if data in _SEQUENCE_KEYS:
        return _SEQUENCE_KEYS[data]
    if data in _SINGLE_KEYS:
        return _SINGLE_KEYS[data]

    if len(data) == 1:
        letter = _ctrl_letter(data)
        if letter is not None:
            return f"ctrl+{letter}"
        return data if data.isprintable() else None

    # ESC prefix: alt + key
    if len(data) == 2 and data[0] == "\x1b":
        ch = data[1]
        if ch in _SINGLE_KEYS:
            return f"alt+{_SINGLE_KEYS[ch]}"
        letter = _ctrl_letter(ch)
        if letter is not None:
            return f"ctrl+alt+{letter}"
        if ch.isprintable():
            return f"alt+{ch.lower()}"

    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if raw input *data* is the key named by *key_id*.

    >>> matches_key("\\x1b[B", "down")
    True
    """
    expected = parse_key_id(key_id)
    return expected is not None and parse_key_id(parse_key(data) or "") == expected
