"""Input events delivered to the picker and their classification."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from regpick.keybindings import KeybindingsManager, PickerAction

EventKind = Literal[
    "char",
    "delete",
    "up",
    "down",
    "confirm",
    "cancel",
    "paste",
    "other",
]

_ACTION_TO_KIND: dict[PickerAction, EventKind] = {
    "selectUp": "up",
    "selectDown": "down",
    "deleteCharBackward": "delete",
    "selectConfirm": "confirm",
    "selectCancel": "cancel",
}


@dataclass(frozen=True)
class Event:
    """One classified input event.

    ``text`` carries the typed character for ``"char"`` events and the
    pasted content for ``"paste"`` events; it is empty otherwise.
    """

    kind: EventKind
    text: str = ""


def char_event(ch: str) -> Event:
    return Event("char", ch)


def paste_event(text: str) -> Event:
    return Event("paste", text)


def classify(data: str, keybindings: KeybindingsManager) -> Event:
    """Turn one complete raw input sequence into an :class:`Event`.

    Bound keys win over literal characters, so rebinding a printable key to
    an action takes it out of the query alphabet.
    """
    action = keybindings.action_for(data)
    if action is not None:
        return Event(_ACTION_TO_KIND[action])
    if len(data) == 1 and data.isprintable():
        return char_event(data)
    return Event("other")
