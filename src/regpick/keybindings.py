"""Picker keybindings manager."""

from __future__ import annotations

from typing import Literal

from regpick.keys import KeyId, matches_key

PickerAction = Literal[
    # Navigation
    "selectUp",
    "selectDown",
    # Query editing
    "deleteCharBackward",
    # Session end
    "selectConfirm",
    "selectCancel",
]

KeybindingsConfig = dict[PickerAction, KeyId | list[KeyId]]

DEFAULT_PICKER_KEYBINDINGS: dict[PickerAction, KeyId | list[KeyId]] = {
    "selectUp": ["up", "ctrl+p"],
    "selectDown": ["down", "ctrl+n"],
    "deleteCharBackward": "backspace",
    "selectConfirm": "enter",
    "selectCancel": ["escape", "ctrl+c", "ctrl+g"],
}


class KeybindingsManager:
    """Manages keybindings for the picker."""

    def __init__(self, config: KeybindingsConfig | None = None) -> None:
        self._action_to_keys: dict[PickerAction, list[KeyId]] = {}
        self._build_maps(config or {})

    def _build_maps(self, config: KeybindingsConfig) -> None:
        self._action_to_keys.clear()

        # Start with defaults
        for action, keys in DEFAULT_PICKER_KEYBINDINGS.items():
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

        # Override with user config
        for action, keys in config.items():
            if action not in DEFAULT_PICKER_KEYBINDINGS:
                raise ValueError(f"Unknown picker action: {action!r}")
            key_array = keys if isinstance(keys, list) else [keys]
            self._action_to_keys[action] = list(key_array)

    def matches(self, data: str, action: PickerAction) -> bool:
        """Check if input matches a specific action."""
        keys = self._action_to_keys.get(action)
        if not keys:
            return False
        return any(matches_key(data, key) for key in keys)

    def action_for(self, data: str) -> PickerAction | None:
        """Return the first action bound to *data*, or ``None``."""
        for action in self._action_to_keys:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: PickerAction) -> list[KeyId]:
        """Get keys bound to an action."""
        return self._action_to_keys.get(action, [])

    def set_config(self, config: KeybindingsConfig) -> None:
        """Update configuration."""
        self._build_maps(config)


_global_keybindings: KeybindingsManager | None = None


def get_keybindings() -> KeybindingsManager:
    global _global_keybindings
    if _global_keybindings is None:
        _global_keybindings = KeybindingsManager()
    return _global_keybindings


def set_keybindings(manager: KeybindingsManager) -> None:
    global _global_keybindings
    _global_keybindings = manager
