"""Tests for regpick.keybindings and event classification."""

from __future__ import annotations

import pytest

from regpick.events import Event, classify
from regpick.keybindings import (
    DEFAULT_PICKER_KEYBINDINGS,
    KeybindingsManager,
    get_keybindings,
    set_keybindings,
)


class TestDefaults:
    def test_every_action_has_keys(self):
        kb = KeybindingsManager()
        for action in DEFAULT_PICKER_KEYBINDINGS:
            assert kb.get_keys(action)

    @pytest.mark.parametrize(
        "data,action",
        [
            ("\x1b[A", "selectUp"),
            ("\x10", "selectUp"),
            ("\x1b[B", "selectDown"),
            ("\x0e", "selectDown"),
            ("\x7f", "deleteCharBackward"),
            ("\r", "selectConfirm"),
            ("\x1b", "selectCancel"),
            ("\x03", "selectCancel"),
            ("\x07", "selectCancel"),
        ],
    )
    def test_default_bindings(self, data, action):
        kb = KeybindingsManager()
        assert kb.matches(data, action)
        assert kb.action_for(data) == action

    def test_unbound_input(self):
        kb = KeybindingsManager()
        assert kb.action_for("x") is None
        assert kb.action_for("\x1b[C") is None


class TestOverrides:
    def test_override_replaces_defaults(self):
        kb = KeybindingsManager({"selectDown": ["j", "down"]})
        assert kb.matches("j", "selectDown")
        assert kb.matches("\x1b[B", "selectDown")
        assert not kb.matches("\x0e", "selectDown")

    def test_single_key_override(self):
        kb = KeybindingsManager({"selectConfirm": "tab"})
        assert kb.get_keys("selectConfirm") == ["tab"]
        assert kb.matches("\t", "selectConfirm")
        assert not kb.matches("\r", "selectConfirm")

    def test_set_config_rebuilds_from_defaults(self):
        kb = KeybindingsManager({"selectConfirm": "tab"})
        kb.set_config({})
        assert kb.matches("\r", "selectConfirm")

    def test_unknown_action_rejected(self):
        with pytest.raises(ValueError):
            KeybindingsManager({"launchRockets": "x"})  # type: ignore[dict-item]

    def test_empty_key_list_unbinds(self):
        kb = KeybindingsManager({"selectCancel": []})
        assert not kb.matches("\x1b", "selectCancel")


class TestGlobalManager:
    def test_get_returns_same_instance(self):
        assert get_keybindings() is get_keybindings()

    def test_set_replaces_instance(self):
        previous = get_keybindings()
        custom = KeybindingsManager({"selectUp": "k"})
        try:
            set_keybindings(custom)
            assert get_keybindings() is custom
        finally:
            set_keybindings(previous)


class TestClassify:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("a", Event("char", "a")),
            (" ", Event("char", " ")),
            ("(", Event("char", "(")),
            ("\x1b[A", Event("up")),
            ("\x1b[B", Event("down")),
            ("\x7f", Event("delete")),
            ("\r", Event("confirm")),
            ("\x1b", Event("cancel")),
            ("\x03", Event("cancel")),
            ("\x1b[C", Event("other")),
            ("\t", Event("other")),
            ("\x1bb", Event("other")),
        ],
    )
    def test_default_classification(self, data, expected):
        assert classify(data, KeybindingsManager()) == expected

    def test_bound_printable_key_is_not_a_char(self):
        kb = KeybindingsManager({"selectDown": ["j", "down"]})
        assert classify("j", kb) == Event("down")
        assert classify("k", kb) == Event("char", "k")
