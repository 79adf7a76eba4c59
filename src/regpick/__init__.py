"""regpick: interactive line picker driven by a regular-expression query."""

# Configuration
from regpick.config import DEFAULT_PROMPT, PickerConfig

# Errors
from regpick.errors import (
    InvalidPatternError,
    RegpickError,
    TerminalError,
    TerminalEventError,
    TerminalInitError,
    TerminalWriteError,
)

# Input events
from regpick.events import Event, EventKind, classify

# Filtering
from regpick.filter import compile_query, filter_lines

# Keybindings
from regpick.keybindings import (
    DEFAULT_PICKER_KEYBINDINGS,
    KeybindingsManager,
    PickerAction,
    get_keybindings,
    set_keybindings,
)

# Keyboard input handling
from regpick.keys import Key, KeyId, matches_key, parse_key

# Selection session
from regpick.picker import Cancelled, Chosen, Picker, SessionResult

# Rendering
from regpick.render import DrawLine, FramePlan, draw_frame, plan_frame

# Input acquisition
from regpick.source import read_lines

# Input buffering
from regpick.stdin_buffer import StdinBuffer

# Terminal interface and implementation
from regpick.terminal import ProcessTerminal, Style, Terminal

# Utilities
from regpick.utils import strip_ansi, truncate_to_width, visible_width

# Viewport
from regpick.viewport import Viewport

__all__ = [
    # Configuration
    "DEFAULT_PROMPT",
    "PickerConfig",
    # Errors
    "InvalidPatternError",
    "RegpickError",
    "TerminalError",
    "TerminalEventError",
    "TerminalInitError",
    "TerminalWriteError",
    # Events
    "Event",
    "EventKind",
    "classify",
    # Filtering
    "compile_query",
    "filter_lines",
    # Keybindings
    "DEFAULT_PICKER_KEYBINDINGS",
    "KeybindingsManager",
    "PickerAction",
    "get_keybindings",
    "set_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Session
    "Cancelled",
    "Chosen",
    "Picker",
    "SessionResult",
    # Rendering
    "DrawLine",
    "FramePlan",
    "draw_frame",
    "plan_frame",
    # Source
    "read_lines",
    # Stdin buffer
    "StdinBuffer",
    # Terminal
    "ProcessTerminal",
    "Style",
    "Terminal",
    # Utilities
    "strip_ansi",
    "truncate_to_width",
    "visible_width",
    # Viewport
    "Viewport",
]
