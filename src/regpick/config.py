"""Host-supplied settings for a picker session."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from regpick.keybindings import KeybindingsConfig

DEFAULT_PROMPT = "QUERY> "
PROMPT_ENV_VAR = "REGPICK_PROMPT"


def default_prompt() -> str:
    return os.environ.get(PROMPT_ENV_VAR, DEFAULT_PROMPT)


@dataclass
class PickerConfig:
    """Picker configuration."""

    prompt: str = field(default_factory=default_prompt)
    # Rows above the list: the query line
    header_rows: int = 1
    ignore_case: bool = False
    trim_blank: bool = False
    keybindings: KeybindingsConfig = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.header_rows < 1:
            raise ValueError(f"header_rows must be at least 1, got {self.header_rows}")

    def list_height(self, terminal_rows: int) -> int:
        """Rows left for items on a terminal with *terminal_rows* rows."""
        return max(1, terminal_rows - self.header_rows)
