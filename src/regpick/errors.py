"""Exception hierarchy for regpick."""

from __future__ import annotations


class RegpickError(Exception):
    """Base class for errors raised by regpick."""


class InvalidPatternError(RegpickError):
    """The query does not compile as a regular expression."""

    def __init__(self, query: str, cause: Exception) -> None:
        super().__init__(f"invalid pattern {query!r}: {cause}")
        self.query = query
        self.cause = cause


class TerminalError(RegpickError):
    """The terminal driver failed; the session cannot continue."""


class TerminalInitError(TerminalError):
    """The terminal could not be opened or switched to raw mode."""


class TerminalEventError(TerminalError):
    """Reading the next input event from the terminal failed."""


class TerminalWriteError(TerminalError):
    """Writing to the terminal failed, e.g. after a hangup."""
