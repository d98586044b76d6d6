from __future__ import annotations

"""
Error taxonomy for the logging configuration layer.

Direct setters raise these; the chaining layer catches them and reports
them to the diagnostic channel instead.
"""


class ChainlogError(Exception):
    """Base class for every error raised by chainlog."""


class InvalidPathError(ChainlogError):
    """The logging directory cannot be used or created."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"invalid logging path '{path}': {reason}")
        self.path = path
        self.reason = reason


class UnknownLevelError(ChainlogError):
    """A level name does not resolve to a known level."""

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown logging level name '{name}'")
        self.name = name


class ConfigError(ChainlogError):
    """A configuration mapping carries a value of the wrong shape."""
