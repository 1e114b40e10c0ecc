from __future__ import annotations


class GrepError(RuntimeError):
    """Base class for every failure that aborts a grep run."""


class ConfigError(GrepError):
    pass


class SelectionError(ConfigError):
    """Raised when a single-file input does not match the file path pattern."""

    def __init__(self, path: str, pattern: str) -> None:
        super().__init__(f"Pattern Error: file path pattern {pattern!r} does not match input file {path!r}")
        self.path = path
        self.pattern = pattern


class GrepIOError(GrepError):
    pass


class PatternError(GrepError):
    def __init__(self, what: str, pattern: str, reason: str) -> None:
        super().__init__(f"Invalid {what} pattern {pattern!r}: {reason}")
        self.what = what
        self.pattern = pattern
