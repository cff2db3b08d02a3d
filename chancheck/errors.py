# Per-file failures raised while loading Go sources for analysis.

from pathlib import Path


class ChancheckError(Exception):
    """Base class for errors tied to a single source file."""

    def __init__(self, path: Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.message = message


class SourceReadError(ChancheckError):
    """The file could not be read (missing, permission denied, ...)."""


class SourceParseError(ChancheckError):
    """The file was read but the Go grammar reported syntax errors."""

    def __init__(self, path: Path, message: str, line: int, column: int) -> None:
        super().__init__(path, f"{line}:{column}: {message}")
        self.line = line
        self.column = column
