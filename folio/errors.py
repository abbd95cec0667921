"""Exception types raised by Folio."""

from __future__ import annotations

from pathlib import Path


class FolioError(Exception):
    """Base class for all Folio errors."""


class MalformedDocumentError(FolioError):
    """A content file has a front matter block that cannot be read.

    Attributes:
        source_path: Path to the offending file, if known.
        message: Human-readable error message.
        line: 1-based line number in the file, if known.
        original_error: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        source_path: Path | None = None,
        line: int | None = None,
        original_error: Exception | None = None,
    ):
        self.source_path = source_path
        self.message = message
        self.line = line
        self.original_error = original_error
        super().__init__(self._format())

    def _format(self) -> str:
        location = ""
        if self.source_path is not None:
            location = str(self.source_path)
        if self.line is not None:
            location = f"{location}:{self.line}" if location else f"line {self.line}"
        return f"{location}: {self.message}" if location else self.message


class ConfigError(FolioError):
    """The project configuration file is invalid."""
