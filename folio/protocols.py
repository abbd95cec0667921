"""Protocol definitions for Folio.

ContentProcessor depends on these interfaces rather than on the concrete
file-based classes, so discovery and parsing can be swapped out (for
example with in-memory fakes in tests).
"""

from __future__ import annotations

from abc import abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from .content import ContentDocument


@runtime_checkable
class ContentLoader(Protocol):
    """Protocol for discovering content files."""

    @abstractmethod
    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """List all content files.

        Args:
            include_drafts: Whether to include draft files.

        Returns:
            List of paths to content files.
        """
        ...


@runtime_checkable
class DocumentParser(Protocol):
    """Protocol for turning a content file into a ContentDocument."""

    @abstractmethod
    def parse(self, path: Path) -> ContentDocument:
        """Parse a content file.

        Args:
            path: Path to the content file.

        Returns:
            ContentDocument object.
        """
        ...
