"""Content documents for Folio.

This module turns content files into ContentDocument objects: the metadata
from the front matter block plus the untouched body text.

Key classes:
- ContentDocument: Dataclass representing one content file.
- FileContentLoader: Implementation of ContentLoader protocol for file-based content.
- ContentProcessor: Facade for discovering and loading every document in a directory.

Key functions:
- parse_document: Build a ContentDocument from raw text.
- load_document: Read a file and build a ContentDocument from it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from .config import load_config
from .frontmatter import Metadata, MetadataValue, dump_frontmatter, split_frontmatter
from .protocols import ContentLoader, DocumentParser
from .utils import (
    extract_date_from_name,
    is_content_file,
    is_internal_path,
    parse_date,
    slugify,
    titleize,
)

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS = (".md", ".markdown")


@dataclass
class ContentDocument:
    """A content file split into front matter metadata and body.

    Attributes:
        metadata: Front matter keys mapped to strings or lists of strings.
        body: Everything after the closing delimiter, verbatim.
        path: Path to the source file, or None when parsed from text.
    """

    metadata: Metadata = field(default_factory=dict)
    body: str = ""
    path: Path | None = None

    def get(self, key: str, default: MetadataValue | None = None) -> MetadataValue | None:
        return self.metadata.get(key, default)

    def _scalar(self, key: str) -> str | None:
        value = self.metadata.get(key)
        if isinstance(value, list):
            return ", ".join(value)
        return value

    @property
    def title(self) -> str:
        """Front matter title, falling back to the titleized filename."""
        title = self._scalar("title")
        if title:
            return title
        if self.path is not None:
            return titleize(self.path.name)
        return "Untitled"

    @property
    def date(self) -> str | None:
        return self._scalar("date")

    @property
    def layout(self) -> str | None:
        return self._scalar("layout")

    @property
    def tldr(self) -> str | None:
        return self._scalar("tldr")

    @property
    def description(self) -> str | None:
        return self._scalar("description")

    @property
    def tags(self) -> list[str]:
        """Tags as a list; a single string value counts as one tag."""
        value = self.metadata.get("tags")
        if isinstance(value, list):
            return list(value)
        if value:
            return [value]
        return []

    @property
    def published(self) -> datetime | None:
        """Publication date from the ``date`` key or the filename prefix.

        An unparseable ``date`` value yields None; the filename is only
        consulted when there is no ``date`` key.
        """
        if self.date is not None:
            return parse_date(self.date)
        if self.path is not None:
            return extract_date_from_name(self.path.stem)
        return None

    @property
    def slug(self) -> str:
        if self.path is None:
            return "index"
        return slugify(self.path.stem)

    @property
    def draft(self) -> bool:
        return self.path is not None and self.path.name.startswith("_")

    def to_text(self) -> str:
        """Reconstruct the document text from metadata and body."""
        return dump_frontmatter(self.metadata, self.body)


def parse_document(text: str, path: Path | None = None) -> ContentDocument:
    """Build a ContentDocument from raw text.

    Args:
        text: Raw document content.
        path: Optional source path, kept on the document and used in errors.

    Returns:
        ContentDocument instance.

    Raises:
        MalformedDocumentError: If the front matter block cannot be read.
    """
    metadata, body = split_frontmatter(text, source=path)
    return ContentDocument(metadata=metadata, body=body, path=path)


def load_document(path: Path, encoding: str = "utf-8") -> ContentDocument:
    """Read a content file and build a ContentDocument from it.

    Args:
        path: Path to the content file.
        encoding: Text encoding of the file.

    Returns:
        ContentDocument instance.

    Raises:
        MalformedDocumentError: If the front matter block cannot be read.
    """
    logger.debug("Loading %s", path)
    return parse_document(path.read_text(encoding=encoding), path=path)


class FileContentLoader:
    """Discovers content files in a directory.

    Directories whose name starts with ``_`` are skipped entirely; files
    starting with ``_`` are drafts and only included on request.

    Attributes:
        content_dir: Directory containing content files.
        extensions: Accepted file suffixes.
    """

    def __init__(self, content_dir: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS):
        """Initialize the content loader.

        Args:
            content_dir: Path to the content directory.
            extensions: Accepted file suffixes, e.g. ``(".md",)``.
        """
        self.content_dir = content_dir
        self.extensions = tuple(extensions)

    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        """List all content files, sorted by path.

        Args:
            include_drafts: Whether to include draft files.

        Returns:
            List of paths to content files.
        """
        files: list[Path] = []
        for path in sorted(self.content_dir.rglob("*")):
            if path.is_dir():
                continue
            rel = path.relative_to(self.content_dir)
            if is_internal_path(rel.parent):
                continue
            if rel.name.startswith("_") and not include_drafts:
                continue
            if is_content_file(path, self.extensions):
                files.append(path)
        return files


class _FileDocumentParser:
    """DocumentParser that reads files with a fixed encoding."""

    def __init__(self, encoding: str = "utf-8"):
        self.encoding = encoding

    def parse(self, path: Path) -> ContentDocument:
        return load_document(path, encoding=self.encoding)


class ContentProcessor:
    """Facade for loading every content document in a directory.

    Attributes:
        content_dir: Directory containing content files.
    """

    def __init__(
        self,
        content_dir: Path,
        content_loader: ContentLoader | None = None,
        document_parser: DocumentParser | None = None,
        encoding: str = "utf-8",
        include_drafts: bool = False,
    ):
        """Initialize the content processor.

        Args:
            content_dir: Path to the content directory.
            content_loader: Optional custom content loader.
            document_parser: Optional custom document parser.
            encoding: Text encoding used by the default parser.
            include_drafts: Default for load() when it is not given explicitly.
        """
        self.content_dir = content_dir
        self.include_drafts = include_drafts
        self._content_loader = content_loader or FileContentLoader(content_dir)
        self._document_parser = document_parser or _FileDocumentParser(encoding)

    @classmethod
    def from_config(cls, project_root: Path) -> ContentProcessor:
        """Create a processor from the project's folio.yaml.

        Args:
            project_root: Root directory of the project.

        Returns:
            ContentProcessor configured from folio.yaml and its defaults.
        """
        config = load_config(project_root)
        content_dir = project_root / config["content_dir"]
        return cls(
            content_dir,
            content_loader=FileContentLoader(content_dir, config["extensions"]),
            encoding=config["encoding"],
            include_drafts=config["include_drafts"],
        )

    def load(self, include_drafts: bool | None = None) -> list[ContentDocument]:
        """Load all content files as ContentDocument objects.

        Args:
            include_drafts: Whether to include draft documents; defaults to
                the processor's own setting.

        Returns:
            List of ContentDocument objects, in path order.

        Raises:
            FileNotFoundError: If the content directory does not exist.
            MalformedDocumentError: If any file has an unreadable front matter block.
        """
        if not self.content_dir.is_dir():
            raise FileNotFoundError(f"Expected content directory at {self.content_dir}")
        if include_drafts is None:
            include_drafts = self.include_drafts
        documents = [
            self._document_parser.parse(path)
            for path in self._content_loader.iter_files(include_drafts)
        ]
        logger.debug("Loaded %d documents from %s", len(documents), self.content_dir)
        return documents
