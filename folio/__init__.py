"""Folio front-matter content library.

This package reads prose content files (blog posts, about pages) that start
with a YAML front matter block and splits them into metadata and body, ready
to be handed to whatever static site generator renders them.

Rendering, templating and asset handling are left to that consumer.
"""

from .content import ContentDocument, ContentProcessor, load_document, parse_document
from .errors import ConfigError, FolioError, MalformedDocumentError
from .frontmatter import dump_frontmatter, split_frontmatter

__all__ = [
    "ConfigError",
    "ContentDocument",
    "ContentProcessor",
    "FolioError",
    "MalformedDocumentError",
    "__version__",
    "dump_frontmatter",
    "load_document",
    "parse_document",
    "split_frontmatter",
]
__version__ = "0.1.0"
