from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from datetime import datetime

from .content import ContentDocument
from .utils import build_tags_index, extract_number_from_name, strip_number_prefix


class DocumentCollection(Sequence[ContentDocument]):
    """Lightweight helper for filtering and ordering lists of ContentDocuments."""

    def __init__(self, documents: Iterable[ContentDocument]):
        self._documents = list(documents)

    def __iter__(self) -> Iterator[ContentDocument]:
        return iter(self._documents)

    def __len__(self) -> int:
        return len(self._documents)

    def __getitem__(self, item):
        return self._documents[item]

    def with_tag(self, tag: str) -> DocumentCollection:
        return DocumentCollection(d for d in self._documents if tag in d.tags)

    def with_layout(self, layout: str) -> DocumentCollection:
        return DocumentCollection(d for d in self._documents if d.layout == layout)

    def drafts(self) -> DocumentCollection:
        return DocumentCollection(d for d in self._documents if d.draft)

    def published(self) -> DocumentCollection:
        return DocumentCollection(d for d in self._documents if not d.draft)

    def sorted(self, reverse: bool = True) -> DocumentCollection:
        """Sort documents by publication date, then number prefix, then name.

        Documents without a publication date sort as the oldest. With
        reverse=True (the default) the newest document comes first.

        Args:
            reverse: If True (default), newest/highest first. If False, oldest/lowest first.

        Returns:
            A new DocumentCollection with sorted documents.
        """

        def sort_key(d: ContentDocument):
            stem = d.path.stem if d.path is not None else ""
            number = extract_number_from_name(stem)
            num_key = number if number is not None else (0 if not reverse else float("inf"))
            return (d.published or datetime.min, num_key, strip_number_prefix(stem).lower())

        return DocumentCollection(sorted(self._documents, key=sort_key, reverse=reverse))

    def latest(self, count: int = 5) -> DocumentCollection:
        return DocumentCollection(self.sorted()[:count])

    def tags(self) -> TagCollection:
        return TagCollection(build_tags_index(self._documents))

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"DocumentCollection({len(self._documents)} documents)"


class TagCollection(Mapping[str, DocumentCollection]):
    """Mapping of tag name to DocumentCollection."""

    def __init__(self, mapping: dict[str, Iterable[ContentDocument]]):
        self._mapping = {k: DocumentCollection(v) for k, v in mapping.items()}

    def __getitem__(self, key: str) -> DocumentCollection:
        return self._mapping[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._mapping)

    def __len__(self) -> int:
        return len(self._mapping)

    def __repr__(self) -> str:  # pragma: no cover - for debugging
        return f"TagCollection({len(self._mapping)} tags)"
