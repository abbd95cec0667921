from datetime import datetime
from pathlib import Path

import pytest

from folio.content import (
    ContentDocument,
    ContentProcessor,
    FileContentLoader,
    load_document,
    parse_document,
)
from folio.errors import ConfigError, MalformedDocumentError
from folio.protocols import ContentLoader, DocumentParser


def create_site(tmp_path: Path) -> Path:
    content = tmp_path / "content"
    (content / "posts").mkdir(parents=True)
    (content / "_templates").mkdir()
    (content / "about.md").write_text(
        '---\ntitle: "About me"\nlayout: "about"\nlayout: "about"\n---\nHello.\n',
        encoding="utf-8",
    )
    (content / "posts" / "2023-03-10-first-post.md").write_text(
        "---\ntitle: First post\ntags:\n  - python\n  - notes\n---\nFirst.\n",
        encoding="utf-8",
    )
    (content / "posts" / "second.md").write_text(
        "---\ntitle: Second\ndate: 2023-05-01 09:30:00 +0200\ntags: python\n"
        "tldr: Short.\ndescription: The second one.\n---\nSecond.\n",
        encoding="utf-8",
    )
    (content / "posts" / "_wip.md").write_text("Not ready.\n", encoding="utf-8")
    (content / "_templates" / "post.md").write_text("---\n---\n", encoding="utf-8")
    (content / "notes.txt").write_text("ignore", encoding="utf-8")
    return content


def test_parse_document_accessors():
    doc = parse_document(
        "---\ntitle: Hello\ndate: 2024-02-03\nlayout: post\ntags:\n  - a\n  - b\n"
        "tldr: tl\ndescription: desc\n---\nBody\n"
    )
    assert doc.title == "Hello"
    assert doc.date == "2024-02-03"
    assert doc.published == datetime(2024, 2, 3)
    assert doc.layout == "post"
    assert doc.tags == ["a", "b"]
    assert doc.tldr == "tl"
    assert doc.description == "desc"
    assert doc.body == "Body\n"
    assert doc.path is None
    assert doc.slug == "index"
    assert doc.draft is False
    assert doc.get("missing", "fallback") == "fallback"


def test_document_without_front_matter():
    doc = parse_document("Just prose.\n")
    assert doc.metadata == {}
    assert doc.body == "Just prose.\n"
    assert doc.title == "Untitled"
    assert doc.tags == []
    assert doc.layout is None
    assert doc.published is None


def test_path_fallbacks():
    doc = ContentDocument(path=Path("posts/2024-01-15-hello-world.md"))
    assert doc.title == "Hello World"
    assert doc.slug == "hello-world"
    assert doc.published == datetime(2024, 1, 15)
    assert ContentDocument(path=Path("_draft-idea.md")).draft is True


def test_unparseable_date_does_not_fall_back_to_filename():
    doc = ContentDocument(metadata={"date": "someday"}, path=Path("2024-01-15-x.md"))
    assert doc.published is None


def test_to_text_round_trips():
    doc = parse_document("---\ntitle: T\ntags:\n- x\n- y\n---\nbody\n")
    again = parse_document(doc.to_text())
    assert again.metadata == doc.metadata
    assert again.body == doc.body
    assert again.tags == ["x", "y"]


def test_load_document_reports_path(tmp_path):
    path = tmp_path / "broken.md"
    path.write_text("---\ntitle: never closed\n", encoding="utf-8")
    with pytest.raises(MalformedDocumentError) as excinfo:
        load_document(path)
    assert excinfo.value.source_path == path
    assert str(path) in str(excinfo.value)


def test_file_content_loader(tmp_path):
    content = create_site(tmp_path)
    loader = FileContentLoader(content)
    names = [p.name for p in loader.iter_files()]
    assert names == ["about.md", "2023-03-10-first-post.md", "second.md"]

    with_drafts = [p.name for p in loader.iter_files(include_drafts=True)]
    assert "_wip.md" in with_drafts
    assert "post.md" not in with_drafts

    assert [p.name for p in FileContentLoader(content, [".txt"]).iter_files()] == ["notes.txt"]


def test_content_processor_loads_documents(tmp_path):
    content = create_site(tmp_path)
    docs = ContentProcessor(content).load()
    by_name = {d.path.name: d for d in docs}
    assert set(by_name) == {"about.md", "2023-03-10-first-post.md", "second.md"}

    about = by_name["about.md"]
    assert about.title == "About me"
    assert about.layout == "about"
    assert about.body == "Hello.\n"

    first = by_name["2023-03-10-first-post.md"]
    assert first.tags == ["python", "notes"]
    assert first.published == datetime(2023, 3, 10)
    assert first.slug == "first-post"

    second = by_name["second.md"]
    assert second.tags == ["python"]
    assert second.published == datetime(2023, 5, 1, 7, 30)
    assert second.tldr == "Short."

    drafts = ContentProcessor(content, include_drafts=True).load()
    assert any(d.draft for d in drafts)
    assert not any(d.draft for d in ContentProcessor(content, include_drafts=True).load(False))


def test_content_processor_propagates_malformed(tmp_path):
    content = create_site(tmp_path)
    (content / "bad.md").write_text("---\ntitle: x\n", encoding="utf-8")
    with pytest.raises(MalformedDocumentError):
        ContentProcessor(content).load()


def test_content_processor_missing_dir(tmp_path):
    with pytest.raises(FileNotFoundError):
        ContentProcessor(tmp_path / "nope").load()


def test_content_processor_from_config(tmp_path):
    create_site(tmp_path)
    docs = ContentProcessor.from_config(tmp_path).load()
    assert len(docs) == 3

    (tmp_path / "folio.yaml").write_text(
        "content_dir: content/posts\ninclude_drafts: true\n", encoding="utf-8"
    )
    processor = ContentProcessor.from_config(tmp_path)
    assert processor.content_dir == tmp_path / "content" / "posts"
    assert {d.path.name for d in processor.load()} == {
        "2023-03-10-first-post.md",
        "second.md",
        "_wip.md",
    }


class FakeLoader:
    def iter_files(self, include_drafts: bool = False) -> list[Path]:
        return [Path("a.md"), Path("b.md")]


class FakeParser:
    def parse(self, path: Path) -> ContentDocument:
        return ContentDocument(metadata={"title": path.stem}, path=path)


def test_processor_uses_injected_components(tmp_path):
    assert isinstance(FileContentLoader(tmp_path), ContentLoader)
    assert isinstance(FakeParser(), DocumentParser)
    processor = ContentProcessor(
        tmp_path, content_loader=FakeLoader(), document_parser=FakeParser()
    )
    assert [d.title for d in processor.load()] == ["a", "b"]


def test_from_config_rejects_quoted_include_drafts(tmp_path):
    create_site(tmp_path)
    (tmp_path / "folio.yaml").write_text('include_drafts: "false"\n', encoding="utf-8")
    with pytest.raises(ConfigError):
        ContentProcessor.from_config(tmp_path)
