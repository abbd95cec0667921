"""Front matter extraction and serialization.

A content file starts with a ``---`` line, followed by YAML metadata lines,
followed by a second ``---`` line; everything after that is the body.

Metadata is loaded with PyYAML's ``BaseLoader`` so every scalar stays the
string the author wrote (``date: 2024-01-15`` is ``"2024-01-15"``, not a
``date``). Values must be strings or lists of strings.

Key functions:
- split_frontmatter: Split raw text into (metadata, body).
- dump_frontmatter: Write (metadata, body) back to text.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Union

import yaml

from .errors import MalformedDocumentError

logger = logging.getLogger(__name__)

DELIMITER = "---"
BOM = "\ufeff"
FOLDED_BREAKS = ("\r", "\x85", "\u2028", "\u2029")

MetadataValue = Union[str, list[str]]
Metadata = dict[str, MetadataValue]


def _is_delimiter(line: str) -> bool:
    return line.rstrip() == DELIMITER


def split_frontmatter(
    text: str, source: Path | None = None
) -> tuple[Metadata, str]:
    """Split raw document text into metadata and body.

    Args:
        text: Raw file content.
        source: Path of the file, used in error messages and warnings.

    Returns:
        Tuple of (metadata dict, body). Text without an opening delimiter
        yields empty metadata and the original text as body.

    Raises:
        MalformedDocumentError: If the block is unterminated, is not valid
            YAML, is not a mapping, or holds unsupported values.
    """
    content = text[len(BOM) :] if text.startswith(BOM) else text
    lines = content.split("\n")
    if not _is_delimiter(lines[0]):
        return {}, text

    for index in range(1, len(lines)):
        if _is_delimiter(lines[index]):
            break
    else:
        raise MalformedDocumentError(
            f"unterminated front matter: no closing '{DELIMITER}' line",
            source_path=source,
            line=1,
        )

    block = "\n".join(lines[1:index])
    body = "\n".join(lines[index + 1 :])
    return _load_block(block, source), body


def _load_block(block: str, source: Path | None) -> Metadata:
    """Parse the YAML between the delimiters into a metadata dict.

    Line numbers reported here are 1-based positions in the whole file,
    so they are shifted by one for the opening delimiter.
    """
    loader = None
    try:
        loader = yaml.BaseLoader(block)
        node = loader.get_single_node()
        data = loader.construct_document(node) if node is not None else None
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark or exc.context_mark
        raise MalformedDocumentError(
            f"invalid front matter: {exc.problem or exc.context or exc}",
            source_path=source,
            line=mark.line + 2 if mark is not None else None,
            original_error=exc,
        ) from exc
    except yaml.reader.ReaderError as exc:
        raise MalformedDocumentError(
            f"invalid front matter: unacceptable character {exc.character!r}",
            source_path=source,
            line=block.count("\n", 0, exc.position) + 2,
            original_error=exc,
        ) from exc
    except yaml.YAMLError as exc:
        raise MalformedDocumentError(
            f"invalid front matter: {exc}",
            source_path=source,
            original_error=exc,
        ) from exc
    finally:
        if loader is not None:
            loader.dispose()

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise MalformedDocumentError(
            f"front matter must be a mapping, got {type(data).__name__}",
            source_path=source,
            line=2,
        )

    key_lines = _key_lines(node, source)
    for key, value in data.items():
        if isinstance(value, str):
            continue
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            continue
        raise MalformedDocumentError(
            f"unsupported value for {key!r}: expected a string or a list of strings",
            source_path=source,
            line=key_lines.get(key),
        )
    return data


def _key_lines(node: yaml.MappingNode, source: Path | None) -> dict[str, int]:
    """Map each top-level key to the file line of its last occurrence.

    Duplicate keys are logged; the constructor already keeps the last value.
    """
    lines: dict[str, int] = {}
    for key_node, _ in node.value:
        if not isinstance(key_node, yaml.ScalarNode):
            continue
        line = key_node.start_mark.line + 2
        if key_node.value in lines:
            logger.warning(
                "Duplicate front matter key %r in %s (lines %d and %d); using the last value",
                key_node.value,
                source or "<text>",
                lines[key_node.value],
                line,
            )
        lines[key_node.value] = line
    return lines


class _MetadataDumper(yaml.SafeDumper):
    """SafeDumper that double-quotes strings holding non-newline line breaks.

    Single-quoted and plain scalars fold \\r, NEL, LS and PS when read back;
    double-quoted scalars escape them.
    """


def _represent_str(dumper: yaml.SafeDumper, value: str) -> yaml.ScalarNode:
    style = '"' if any(ch in value for ch in FOLDED_BREAKS) else None
    return dumper.represent_scalar("tag:yaml.org,2002:str", value, style=style)


_MetadataDumper.add_representer(str, _represent_str)


def dump_frontmatter(metadata: Mapping[str, MetadataValue], body: str) -> str:
    """Serialize metadata and body back into document text.

    Keys keep their insertion order. Strings that YAML would read as another
    type (dates, booleans, numbers) are quoted, so splitting the result gives
    back exactly the same metadata and body.

    Args:
        metadata: Mapping of keys to strings or lists of strings.
        body: Document body, written verbatim.

    Returns:
        Full document text with delimiters.
    """
    block = ""
    if metadata:
        block = yaml.dump(
            dict(metadata),
            Dumper=_MetadataDumper,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
    return f"{DELIMITER}\n{block}{DELIMITER}\n{body}"
