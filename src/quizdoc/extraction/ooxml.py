"""Office Open XML package helpers shared by the PPTX and DOCX extractors."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
from io import BytesIO
import logging
import re
from typing import Iterable, Sequence
from zipfile import BadZipFile, ZipFile
import zlib

from lxml import etree

from quizdoc.extraction.assembly import join_lines
from quizdoc.extraction.errors import CorruptDocumentError
from quizdoc.extraction.models import SourceFile

logger = logging.getLogger(__name__)

_PART_NUMBER_RE = re.compile(r"(\d+)\.xml$")


@dataclass(frozen=True, slots=True)
class TextVocabulary:
    """Paragraph and text-run element names of one markup dialect.

    Transitional and Strict packages use different namespace URIs for the same
    vocabulary, so every namespace listed here is matched.
    """

    namespaces: tuple[str, ...]
    paragraph: str = "p"
    text: str = "t"

    @property
    def paragraph_tags(self) -> tuple[str, ...]:
        return tuple(f"{{{namespace}}}{self.paragraph}" for namespace in self.namespaces)

    @property
    def text_tags(self) -> tuple[str, ...]:
        return tuple(f"{{{namespace}}}{self.text}" for namespace in self.namespaces)


DRAWINGML = TextVocabulary(
    (
        "http://schemas.openxmlformats.org/drawingml/2006/main",
        "http://purl.oclc.org/ooxml/drawingml/main",
    )
)
WORDPROCESSINGML = TextVocabulary(
    (
        "http://schemas.openxmlformats.org/wordprocessingml/2006/main",
        "http://purl.oclc.org/ooxml/wordprocessingml/main",
    )
)


@dataclass(frozen=True, slots=True)
class DocumentPart:
    """A named zip entry and its raw XML payload."""

    name: str
    data: bytes


def open_package(source: SourceFile) -> ZipFile:
    """Open the payload as a zip archive, mapping failures to CorruptDocumentError."""

    try:
        return ZipFile(BytesIO(source.data), "r")
    except (BadZipFile, OSError, ValueError) as exc:
        logger.warning("Rejecting unreadable zip package %s: %s", source.name, exc)
        raise CorruptDocumentError(source.name, f"File is not a readable zip package: {exc}") from exc


def _part_sort_key(name: str) -> tuple[int, int, str]:
    match = _PART_NUMBER_RE.search(name)
    if match is None:
        return (1, 0, name)
    return (0, int(match.group(1)), name)


def list_parts(names: Iterable[str], *, directory: str, prefix: str) -> list[str]:
    """Return XML parts directly under *directory* starting with *prefix*.

    Relationship parts are skipped. Results are ordered by the numeric suffix of
    the part name so that ``slide2.xml`` precedes ``slide10.xml``.
    """

    selected: list[str] = []
    for name in names:
        if not name.startswith(directory) or "_rels" in name:
            continue
        relative = name[len(directory) :]
        if "/" in relative:
            continue
        if relative.startswith(prefix) and relative.endswith(".xml"):
            selected.append(name)
    return sorted(selected, key=_part_sort_key)


def read_parts(archive: ZipFile, names: Sequence[str], source: SourceFile) -> list[DocumentPart]:
    """Read the named entries in order."""

    parts: list[DocumentPart] = []
    for name in names:
        try:
            parts.append(DocumentPart(name=name, data=archive.read(name)))
        except (BadZipFile, zlib.error, NotImplementedError, RuntimeError, OSError) as exc:
            raise CorruptDocumentError(source.name, f"Cannot read package part {name}: {exc}") from exc
    return parts


def parse_part(part: DocumentPart, source: SourceFile) -> etree._Element:
    parser = etree.XMLParser(resolve_entities=False, no_network=True, load_dtd=False, huge_tree=False)
    try:
        return etree.fromstring(part.data, parser=parser)
    except etree.XMLSyntaxError as exc:
        raise CorruptDocumentError(source.name, f"Malformed XML in part {part.name}: {exc}") from exc


def paragraph_lines(root: etree._Element, vocabulary: TextVocabulary) -> list[str]:
    """Concatenate run text per paragraph, in document order.

    Runs are joined without a separator. Blank lines are kept here and dropped
    by the assembler.
    """

    lines: list[str] = []
    for paragraph in root.iter(*vocabulary.paragraph_tags):
        lines.append("".join(node.text or "" for node in paragraph.iter(*vocabulary.text_tags)))
    return lines


def part_text(part: DocumentPart, vocabulary: TextVocabulary, source: SourceFile) -> str:
    """Parse one part and return its non-blank paragraph lines joined by newlines."""

    root = parse_part(part, source)
    return join_lines(paragraph_lines(root, vocabulary))


async def parts_text(parts: Sequence[DocumentPart], vocabulary: TextVocabulary, source: SourceFile) -> list[str]:
    """Parse independent parts concurrently; results keep the order of *parts*."""

    return list(await asyncio.gather(*(asyncio.to_thread(part_text, part, vocabulary, source) for part in parts)))
