"""DOCX extractor reading the main document part."""

from __future__ import annotations

import asyncio

from quizdoc.extraction.assembly import assemble_blocks
from quizdoc.extraction.errors import MissingContentError
from quizdoc.extraction.models import SourceFile
from quizdoc.extraction.ooxml import WORDPROCESSINGML, DocumentPart, open_package, part_text, read_parts

MAIN_DOCUMENT_PART = "word/document.xml"


class DOCXExtractor:
    """Extract paragraph lines from ``word/document.xml``."""

    format_name = "docx"

    async def extract(self, source: SourceFile) -> str:
        part = await asyncio.to_thread(self._read_main_part, source)
        text = await asyncio.to_thread(part_text, part, WORDPROCESSINGML, source)
        return assemble_blocks([text])

    def _read_main_part(self, source: SourceFile) -> DocumentPart:
        with open_package(source) as archive:
            if MAIN_DOCUMENT_PART not in archive.namelist():
                raise MissingContentError(source.name, f"Document part {MAIN_DOCUMENT_PART} not found in DOCX package")
            part = read_parts(archive, [MAIN_DOCUMENT_PART], source)[0]

        if not part.data.strip():
            raise MissingContentError(source.name, f"Document part {MAIN_DOCUMENT_PART} is empty")
        return part
