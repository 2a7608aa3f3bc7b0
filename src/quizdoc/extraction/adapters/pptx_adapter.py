"""PPTX extractor covering slide text and speaker notes."""

from __future__ import annotations

import asyncio
import logging

from quizdoc.extraction.assembly import assemble_blocks
from quizdoc.extraction.models import SourceFile
from quizdoc.extraction.ooxml import DRAWINGML, DocumentPart, list_parts, open_package, parts_text, read_parts

logger = logging.getLogger(__name__)

SLIDES_DIR = "ppt/slides/"
NOTES_DIR = "ppt/notesSlides/"
NOTES_MARKER = "--- SLIDE NOTES ---"


class PPTXExtractor:
    """Extract slide paragraphs, then a marked section of speaker notes."""

    format_name = "pptx"

    async def extract(self, source: SourceFile) -> str:
        slides, notes = await asyncio.to_thread(self._read_parts, source)
        logger.debug("Found %d slide(s) and %d notes part(s) in %s", len(slides), len(notes), source.name)

        slide_blocks = await parts_text(slides, DRAWINGML, source)
        notes_blocks = await parts_text(notes, DRAWINGML, source)
        return assemble_blocks(slide_blocks, trailer=notes_blocks, marker=NOTES_MARKER)

    def _read_parts(self, source: SourceFile) -> tuple[list[DocumentPart], list[DocumentPart]]:
        with open_package(source) as archive:
            names = archive.namelist()
            slides = read_parts(archive, list_parts(names, directory=SLIDES_DIR, prefix="slide"), source)
            notes = read_parts(archive, list_parts(names, directory=NOTES_DIR, prefix="notesSlide"), source)
        return slides, notes
