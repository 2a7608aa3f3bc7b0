"""PDF extractor joining page text items in content-stream order."""

from __future__ import annotations

import asyncio
import logging

import pymupdf

from quizdoc.extraction.assembly import assemble_records
from quizdoc.extraction.errors import CorruptDocumentError
from quizdoc.extraction.models import SourceFile

logger = logging.getLogger(__name__)

# Text blocks in pymupdf's dict output; image blocks use type 1.
_TEXT_BLOCK = 0


def _page_items(page: pymupdf.Page) -> list[str]:
    """Return span texts as drawn by the content stream, without reading-order sorting."""

    items: list[str] = []
    layout = page.get_text("dict", sort=False)
    for block in layout.get("blocks", []):
        if block.get("type") != _TEXT_BLOCK:
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                items.append(span.get("text", ""))
    return items


class PDFExtractor:
    """Extract one line of space-joined text items per page."""

    format_name = "pdf"

    async def extract(self, source: SourceFile) -> str:
        return await asyncio.to_thread(self._extract_sync, source)

    def _extract_sync(self, source: SourceFile) -> str:
        doc = self._open(source)
        with doc:
            pages = [" ".join(_page_items(page)) for page in doc]

        logger.debug("Extracted %d PDF page(s) from %s", len(pages), source.name)
        return assemble_records(pages)

    def _open(self, source: SourceFile) -> pymupdf.Document:
        try:
            doc = pymupdf.open(stream=source.data, filetype="pdf")
        except (RuntimeError, ValueError) as exc:
            logger.warning("Rejecting unreadable PDF %s: %s", source.name, exc)
            raise CorruptDocumentError(source.name, f"File is not a readable PDF document: {exc}") from exc

        if doc.needs_pass:
            doc.close()
            raise CorruptDocumentError(source.name, "PDF document is password protected")
        return doc
