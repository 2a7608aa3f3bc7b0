"""Routing entrypoint from a submitted file to its format extractor."""

from __future__ import annotations

import logging

from quizdoc.extraction.adapters import build_default_extractors
from quizdoc.extraction.adapters.base import TextExtractor
from quizdoc.extraction.errors import UnsupportedFormatError
from quizdoc.extraction.models import SourceFile

logger = logging.getLogger(__name__)


class ExtractionDispatcher:
    """Resolve the extractor for a file extension and run it."""

    def __init__(self, extractors: dict[str, TextExtractor] | None = None) -> None:
        self._extractors: dict[str, TextExtractor] = {}
        for extension, extractor in (extractors or {}).items():
            self.register_extractor(extension, extractor)

    @property
    def supported_extensions(self) -> tuple[str, ...]:
        return tuple(sorted(self._extractors))

    def register_extractor(self, extension: str, extractor: TextExtractor) -> None:
        """Register an extractor for a bare, case-insensitive extension."""

        key = extension.strip().lstrip(".").lower()
        if not key:
            raise ValueError("Extension cannot be empty")
        self._extractors[key] = extractor

    def resolve(self, source: SourceFile) -> TextExtractor:
        extension = source.extension
        extractor = self._extractors.get(extension) if extension else None
        if extractor is None:
            supported = ", ".join(f".{name}" for name in self.supported_extensions)
            shown = f".{extension}" if extension else "(none)"
            raise UnsupportedFormatError(
                source.name,
                f"Unsupported file type {shown}. Please upload one of: {supported}",
                extension=extension,
            )
        return extractor

    async def extract(self, source: SourceFile) -> str:
        extractor = self.resolve(source)
        logger.info("Extracting %s text from %s (%d bytes)", extractor.format_name, source.name, source.size)
        text = await extractor.extract(source)
        logger.info("Extracted %d characters from %s", len(text), source.name)
        return text


_default_dispatcher: ExtractionDispatcher | None = None


def default_dispatcher() -> ExtractionDispatcher:
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = ExtractionDispatcher(build_default_extractors())
    return _default_dispatcher


async def extract_text_from_file(source: SourceFile) -> str:
    """Extract plain text from a PDF, PPTX, DOCX or XLSX submission."""

    return await default_dispatcher().extract(source)
