"""Shared contract for per-format text extractors."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from quizdoc.extraction.models import SourceFile


@runtime_checkable
class TextExtractor(Protocol):
    """Protocol that every format extractor must implement."""

    format_name: str

    async def extract(self, source: SourceFile) -> str:
        """Linearize the visible text of *source* in document order."""
