"""Error taxonomy surfaced by document text extraction."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class ExtractionError(Exception):
    """Domain error for routing and per-format extraction failures."""

    file_name: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (file={self.file_name})"


@dataclass(slots=True)
class UnsupportedFormatError(ExtractionError):
    """The file extension is missing or not one of the accepted formats."""

    extension: str | None = None


class CorruptDocumentError(ExtractionError):
    """The payload cannot be opened as the format implied by its extension."""


class MissingContentError(ExtractionError):
    """A required internal part is absent from an otherwise valid container."""


class EmptyExtractionError(ExtractionError):
    """Parsing succeeded but produced no usable text."""


def ensure_text(text: str, *, file_name: str) -> str:
    """Return *text* unchanged, or fail when it holds no visible characters."""

    if not text or not text.strip():
        raise EmptyExtractionError(file_name, "No text could be extracted from the document")
    return text
