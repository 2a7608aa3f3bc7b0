"""Document text extraction for quiz generation."""

from .dispatcher import ExtractionDispatcher, extract_text_from_file
from .errors import (
    CorruptDocumentError,
    EmptyExtractionError,
    ExtractionError,
    MissingContentError,
    UnsupportedFormatError,
    ensure_text,
)
from .models import SourceFile

__all__ = [
    "ExtractionDispatcher",
    "extract_text_from_file",
    "ExtractionError",
    "UnsupportedFormatError",
    "CorruptDocumentError",
    "MissingContentError",
    "EmptyExtractionError",
    "ensure_text",
    "SourceFile",
]
