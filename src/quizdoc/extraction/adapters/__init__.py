"""Format extractor implementations and contracts."""

from .base import TextExtractor
from .docx_adapter import DOCXExtractor
from .pdf_adapter import PDFExtractor
from .pptx_adapter import PPTXExtractor
from .xlsx_adapter import XLSXExtractor


def build_default_extractors() -> dict[str, TextExtractor]:
    """Return the default extension-to-extractor map."""
    return {
        "pdf": PDFExtractor(),
        "pptx": PPTXExtractor(),
        "docx": DOCXExtractor(),
        "xlsx": XLSXExtractor(),
    }


__all__ = [
    "TextExtractor",
    "PDFExtractor",
    "PPTXExtractor",
    "DOCXExtractor",
    "XLSXExtractor",
    "build_default_extractors",
]
