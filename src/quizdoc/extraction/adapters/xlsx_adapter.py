"""XLSX extractor rendering each sheet as a CSV block."""

from __future__ import annotations

import asyncio
import csv
from datetime import date, datetime, time
from io import BytesIO, StringIO
import logging
from typing import Any
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException
from openpyxl.workbook.workbook import Workbook
from openpyxl.worksheet.worksheet import Worksheet

from quizdoc.extraction.assembly import assemble_records
from quizdoc.extraction.errors import CorruptDocumentError
from quizdoc.extraction.models import SourceFile

logger = logging.getLogger(__name__)

_LOAD_ERRORS = (BadZipFile, InvalidFileException, KeyError, ValueError, TypeError, OSError, SyntaxError)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime) and value.time() == time(0, 0):
        return value.date().isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value)


def sheet_to_csv(sheet: Worksheet) -> str:
    """Serialize the populated cell range of *sheet* without a trailing terminator."""

    rows = list(
        sheet.iter_rows(
            min_row=sheet.min_row,
            max_row=sheet.max_row,
            min_col=sheet.min_column,
            max_col=sheet.max_column,
            values_only=True,
        )
    )
    if all(value is None for row in rows for value in row):
        return ""

    buffer = StringIO()
    writer = csv.writer(buffer, delimiter=",", quotechar='"', quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    for row in rows:
        writer.writerow([_cell_text(value) for value in row])
    return buffer.getvalue().removesuffix("\n")


class XLSXExtractor:
    """Extract every sheet, in workbook order, as comma-separated text."""

    format_name = "xlsx"

    async def extract(self, source: SourceFile) -> str:
        return await asyncio.to_thread(self._extract_sync, source)

    def _extract_sync(self, source: SourceFile) -> str:
        workbook = self._open(source)
        try:
            blocks: list[str] = []
            for name in workbook.sheetnames:
                sheet = workbook[name]
                # Chartsheets carry no cell grid.
                blocks.append(sheet_to_csv(sheet) if isinstance(sheet, Worksheet) else "")
        finally:
            workbook.close()

        logger.debug("Extracted %d sheet(s) from %s", len(blocks), source.name)
        return assemble_records(blocks)

    def _open(self, source: SourceFile) -> Workbook:
        try:
            return load_workbook(BytesIO(source.data), data_only=True)
        except _LOAD_ERRORS as exc:
            logger.warning("Rejecting unreadable workbook %s: %s", source.name, exc)
            raise CorruptDocumentError(source.name, f"File is not a readable XLSX workbook: {exc}") from exc
