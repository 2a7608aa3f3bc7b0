from __future__ import annotations

from datetime import date
from io import BytesIO

from openpyxl import Workbook
import pytest

from quizdoc.extraction.adapters.xlsx_adapter import XLSXExtractor
from quizdoc.extraction.errors import CorruptDocumentError
from quizdoc.extraction.models import SourceFile


def _save(workbook: Workbook) -> bytes:
    buffer = BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


async def _extract(data: bytes) -> str:
    return await XLSXExtractor().extract(SourceFile(name="grades.xlsx", data=data))


@pytest.mark.asyncio
async def test_sheet_grid_becomes_csv_block_with_trailing_newline() -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = "Sheet1"
    sheet.append(["a", "b"])
    sheet.append(["c", "d"])

    text = await _extract(_save(workbook))

    assert text == "a,b\nc,d\n"


@pytest.mark.asyncio
async def test_sheets_follow_workbook_order() -> None:
    workbook = Workbook()
    first = workbook.active
    first.title = "Zeta"
    first.append(["first"])
    second = workbook.create_sheet("Alpha")
    second.append(["second"])

    assert await _extract(_save(workbook)) == "first\nsecond\n"


@pytest.mark.asyncio
async def test_values_needing_quotes_follow_csv_rules() -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append(["x,y", 'say "hi"', "line1\nline2"])

    text = await _extract(_save(workbook))

    assert text == '"x,y","say ""hi""","line1\nline2"\n'


@pytest.mark.asyncio
async def test_cell_values_are_rendered_as_text() -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet.append([1, 2.5, 3.0, True, None, date(2024, 3, 1)])

    text = await _extract(_save(workbook))

    assert text == "1,2.5,3,TRUE,,2024-03-01\n"


@pytest.mark.asyncio
async def test_empty_sheet_contributes_only_newline() -> None:
    workbook = Workbook()
    workbook.active.title = "Empty"
    filled = workbook.create_sheet("Filled")
    filled.append(["value"])

    assert await _extract(_save(workbook)) == "\nvalue\n"


@pytest.mark.asyncio
async def test_populated_range_starts_at_first_used_cell() -> None:
    workbook = Workbook()
    sheet = workbook.active
    sheet["B2"] = "q"
    sheet["C3"] = "r"

    assert await _extract(_save(workbook)) == "q,\n,r\n"


@pytest.mark.asyncio
async def test_non_workbook_bytes_are_corrupt() -> None:
    with pytest.raises(CorruptDocumentError, match="grades.xlsx"):
        await _extract(b"not a workbook")
