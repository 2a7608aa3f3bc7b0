"""Compose ordered text fragments into the final extraction string.

Two layouts exist and every extractor uses exactly one of them:

* block layout (PPTX, DOCX): blank-separated blocks, trimmed at both ends;
* record layout (PDF pages, XLSX sheets): every record terminated by one
  newline, never trimmed, so empty records keep their position.
"""

from __future__ import annotations

from typing import Iterable, Sequence


def join_lines(lines: Iterable[str]) -> str:
    """Join non-blank lines with a single newline."""

    return "\n".join(line for line in lines if line.strip())


def assemble_blocks(blocks: Iterable[str], *, trailer: Sequence[str] = (), marker: str | None = None) -> str:
    """Join blocks with blank lines, optionally followed by a marked trailer section."""

    parts: list[str] = []
    for block in blocks:
        cleaned = block.strip()
        if cleaned:
            parts.append(cleaned + "\n\n")

    if marker is not None and trailer:
        parts.append(marker + "\n")
        for block in trailer:
            cleaned = block.strip()
            if cleaned:
                parts.append(cleaned + "\n\n")

    return "".join(parts).strip()


def assemble_records(records: Iterable[str]) -> str:
    """Concatenate records, appending one newline terminator to each."""

    return "".join(f"{record}\n" for record in records)
