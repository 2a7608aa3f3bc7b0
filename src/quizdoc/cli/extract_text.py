"""CLI command printing the text extracted from one document."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from quizdoc.extraction.dispatcher import extract_text_from_file
from quizdoc.extraction.errors import ExtractionError, ensure_text
from quizdoc.extraction.models import SourceFile

LOGGER = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Extract plain text from a PDF, PPTX, DOCX or XLSX file")
    parser.add_argument("--path", required=True, help="Document to extract")
    parser.add_argument("--json", action="store_true", help="Emit a JSON payload instead of raw text")
    return parser.parse_args(argv)


async def _extract(path: Path) -> str:
    source = SourceFile.from_path(path)
    text = await extract_text_from_file(source)
    return ensure_text(text, file_name=source.name)


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _parse_args(argv)
    path = Path(args.path)

    if not path.is_file():
        LOGGER.error("path must exist and be a file: %s", path)
        return 2

    try:
        text = asyncio.run(_extract(path))
    except (ExtractionError, OSError) as exc:
        if args.json:
            payload = {"path": str(path), "error": str(exc), "kind": type(exc).__name__}
            print(json.dumps(payload, ensure_ascii=False, indent=2))
        else:
            print(str(exc), file=sys.stderr)
        return 1

    if args.json:
        print(json.dumps({"path": str(path), "characters": len(text), "text": text}, ensure_ascii=False, indent=2))
    else:
        print(text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
