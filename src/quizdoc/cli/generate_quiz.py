"""CLI command generating quiz questions from a document or pasted text."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
from pathlib import Path
import sys

from dotenv import load_dotenv

from quizdoc.extraction.errors import ExtractionError
from quizdoc.extraction.models import SourceFile
from quizdoc.quiz.config import QuizSettings
from quizdoc.quiz.models import QuestionType
from quizdoc.quiz.openrouter import QuestionGenerationError, QuizGenerator
from quizdoc.quiz.service import FileTooLargeError, QuizInputError, build_quiz


load_dotenv()

LOGGER = logging.getLogger(__name__)

_TYPE_CHOICES = {
    "tf": QuestionType.TRUE_FALSE,
    "mc": QuestionType.MULTIPLE_CHOICE,
}


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate quiz questions from learning material")
    material = parser.add_mutually_exclusive_group(required=True)
    material.add_argument("--path", help="PDF, PPTX, DOCX or XLSX file with the learning material")
    material.add_argument("--text", help="Learning material as plain text")
    parser.add_argument("--type", choices=sorted(_TYPE_CHOICES), default="tf", help="tf = true/false, mc = multiple choice")
    parser.add_argument("--count", type=int, default=3, help="Number of questions to generate")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None, *, generator: QuizGenerator | None = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
    args = _parse_args(argv)

    if generator is None:
        try:
            generator = QuizGenerator(QuizSettings.from_env())
        except ValueError as exc:
            LOGGER.error("Invalid quiz configuration: %s", exc)
            return 2

    source: SourceFile | None = None
    if args.path:
        path = Path(args.path)
        if not path.is_file():
            LOGGER.error("path must exist and be a file: %s", path)
            return 2
        try:
            source = SourceFile.from_path(path)
        except OSError as exc:
            print(f"Cannot read {path}: {exc}", file=sys.stderr)
            return 1

    question_type = _TYPE_CHOICES[args.type]
    try:
        result = asyncio.run(
            build_quiz(
                generator=generator,
                question_type=question_type,
                count=args.count,
                text=args.text,
                source=source,
            )
        )
    except (ExtractionError, FileTooLargeError, QuizInputError, QuestionGenerationError) as exc:
        print(str(exc), file=sys.stderr)
        return 1

    payload = {
        "source": result.source_name,
        "type": question_type.value,
        "questions": [question.to_dict() for question in result.questions],
    }
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
