"""Submit flow: pick the learning material, extract it, generate questions."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass
import logging
from typing import Protocol

from quizdoc.extraction.dispatcher import ExtractionDispatcher, default_dispatcher
from quizdoc.extraction.errors import ensure_text
from quizdoc.extraction.models import SourceFile
from quizdoc.quiz.models import Question, QuestionType

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 10 * 1024 * 1024
MIN_QUESTION_COUNT = 1
MAX_QUESTION_COUNT = 10
PASTED_TEXT_NAME = "<pasted text>"


class QuestionGenerator(Protocol):
    def generate(self, text: str, question_type: QuestionType, count: int) -> list[Question]:
        ...


class QuizInputError(ValueError):
    """The submission carries neither usable text nor a file, or has bad options."""


@dataclass(slots=True)
class FileTooLargeError(Exception):
    file_name: str
    size: int
    limit: int = MAX_UPLOAD_BYTES

    def __str__(self) -> str:
        return f"File exceeds the {self.limit // (1024 * 1024)} MB upload limit: {self.size} bytes (file={self.file_name})"


@dataclass(frozen=True, slots=True)
class QuizResult:
    source_name: str
    text: str
    questions: tuple[Question, ...]


def validate_count(count: int) -> int:
    if not MIN_QUESTION_COUNT <= count <= MAX_QUESTION_COUNT:
        raise QuizInputError(f"Question count must be between {MIN_QUESTION_COUNT} and {MAX_QUESTION_COUNT}")
    return count


async def load_material(
    *,
    text: str | None = None,
    source: SourceFile | None = None,
    dispatcher: ExtractionDispatcher | None = None,
) -> tuple[str, str]:
    """Return ``(source_name, text)``; an uploaded file takes precedence over pasted text."""

    if source is not None:
        if source.size > MAX_UPLOAD_BYTES:
            raise FileTooLargeError(source.name, source.size)
        extracted = await (dispatcher or default_dispatcher()).extract(source)
        return source.name, ensure_text(extracted, file_name=source.name)

    if text is None or not text.strip():
        raise QuizInputError("Enter learning material or upload a file")
    return PASTED_TEXT_NAME, text


async def build_quiz(
    *,
    generator: QuestionGenerator,
    question_type: QuestionType,
    count: int,
    text: str | None = None,
    source: SourceFile | None = None,
    dispatcher: ExtractionDispatcher | None = None,
) -> QuizResult:
    """Run extraction then generation; any failure aborts without partial output."""

    validate_count(count)
    source_name, material = await load_material(text=text, source=source, dispatcher=dispatcher)
    logger.info("Generating %d question(s) from %s (%d chars)", count, source_name, len(material))
    questions = await asyncio.to_thread(generator.generate, material, question_type, count)
    return QuizResult(source_name=source_name, text=material, questions=tuple(questions))
