from __future__ import annotations

from io import BytesIO
from zipfile import ZipFile

import pytest

from quizdoc.extraction.dispatcher import ExtractionDispatcher
from quizdoc.extraction.errors import EmptyExtractionError, UnsupportedFormatError
from quizdoc.extraction.models import SourceFile
from quizdoc.quiz.models import QuestionType, TrueFalseQuestion
from quizdoc.quiz.service import MAX_UPLOAD_BYTES, FileTooLargeError, QuizInputError, build_quiz


class _FakeGenerator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, QuestionType, int]] = []

    def generate(self, text: str, question_type: QuestionType, count: int) -> list[TrueFalseQuestion]:
        self.calls.append((text, question_type, count))
        return [TrueFalseQuestion(question=f"Q{index}", answer=True, explanation="") for index in range(count)]


class _StaticExtractor:
    format_name = "docx"

    def __init__(self, text: str) -> None:
        self.text = text

    async def extract(self, source: SourceFile) -> str:
        return self.text


def _docx_bytes(*lines: str) -> bytes:
    paragraphs = "".join(f"<w:p><w:r><w:t>{line}</w:t></w:r></w:p>" for line in lines)
    buffer = BytesIO()
    with ZipFile(buffer, "w") as archive:
        archive.writestr(
            "word/document.xml",
            f'<w:document xmlns:w="http://schemas.openxmlformats.org/wordprocessingml/2006/main"><w:body>{paragraphs}</w:body></w:document>',
        )
    return buffer.getvalue()


@pytest.mark.asyncio
async def test_file_takes_precedence_over_pasted_text() -> None:
    generator = _FakeGenerator()

    result = await build_quiz(
        generator=generator,
        question_type=QuestionType.TRUE_FALSE,
        count=2,
        text="ignored pasted text",
        source=SourceFile(name="unit.docx", data=_docx_bytes("Newton", "Kepler")),
    )

    assert result.source_name == "unit.docx"
    assert result.text == "Newton\nKepler"
    assert isinstance(result.questions, tuple)
    assert len(result.questions) == 2
    assert generator.calls == [("Newton\nKepler", QuestionType.TRUE_FALSE, 2)]


@pytest.mark.asyncio
async def test_pasted_text_is_used_without_file() -> None:
    generator = _FakeGenerator()

    result = await build_quiz(
        generator=generator,
        question_type=QuestionType.MULTIPLE_CHOICE,
        count=1,
        text="The heart pumps blood.",
    )

    assert result.source_name == "<pasted text>"
    assert generator.calls[0][0] == "The heart pumps blood."


@pytest.mark.asyncio
async def test_blank_extraction_fails_before_generation() -> None:
    generator = _FakeGenerator()
    dispatcher = ExtractionDispatcher({"docx": _StaticExtractor(" \n ")})

    with pytest.raises(EmptyExtractionError, match="blank.docx"):
        await build_quiz(
            generator=generator,
            question_type=QuestionType.TRUE_FALSE,
            count=3,
            source=SourceFile(name="blank.docx", data=b""),
            dispatcher=dispatcher,
        )

    assert generator.calls == []


@pytest.mark.asyncio
async def test_oversized_file_is_rejected_before_extraction() -> None:
    generator = _FakeGenerator()
    source = SourceFile(name="huge.pdf", data=b"\x00" * (MAX_UPLOAD_BYTES + 1))

    with pytest.raises(FileTooLargeError, match="10 MB"):
        await build_quiz(generator=generator, question_type=QuestionType.TRUE_FALSE, count=3, source=source)

    assert generator.calls == []


@pytest.mark.asyncio
async def test_unsupported_file_propagates_extraction_error() -> None:
    with pytest.raises(UnsupportedFormatError):
        await build_quiz(
            generator=_FakeGenerator(),
            question_type=QuestionType.TRUE_FALSE,
            count=3,
            source=SourceFile(name="notes.txt", data=b"text"),
        )


@pytest.mark.asyncio
async def test_missing_material_and_bad_count_are_input_errors() -> None:
    with pytest.raises(QuizInputError, match="learning material"):
        await build_quiz(generator=_FakeGenerator(), question_type=QuestionType.TRUE_FALSE, count=3, text="   ")

    with pytest.raises(QuizInputError, match="between 1 and 10"):
        await build_quiz(generator=_FakeGenerator(), question_type=QuestionType.TRUE_FALSE, count=11, text="ok")
