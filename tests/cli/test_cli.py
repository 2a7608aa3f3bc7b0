from __future__ import annotations

import json
from pathlib import Path

from openpyxl import Workbook
import pytest

from quizdoc.cli.extract_text import main as extract_main
from quizdoc.cli.generate_quiz import main as quiz_main
from quizdoc.extraction.models import SourceFile
from quizdoc.quiz.models import MultipleChoiceQuestion, QuestionType


class _FakeGenerator:
    def __init__(self) -> None:
        self.calls: list[tuple[str, QuestionType, int]] = []

    def generate(self, text: str, question_type: QuestionType, count: int) -> list[MultipleChoiceQuestion]:
        self.calls.append((text, question_type, count))
        return [
            MultipleChoiceQuestion(
                question="Pick one",
                options=("a", "b", "c", "d"),
                correct_answer_index=2,
                explanation="c is right",
            )
        ]


def _write_xlsx(path: Path) -> None:
    workbook = Workbook()
    workbook.active.append(["term", "definition"])
    workbook.active.append(["ATP", "energy currency"])
    workbook.save(path)


def test_extract_cli_prints_text(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "glossary.xlsx"
    _write_xlsx(path)

    exit_code = extract_main(["--path", str(path)])

    assert exit_code == 0
    assert "term,definition\nATP,energy currency\n" in capsys.readouterr().out


def test_extract_cli_reports_unsupported_format_as_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "notes.txt"
    path.write_text("hello", encoding="utf-8")

    exit_code = extract_main(["--path", str(path), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["kind"] == "UnsupportedFormatError"
    assert ".txt" in payload["error"]


def test_extract_cli_rejects_missing_path(tmp_path: Path) -> None:
    assert extract_main(["--path", str(tmp_path / "absent.pdf")]) == 2


def _deny_read(path: Path) -> SourceFile:
    raise PermissionError(13, "Permission denied", str(path))


def test_extract_cli_reports_unreadable_file_as_json(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "locked.pdf"
    path.write_bytes(b"%PDF-1.4")
    monkeypatch.setattr(SourceFile, "from_path", _deny_read)

    exit_code = extract_main(["--path", str(path), "--json"])

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["kind"] == "PermissionError"
    assert "Permission denied" in payload["error"]


def test_quiz_cli_reports_unreadable_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str], monkeypatch: pytest.MonkeyPatch
) -> None:
    path = tmp_path / "locked.docx"
    path.write_bytes(b"PK")
    monkeypatch.setattr(SourceFile, "from_path", _deny_read)

    exit_code = quiz_main(["--path", str(path)], generator=_FakeGenerator())

    assert exit_code == 1
    assert "Permission denied" in capsys.readouterr().err


def test_quiz_cli_emits_question_json(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    path = tmp_path / "glossary.xlsx"
    _write_xlsx(path)
    generator = _FakeGenerator()

    exit_code = quiz_main(["--path", str(path), "--type", "mc", "--count", "1"], generator=generator)

    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["source"] == "glossary.xlsx"
    assert payload["type"] == "MULTIPLE_CHOICE"
    assert payload["questions"][0]["correctAnswerIndex"] == 2
    assert generator.calls[0][1] is QuestionType.MULTIPLE_CHOICE


def test_quiz_cli_returns_error_code_for_blank_text(capsys: pytest.CaptureFixture[str]) -> None:
    exit_code = quiz_main(["--text", "   "], generator=_FakeGenerator())

    assert exit_code == 1
    assert "learning material" in capsys.readouterr().err


def test_quiz_cli_requires_api_key_without_injected_generator(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OPENROUTER_API_KEY", raising=False)

    assert quiz_main(["--text", "Some material"]) == 2
