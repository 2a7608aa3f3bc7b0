"""Question types returned by the quiz generator."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

MULTIPLE_CHOICE_OPTION_COUNT = 4


class QuestionType(Enum):
    TRUE_FALSE = "TRUE_FALSE"
    MULTIPLE_CHOICE = "MULTIPLE_CHOICE"


@dataclass(frozen=True, slots=True)
class TrueFalseQuestion:
    """An O/X statement with its correct answer."""

    question: str
    answer: bool
    explanation: str

    def to_dict(self) -> dict[str, Any]:
        return {"question": self.question, "answer": self.answer, "explanation": self.explanation}


@dataclass(frozen=True, slots=True)
class MultipleChoiceQuestion:
    """A four-option question; ``correct_answer_index`` is 0-based."""

    question: str
    options: tuple[str, ...]
    correct_answer_index: int
    explanation: str

    def __post_init__(self) -> None:
        if len(self.options) != MULTIPLE_CHOICE_OPTION_COUNT:
            raise ValueError(f"Expected {MULTIPLE_CHOICE_OPTION_COUNT} options, got {len(self.options)}")
        if not 0 <= self.correct_answer_index < len(self.options):
            raise ValueError(f"correct_answer_index out of range: {self.correct_answer_index}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "question": self.question,
            "options": list(self.options),
            "correctAnswerIndex": self.correct_answer_index,
            "explanation": self.explanation,
        }


Question = Union[TrueFalseQuestion, MultipleChoiceQuestion]
