"""Question generation over extracted learning material."""

from .config import QuizSettings
from .models import MultipleChoiceQuestion, Question, QuestionType, TrueFalseQuestion
from .openrouter import QuestionGenerationError, QuizGenerator
from .service import FileTooLargeError, QuizInputError, QuizResult, build_quiz

__all__ = [
    "QuizSettings",
    "Question",
    "QuestionType",
    "TrueFalseQuestion",
    "MultipleChoiceQuestion",
    "QuizGenerator",
    "QuestionGenerationError",
    "QuizInputError",
    "FileTooLargeError",
    "QuizResult",
    "build_quiz",
]
