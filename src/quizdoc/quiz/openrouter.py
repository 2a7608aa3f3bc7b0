"""OpenRouter chat client that turns learning material into quiz questions."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
import time
from typing import Any, Callable

from quizdoc.quiz.config import QuizSettings
from quizdoc.quiz.models import MultipleChoiceQuestion, Question, QuestionType, TrueFalseQuestion
from quizdoc.quiz.prompts import build_prompt, build_response_format

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}
_SYSTEM_PROMPT = "You write quiz questions strictly from the supplied learning material."


@dataclass(slots=True)
class QuestionGenerationError(RuntimeError):
    """Domain error raised for failed generation requests or unusable responses."""

    model: str
    message: str

    def __str__(self) -> str:
        return f"{self.message} (model={self.model})"


def _build_default_client(settings: QuizSettings) -> Any:
    try:
        from openai import OpenAI
    except Exception as exc:  # pragma: no cover - environment-dependent
        raise QuestionGenerationError(
            model=settings.model,
            message=f"OpenAI SDK unavailable for OpenRouter client: {exc}",
        ) from exc

    return OpenAI(api_key=settings.api_key, base_url=settings.base_url)


def _is_retryable(exc: Exception) -> bool:
    status_code = getattr(exc, "status_code", None)
    if status_code in _RETRYABLE_STATUS_CODES:
        return True

    if isinstance(exc, (TimeoutError, ConnectionError)):
        return True

    return type(exc).__name__ in {
        "RateLimitError",
        "APITimeoutError",
        "APIConnectionError",
        "InternalServerError",
    }


def _response_text(response: Any, *, model: str) -> str:
    choices = getattr(response, "choices", None)
    if not isinstance(choices, list) or not choices:
        raise QuestionGenerationError(model=model, message="Generation response missing choices")

    first = choices[0]
    message = getattr(first, "message", None)
    content = getattr(message, "content", None) if message is not None else None
    if content is None and isinstance(first, dict):
        message_dict = first.get("message", {})
        if isinstance(message_dict, dict):
            content = message_dict.get("content")

    if isinstance(content, list):
        content = "".join(str(part.get("text", "")) for part in content if isinstance(part, dict))

    text = str(content or "").strip()
    if not text:
        raise QuestionGenerationError(model=model, message="Received an empty response from the API")
    return text


def _strip_code_fence(text: str) -> str:
    if not text.startswith("```"):
        return text
    body = text.split("\n", 1)[1] if "\n" in text else ""
    return body.rsplit("```", 1)[0].strip()


def _parse_question(item: Any, question_type: QuestionType) -> Question:
    if not isinstance(item, dict):
        raise ValueError("question entry is not an object")

    question = str(item["question"]).strip()
    explanation = str(item["explanation"]).strip()
    if not question:
        raise ValueError("question text is empty")

    if question_type is QuestionType.TRUE_FALSE:
        answer = item["answer"]
        if not isinstance(answer, bool):
            raise ValueError("answer must be a boolean")
        return TrueFalseQuestion(question=question, answer=answer, explanation=explanation)

    options = item["options"]
    index = item["correctAnswerIndex"]
    if not isinstance(options, list):
        raise ValueError("options must be a list")
    if isinstance(index, bool) or not isinstance(index, int):
        raise ValueError("correctAnswerIndex must be an integer")
    return MultipleChoiceQuestion(
        question=question,
        options=tuple(str(option).strip() for option in options),
        correct_answer_index=index,
        explanation=explanation,
    )


def parse_questions(raw_text: str, question_type: QuestionType, *, model: str) -> list[Question]:
    """Decode the model's JSON reply into validated question objects."""

    try:
        payload = json.loads(_strip_code_fence(raw_text))
    except json.JSONDecodeError as exc:
        raise QuestionGenerationError(model=model, message=f"API response is not valid JSON: {exc}") from exc

    if isinstance(payload, dict):
        payload = payload.get("questions")
    if not isinstance(payload, list):
        raise QuestionGenerationError(model=model, message="API response is not in the expected array format")

    questions: list[Question] = []
    for position, item in enumerate(payload, start=1):
        try:
            questions.append(_parse_question(item, question_type))
        except (KeyError, TypeError, ValueError) as exc:
            raise QuestionGenerationError(model=model, message=f"Invalid question #{position}: {exc}") from exc
    return questions


class QuizGenerator:
    """OpenRouter question generation wrapper with response validation and retries."""

    def __init__(
        self,
        settings: QuizSettings,
        *,
        client: Any | None = None,
        max_retries: int = 2,
        retry_base_seconds: float = 0.25,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 0:
            raise ValueError("max_retries cannot be negative")
        if retry_base_seconds < 0:
            raise ValueError("retry_base_seconds cannot be negative")

        self._settings = settings
        self._client = client or _build_default_client(settings)
        self._max_retries = max_retries
        self._retry_base_seconds = retry_base_seconds
        self._sleep = sleep

    @property
    def model(self) -> str:
        return self._settings.model

    def generate(self, text: str, question_type: QuestionType, count: int) -> list[Question]:
        material = text.strip()
        if not material:
            raise ValueError("text cannot be empty")
        if count < 1:
            raise ValueError("count must be >= 1")

        prompt = build_prompt(
            text=material,
            question_type=question_type,
            count=count,
            language=self._settings.language,
        )
        response = self._request_generation(prompt=prompt, question_type=question_type)
        questions = parse_questions(_response_text(response, model=self.model), question_type, model=self.model)
        logger.info("Generated %d %s question(s) with %s", len(questions), question_type.value, self.model)
        return questions

    def _request_generation(self, *, prompt: str, question_type: QuestionType) -> Any:
        attempts = self._max_retries + 1
        last_error: Exception | None = None

        for attempt in range(attempts):
            try:
                return self._client.chat.completions.create(
                    model=self._settings.model,
                    messages=[
                        {"role": "system", "content": _SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    temperature=self._settings.temperature,
                    response_format=build_response_format(question_type, self._settings.language),
                )
            except Exception as exc:  # pragma: no cover - covered via tests with stubs
                last_error = exc
                should_retry = attempt < self._max_retries and _is_retryable(exc)
                if not should_retry:
                    break
                delay = self._retry_base_seconds * (2**attempt)
                logger.warning("Generation attempt %d failed, retrying in %.2fs: %s", attempt + 1, delay, exc)
                self._sleep(delay)

        detail = str(last_error) if last_error is not None else "unknown OpenRouter error"
        raise QuestionGenerationError(
            model=self._settings.model,
            message=f"Generation request failed after {attempts} attempt(s): {detail}",
        ) from last_error
