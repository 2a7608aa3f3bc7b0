"""Runtime configuration for question generation."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Mapping


DEFAULT_OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_OPENROUTER_CHAT_MODEL = "google/gemini-2.5-flash"
DEFAULT_QUIZ_LANGUAGE = "Korean"
DEFAULT_QUIZ_TEMPERATURE = 0.7


def _parse_temperature(raw_value: str) -> float:
    value = float(raw_value)
    if not 0.0 <= value <= 2.0:
        raise ValueError("QUIZ_TEMPERATURE must be between 0 and 2")
    return value


@dataclass(frozen=True, slots=True)
class QuizSettings:
    """Validated OpenRouter settings used by the question generator."""

    api_key: str
    model: str = DEFAULT_OPENROUTER_CHAT_MODEL
    base_url: str = DEFAULT_OPENROUTER_BASE_URL
    language: str = DEFAULT_QUIZ_LANGUAGE
    temperature: float = DEFAULT_QUIZ_TEMPERATURE

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "QuizSettings":
        source: Mapping[str, str] = os.environ if environ is None else environ

        api_key = source.get("OPENROUTER_API_KEY", "").strip()
        if not api_key:
            raise ValueError("Missing required quiz environment variable: OPENROUTER_API_KEY")

        model = source.get("OPENROUTER_CHAT_MODEL", DEFAULT_OPENROUTER_CHAT_MODEL).strip()
        base_url = source.get("OPENROUTER_BASE_URL", DEFAULT_OPENROUTER_BASE_URL).strip()
        language = source.get("QUIZ_LANGUAGE", DEFAULT_QUIZ_LANGUAGE).strip()
        temperature_raw = source.get("QUIZ_TEMPERATURE", str(DEFAULT_QUIZ_TEMPERATURE)).strip()

        if not model:
            raise ValueError("OPENROUTER_CHAT_MODEL cannot be empty")
        if not base_url:
            raise ValueError("OPENROUTER_BASE_URL cannot be empty")
        if not (base_url.startswith("http://") or base_url.startswith("https://")):
            raise ValueError("OPENROUTER_BASE_URL must start with http:// or https://")
        if not language:
            raise ValueError("QUIZ_LANGUAGE cannot be empty")
        if not temperature_raw:
            raise ValueError("QUIZ_TEMPERATURE cannot be empty")

        return cls(
            api_key=api_key,
            model=model,
            base_url=base_url.rstrip("/"),
            language=language,
            temperature=_parse_temperature(temperature_raw),
        )
