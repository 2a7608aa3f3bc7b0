"""Prompt and response-schema construction for question generation."""

from __future__ import annotations

from typing import Any

from quizdoc.quiz.models import MULTIPLE_CHOICE_OPTION_COUNT, QuestionType


def _describe(question_type: QuestionType) -> str:
    if question_type is QuestionType.TRUE_FALSE:
        return "True/False (O/X)"
    return f"{MULTIPLE_CHOICE_OPTION_COUNT}-option multiple choice"


def build_prompt(*, text: str, question_type: QuestionType, count: int, language: str) -> str:
    return (
        f"Based on the following learning material, please generate {count} questions in {language}. "
        f"The question type should be {_describe(question_type)}. "
        "For each question, provide a brief explanation for the correct answer. "
        "Do not use any markdown formatting in your response. "
        'Respond with a JSON object of the form {"questions": [...]}.\n\n'
        "Learning Material:\n"
        "---\n"
        f"{text}\n"
        "---"
    )


def _question_item_schema(question_type: QuestionType, language: str) -> dict[str, Any]:
    if question_type is QuestionType.TRUE_FALSE:
        return {
            "type": "object",
            "properties": {
                "question": {"type": "string", "description": f"The true/false question statement in {language}."},
                "answer": {"type": "boolean", "description": "The correct answer, true for 'O' and false for 'X'."},
                "explanation": {"type": "string", "description": f"A brief explanation in {language}."},
            },
            "required": ["question", "answer", "explanation"],
            "additionalProperties": False,
        }
    return {
        "type": "object",
        "properties": {
            "question": {"type": "string", "description": f"The multiple-choice question in {language}."},
            "options": {
                "type": "array",
                "items": {"type": "string"},
                "description": f"An array of {MULTIPLE_CHOICE_OPTION_COUNT} possible answers in {language}.",
            },
            "correctAnswerIndex": {
                "type": "integer",
                "description": "The 0-based index of the correct answer in the 'options' array.",
            },
            "explanation": {"type": "string", "description": f"A brief explanation in {language}."},
        },
        "required": ["question", "options", "correctAnswerIndex", "explanation"],
        "additionalProperties": False,
    }


def build_response_format(question_type: QuestionType, language: str) -> dict[str, Any]:
    """Structured-output request body accepted by OpenAI-compatible endpoints."""

    return {
        "type": "json_schema",
        "json_schema": {
            "name": "quiz_questions",
            "strict": True,
            "schema": {
                "type": "object",
                "properties": {
                    "questions": {"type": "array", "items": _question_item_schema(question_type, language)},
                },
                "required": ["questions"],
                "additionalProperties": False,
            },
        },
    }
