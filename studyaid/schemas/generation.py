"""Pydantic models for the structured study bundle returned by the AI gateway."""

import json
from typing import Any, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _as_text(value: Any) -> str:
    """Scalars as their JSON text, so booleans read "true"/"false"."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bool, int, float)) or value is None:
        return json.dumps(value)
    return str(value)


class GeneratedFlashcard(BaseModel):
    """One flashcard proposed by the model."""

    model_config = ConfigDict(extra="ignore")

    question: str
    answer: str
    difficulty: Optional[Literal["easy", "medium", "hard"]] = Field(
        None, description="Defaults to medium at persistence time when missing"
    )

    @field_validator("difficulty", mode="before")
    @classmethod
    def _normalize_difficulty(cls, value: Any) -> Optional[str]:
        if not isinstance(value, str):
            return None
        value = value.strip().lower()
        return value if value in ("easy", "medium", "hard") else None


class GeneratedQuestion(BaseModel):
    """One quiz question proposed by the model."""

    model_config = ConfigDict(extra="ignore")

    question: str
    type: Literal["multiple_choice", "true_false", "short_answer"]
    options: Optional[List[str]] = None
    correct_answer: str
    explanation: Optional[str] = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.strip().lower()
            for sep in ("/", "-", " "):
                value = value.replace(sep, "_")
        return value

    @field_validator("options", mode="before")
    @classmethod
    def _coerce_options(cls, value: Any) -> Any:
        if isinstance(value, dict):
            value = list(value.values())
        if isinstance(value, list):
            return [_as_text(option) for option in value]
        return value

    @field_validator("correct_answer", mode="before")
    @classmethod
    def _coerce_answer(cls, value: Any) -> Any:
        # true/false answers sometimes arrive as JSON booleans
        if isinstance(value, (bool, int, float)):
            return _as_text(value)
        return value


class GenerationResult(BaseModel):
    """Validated generation bundle, the input of the persistence fan-out."""

    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(None, description="Only requested on the topic path")
    summary: str
    flashcards: List[GeneratedFlashcard] = Field(default_factory=list)
    key_points: Optional[List[str]] = None
    examples: Optional[List[str]] = None
    quiz_questions: List[GeneratedQuestion] = Field(default_factory=list)

    @field_validator("flashcards", "quiz_questions", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value
