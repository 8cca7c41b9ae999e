from typing import Optional

from pydantic import BaseModel, Field


class ProfileStats(BaseModel):
    """Per-user study counters."""

    materials_count: int = 0
    notes_count: int = 0
    flashcards_count: int = 0
    quizzes_count: int = 0
    attempts_count: int = 0
    average_score: Optional[float] = Field(
        None, description="Mean attempt percentage, None before the first attempt"
    )
