from datetime import datetime
from typing import Any, List, Optional, Union
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class QuizDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    material_id: Optional[UUID] = None
    created_at: Optional[datetime] = None


class QuestionDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    quiz_id: UUID
    question_text: str
    question_type: str
    options: Optional[Union[List[Any], dict]] = Field(
        None, description="Option strings; legacy rows may hold a mapping"
    )
    correct_answer: str
    explanation: Optional[str] = None


class AttemptCreate(BaseModel):
    score: float = Field(..., ge=0, le=100, description="Unrounded percentage")
    total_questions: int = Field(..., ge=1)


class AttemptDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    quiz_id: UUID
    score: float
    total_questions: int
    completed_at: Optional[datetime] = None
