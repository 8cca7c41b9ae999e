from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PasteMaterialRequest(BaseModel):
    """Pasted study text to analyse."""

    content: str = Field(..., description="Raw study material text")
    title: Optional[str] = Field(
        None, description="Material title; defaults to the first 100 characters of the content"
    )


class TopicMaterialRequest(BaseModel):
    """Topic to generate study material for."""

    topic: str = Field(..., description="Subject to study, e.g. 'Osmosis'")


class GenerationResponse(BaseModel):
    """Outcome of a generation + fan-out run."""

    material_id: UUID
    title: str
    note_id: Optional[UUID] = None
    flashcard_count: int = 0
    quiz_id: Optional[UUID] = None
    question_count: int = 0
    message: str = Field(..., description="Success notification for the client")
    next_view: Literal["notes"] = Field(
        "notes", description="View the client should navigate to"
    )


class MaterialDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    source_kind: str
    summary: Optional[str] = None
    created_at: Optional[datetime] = None
