from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class NoteDTO(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    material_id: Optional[UUID] = None
    title: str
    content: str
    key_points: Optional[List[str]] = None
    examples: Optional[List[str]] = None
    created_at: Optional[datetime] = None
