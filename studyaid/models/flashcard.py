import uuid
from datetime import datetime, timezone

from sqlalchemy import Boolean, CheckConstraint, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from studyaid.db.interfaces.postgresql import Base

DIFFICULTIES = ("easy", "medium", "hard")


class Flashcard(Base):
    __tablename__ = "flashcards"

    __table_args__ = (
        CheckConstraint(
            "difficulty in ('easy', 'medium', 'hard')",
            name="ck_flashcards_difficulty",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=False, index=True)
    material_id = Column(Uuid, ForeignKey("materials.id", ondelete="CASCADE"), nullable=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    difficulty = Column(String(8), nullable=False, default="medium")
    is_starred = Column(Boolean, nullable=False, default=False)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))

    material = relationship("Material", back_populates="flashcards")
