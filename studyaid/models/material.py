import uuid
from datetime import datetime, timezone

from sqlalchemy import CheckConstraint, Column, DateTime, String, Text, Uuid
from sqlalchemy.orm import relationship

from studyaid.db.interfaces.postgresql import Base

SOURCE_KINDS = ("uploaded", "pasted", "ai_generated")


class Material(Base):
    __tablename__ = "materials"

    __table_args__ = (
        CheckConstraint(
            "source_kind in ('uploaded', 'pasted', 'ai_generated')",
            name="ck_materials_source_kind",
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=False, index=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    source_kind = Column(String(16), nullable=False)
    summary = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(
        timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    notes = relationship("Note", back_populates="material", passive_deletes=True)
    flashcards = relationship("Flashcard", back_populates="material", passive_deletes=True)
    quizzes = relationship("Quiz", back_populates="material", passive_deletes=True)
