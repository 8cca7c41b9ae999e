import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, String, Text, Uuid
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from studyaid.db.interfaces.postgresql import Base


class Note(Base):
    __tablename__ = "notes"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    owner_id = Column(Uuid, nullable=False, index=True)
    material_id = Column(Uuid, ForeignKey("materials.id", ondelete="CASCADE"), nullable=True)
    title = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    key_points = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)
    examples = Column(JSON().with_variant(JSONB(), "postgresql"), nullable=True)

    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime(timezone=True), default=lambda: datetime.now(
        timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    material = relationship("Material", back_populates="notes")
