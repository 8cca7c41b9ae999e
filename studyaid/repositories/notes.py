from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from studyaid.models import Note


class NotesRepository:
    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, note_id: UUID, owner_id: UUID) -> Optional[Note]:
        stmt = select(Note).where(Note.id == note_id, Note.owner_id == owner_id)
        return self.session.scalar(stmt)

    def list_for_owner(self, owner_id: UUID, limit: int = 100, offset: int = 0) -> List[Note]:
        stmt = (
            select(Note)
            .where(Note.owner_id == owner_id)
            .order_by(Note.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def count_for_owner(self, owner_id: UUID) -> int:
        stmt = select(func.count(Note.id)).where(Note.owner_id == owner_id)
        return self.session.scalar(stmt) or 0

    def delete(self, note_id: UUID, owner_id: UUID) -> bool:
        """Delete one note; False when the owner has no such note."""
        stmt = delete(Note).where(Note.id == note_id, Note.owner_id == owner_id)
        try:
            result = self.session.execute(stmt)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return bool(result.rowcount)
