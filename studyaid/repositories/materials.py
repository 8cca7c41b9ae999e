from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from studyaid.models import Flashcard, Material, Note, Question, Quiz


class MaterialsRepository:
    """Writes and reads for a material and the records derived from it.

    Every write commits on its own; callers get no cross-step transaction.
    """

    def __init__(self, session: Session):
        self.session = session

    def _commit(self, *objects) -> None:
        try:
            self.session.add_all(objects)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def create_material(
        self, owner_id: UUID, title: str, content: str, source_kind: str, summary: Optional[str]
    ) -> Material:
        material = Material(
            owner_id=owner_id,
            title=title,
            content=content,
            source_kind=source_kind,
            summary=summary,
        )
        self._commit(material)
        return material

    def create_note(
        self,
        owner_id: UUID,
        material_id: UUID,
        title: str,
        content: str,
        key_points: Optional[List[str]],
        examples: Optional[List[str]],
    ) -> Note:
        note = Note(
            owner_id=owner_id,
            material_id=material_id,
            title=title,
            content=content,
            key_points=key_points,
            examples=examples,
        )
        self._commit(note)
        return note

    def create_flashcards(self, records: Iterable[dict]) -> List[Flashcard]:
        cards = [Flashcard(**record) for record in records]
        if cards:
            self._commit(*cards)
        return cards

    def create_quiz(self, owner_id: UUID, material_id: Optional[UUID], title: str) -> Quiz:
        quiz = Quiz(owner_id=owner_id, material_id=material_id, title=title)
        self._commit(quiz)
        return quiz

    def create_questions(self, quiz_id: UUID, records: Iterable[dict]) -> List[Question]:
        questions = [
            Question(quiz_id=quiz_id, position=position, **record)
            for position, record in enumerate(records)
        ]
        if questions:
            self._commit(*questions)
        return questions

    def get_by_id(self, material_id: UUID, owner_id: UUID) -> Optional[Material]:
        stmt = select(Material).where(Material.id == material_id, Material.owner_id == owner_id)
        return self.session.scalar(stmt)

    def list_for_owner(self, owner_id: UUID, limit: int = 100, offset: int = 0) -> List[Material]:
        stmt = (
            select(Material)
            .where(Material.owner_id == owner_id)
            .order_by(Material.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.scalars(stmt))

    def count_for_owner(self, owner_id: UUID) -> int:
        stmt = select(func.count(Material.id)).where(Material.owner_id == owner_id)
        return self.session.scalar(stmt) or 0

    def count_flashcards(self, owner_id: UUID) -> int:
        stmt = select(func.count(Flashcard.id)).where(Flashcard.owner_id == owner_id)
        return self.session.scalar(stmt) or 0
