import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from studyaid.exceptions import PersistenceError
from studyaid.repositories.materials import MaterialsRepository
from studyaid.schemas.generation import GenerationResult

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY = "medium"


@dataclass
class FanoutResult:
    material_id: UUID
    title: str
    note_id: Optional[UUID] = None
    flashcard_count: int = 0
    quiz_id: Optional[UUID] = None
    question_count: int = 0


class MaterialFanout:
    """Persists one generation bundle as a material plus its derived records.

    Steps run in order and each commits separately. A failing step raises
    PersistenceError and stops the run; rows written by earlier steps stay.
    """

    def __init__(self, repo: MaterialsRepository):
        self.repo = repo

    def persist(
        self,
        result: GenerationResult,
        owner_id: UUID,
        source_kind: str,
        title: str,
        content: str,
    ) -> FanoutResult:
        material = self._step(
            "material",
            self.repo.create_material,
            owner_id=owner_id,
            title=title,
            content=content,
            source_kind=source_kind,
            summary=result.summary,
        )
        outcome = FanoutResult(material_id=material.id, title=title)

        if result.key_points is not None or result.examples is not None:
            note = self._step(
                "note",
                self.repo.create_note,
                owner_id=owner_id,
                material_id=material.id,
                title=f"{title} - Notes",
                content=result.summary,
                key_points=result.key_points,
                examples=result.examples,
            )
            outcome.note_id = note.id

        if result.flashcards:
            cards = self._step(
                "flashcards",
                self.repo.create_flashcards,
                [
                    {
                        "owner_id": owner_id,
                        "material_id": material.id,
                        "question": card.question,
                        "answer": card.answer,
                        "difficulty": card.difficulty or DEFAULT_DIFFICULTY,
                    }
                    for card in result.flashcards
                ],
            )
            outcome.flashcard_count = len(cards)

        if result.quiz_questions:
            quiz = self._step(
                "quiz",
                self.repo.create_quiz,
                owner_id=owner_id,
                material_id=material.id,
                title=f"{title} - Quiz",
            )
            outcome.quiz_id = quiz.id
            questions = self._step(
                "questions",
                self.repo.create_questions,
                quiz.id,
                [
                    {
                        "question_text": q.question,
                        "question_type": q.type,
                        "options": q.options or None,
                        "correct_answer": q.correct_answer,
                        "explanation": q.explanation or None,
                    }
                    for q in result.quiz_questions
                ],
            )
            outcome.question_count = len(questions)

        logger.info(
            f"Persisted material {material.id}: note={outcome.note_id is not None}, "
            f"flashcards={outcome.flashcard_count}, questions={outcome.question_count}"
        )
        return outcome

    def _step(self, name: str, write, *args, **kwargs):
        try:
            return write(*args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Fan-out step '{name}' failed: {e}")
            raise PersistenceError(f"Failed to save {name}: {e}", step=name) from e
