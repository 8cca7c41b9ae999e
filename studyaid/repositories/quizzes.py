from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from studyaid.models import Question, Quiz, QuizAttempt


class QuizzesRepository:
    """Data access for quizzes, their questions and attempts.

    Question rows carry no owner column; they are reached through the
    owning quiz.
    """

    def __init__(self, session: Session):
        self.session = session

    def get_by_id(self, quiz_id: UUID, owner_id: UUID) -> Optional[Quiz]:
        stmt = select(Quiz).where(Quiz.id == quiz_id, Quiz.owner_id == owner_id)
        return self.session.scalar(stmt)

    def list_for_owner(self, owner_id: UUID) -> List[Quiz]:
        stmt = (
            select(Quiz)
            .where(Quiz.owner_id == owner_id)
            .order_by(Quiz.created_at.desc())
        )
        return list(self.session.scalars(stmt))

    def get_questions(self, quiz_id: UUID, owner_id: UUID) -> List[Question]:
        stmt = (
            select(Question)
            .join(Quiz, Question.quiz_id == Quiz.id)
            .where(Question.quiz_id == quiz_id, Quiz.owner_id == owner_id)
            .order_by(Question.position)
        )
        return list(self.session.scalars(stmt))

    def delete_with_questions(self, quiz_id: UUID, owner_id: UUID) -> int:
        """Delete the quiz's questions, then the quiz.

        :returns: number of questions removed
        :raises LookupError: the owner has no such quiz
        """
        if self.get_by_id(quiz_id, owner_id) is None:
            raise LookupError(f"Quiz {quiz_id} not found")
        try:
            removed = self.session.execute(
                delete(Question).where(Question.quiz_id == quiz_id)
            ).rowcount
            self.session.execute(
                delete(Quiz).where(Quiz.id == quiz_id, Quiz.owner_id == owner_id)
            )
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return removed or 0

    def record_attempt(
        self, owner_id: UUID, quiz_id: UUID, score: float, total_questions: int
    ) -> QuizAttempt:
        attempt = QuizAttempt(
            owner_id=owner_id,
            quiz_id=quiz_id,
            score=score,
            total_questions=total_questions,
        )
        try:
            self.session.add(attempt)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return attempt

    def list_attempts(self, owner_id: UUID, limit: int = 50) -> List[QuizAttempt]:
        stmt = (
            select(QuizAttempt)
            .where(QuizAttempt.owner_id == owner_id)
            .order_by(QuizAttempt.completed_at.desc())
            .limit(limit)
        )
        return list(self.session.scalars(stmt))

    def count_for_owner(self, owner_id: UUID) -> int:
        stmt = select(func.count(Quiz.id)).where(Quiz.owner_id == owner_id)
        return self.session.scalar(stmt) or 0

    def attempt_stats(self, owner_id: UUID) -> tuple[int, Optional[float]]:
        """(attempt count, mean score) for the owner."""
        stmt = select(func.count(QuizAttempt.id), func.avg(QuizAttempt.score)).where(
            QuizAttempt.owner_id == owner_id
        )
        count, average = self.session.execute(stmt).one()
        return count or 0, float(average) if average is not None else None
