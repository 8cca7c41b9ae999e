from typing import List, Protocol
from uuid import UUID

from studyaid.schemas.api.quizzes import QuestionDTO, QuizDTO


class QuizStore(Protocol):
    """Owner-scoped storage operations the quiz session needs.

    Implementations are bound to one authenticated owner.
    """

    def list_quizzes(self) -> List[QuizDTO]:
        ...

    def fetch_questions(self, quiz_id: UUID) -> List[QuestionDTO]:
        ...

    def record_attempt(self, quiz_id: UUID, score: float, total_questions: int) -> None:
        ...

    def delete_quiz(self, quiz_id: UUID) -> None:
        """Delete the quiz's questions, then the quiz."""
        ...
