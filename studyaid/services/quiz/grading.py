import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from studyaid.schemas.api.quizzes import QuestionDTO

NOT_ANSWERED = "Not answered"


def is_playable(options: Any) -> bool:
    """A question can be shown as a radio-button prompt only with options."""
    if isinstance(options, (list, tuple, dict)):
        return len(options) > 0
    return False


def option_list(options: Any) -> List[str]:
    """Option strings in display order; mappings contribute their values."""
    if isinstance(options, dict):
        options = list(options.values())
    if not options:
        return []
    return [str(option) for option in options]


def display_percentage(percentage: float) -> int:
    """Round half up for display; the stored percentage stays unrounded."""
    return int(math.floor(percentage + 0.5))


@dataclass(frozen=True)
class QuizResult:
    score: int
    total_questions: int
    percentage: float

    @property
    def display_percentage(self) -> int:
        return display_percentage(self.percentage)


@dataclass(frozen=True)
class ReviewItem:
    number: int
    question_id: UUID
    question_text: str
    user_answer: Optional[str]
    is_correct: bool
    correct_answer: Optional[str]
    explanation: Optional[str]

    @property
    def answer_label(self) -> str:
        return self.user_answer if self.user_answer is not None else NOT_ANSWERED


def grade(questions: Sequence[QuestionDTO], answers: Dict[UUID, str]) -> QuizResult:
    """Count exact, case-sensitive matches against correct_answer."""
    total = len(questions)
    score = sum(1 for q in questions if answers.get(q.id) == q.correct_answer)
    percentage = (score / total) * 100 if total else 0.0
    return QuizResult(score=score, total_questions=total, percentage=percentage)


def review_items(questions: Sequence[QuestionDTO], answers: Dict[UUID, str]) -> List[ReviewItem]:
    items = []
    for number, question in enumerate(questions, 1):
        answer = answers.get(question.id)
        correct = answer == question.correct_answer
        items.append(
            ReviewItem(
                number=number,
                question_id=question.id,
                question_text=question.question_text,
                user_answer=answer,
                is_correct=correct,
                correct_answer=None if correct else question.correct_answer,
                explanation=question.explanation,
            )
        )
    return items
