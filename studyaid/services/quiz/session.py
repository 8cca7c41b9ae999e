import logging
from enum import Enum
from typing import Callable, Dict, List, Optional
from uuid import UUID

from studyaid.exceptions import NotFoundOrEmpty
from studyaid.schemas.api.quizzes import QuestionDTO, QuizDTO
from studyaid.services.quiz.grading import QuizResult, ReviewItem, grade, is_playable, review_items
from studyaid.services.quiz.store import QuizStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]

DELETE_WARNING = (
    "This action cannot be undone. This will permanently delete the quiz "
    "and all its questions from our servers."
)


class QuizState(str, Enum):
    BROWSING = "browsing"
    LOADING = "loading"
    IN_PROGRESS = "in_progress"
    SUBMITTING = "submitting"
    RESULTS = "results"
    REVIEWING = "reviewing"


def log_notifier(level: str, message: str) -> None:
    logger.log(logging.ERROR if level == "error" else logging.INFO, message)


class QuizSession:
    """Drives one user's quiz browsing and quiz-taking.

    Storage errors are caught here and turned into notifications; the last
    one is kept on ``last_error``. Every storage call goes through ``store``,
    which is bound to the authenticated owner.
    """

    def __init__(self, store: QuizStore, notify: Optional[Notifier] = None):
        self.store = store
        self.notify = notify or log_notifier
        self.state = QuizState.BROWSING
        self.quizzes: List[QuizDTO] = []
        self.quiz: Optional[QuizDTO] = None
        self.questions: List[QuestionDTO] = []
        self.current_index = 0
        self.answers: Dict[UUID, str] = {}
        self.result: Optional[QuizResult] = None
        self.pending_delete: Optional[UUID] = None
        self.deleting = False
        self.last_error: Optional[Exception] = None

    # ---- browsing ----

    def refresh(self) -> List[QuizDTO]:
        """Re-fetch the quiz list; only meaningful while browsing."""
        if self.state is not QuizState.BROWSING:
            return self.quizzes
        try:
            self.quizzes = list(self.store.list_quizzes())
        except Exception as e:
            self._fail(e, "Failed to load quizzes")
        return self.quizzes

    def select_quiz(self, quiz: QuizDTO) -> bool:
        """Load a quiz's playable questions and start it.

        Returns False, staying in BROWSING, when the quiz cannot be started.
        """
        if self.state is not QuizState.BROWSING:
            return False
        if self.pending_delete is not None or self.deleting:
            # the delete control and the quiz card are separate targets
            return False

        self.state = QuizState.LOADING
        try:
            questions = self.store.fetch_questions(quiz.id)
        except Exception as e:
            self.state = QuizState.BROWSING
            self._fail(e, "Failed to load quiz questions")
            return False

        playable = [q for q in questions if is_playable(q.options)]
        if not playable:
            self.state = QuizState.BROWSING
            error = NotFoundOrEmpty(f"Quiz {quiz.id} has no playable questions")
            self._fail(error, error.user_message)
            return False

        dropped = len(questions) - len(playable)
        if dropped:
            logger.info(f"Dropped {dropped} question(s) without options from quiz {quiz.id}")

        self.quiz = quiz
        self.questions = playable
        self.current_index = 0
        self.answers = {}
        self.result = None
        self.state = QuizState.IN_PROGRESS
        return True

    # ---- taking the quiz ----

    @property
    def current_question(self) -> Optional[QuestionDTO]:
        if not self.questions:
            return None
        return self.questions[self.current_index]

    @property
    def is_last_question(self) -> bool:
        return bool(self.questions) and self.current_index == len(self.questions) - 1

    @property
    def progress(self) -> float:
        """Fraction of the quiz reached, counting the current question."""
        if not self.questions:
            return 0.0
        return (self.current_index + 1) / len(self.questions)

    def selected_answer(self) -> Optional[str]:
        question = self.current_question
        return self.answers.get(question.id) if question else None

    def select_answer(self, answer: str) -> None:
        if self.state is not QuizState.IN_PROGRESS:
            return
        self.answers[self.current_question.id] = answer

    def next(self) -> None:
        if self.state in (QuizState.IN_PROGRESS, QuizState.REVIEWING):
            self.current_index = min(self.current_index + 1, len(self.questions) - 1)

    def previous(self) -> None:
        if self.state in (QuizState.IN_PROGRESS, QuizState.REVIEWING):
            self.current_index = max(self.current_index - 1, 0)

    def submit(self) -> Optional[QuizResult]:
        """Grade and log the attempt; only offered on the last question.

        A failed attempt write is reported but results are still shown.
        """
        if self.state is not QuizState.IN_PROGRESS or not self.is_last_question:
            return None

        self.state = QuizState.SUBMITTING
        result = grade(self.questions, self.answers)
        try:
            self.store.record_attempt(self.quiz.id, result.percentage, result.total_questions)
            self.notify("success", f"Quiz completed! Score: {result.display_percentage}%")
        except Exception as e:
            self._fail(e, "Failed to save quiz results")

        self.result = result
        self.state = QuizState.RESULTS
        return result

    # ---- results ----

    def review_items(self) -> List[ReviewItem]:
        if self.state not in (QuizState.RESULTS, QuizState.REVIEWING):
            return []
        return review_items(self.questions, self.answers)

    def review(self) -> None:
        if self.state is QuizState.RESULTS:
            self.current_index = 0
            self.state = QuizState.REVIEWING

    def back_to_results(self) -> None:
        if self.state is QuizState.REVIEWING:
            self.state = QuizState.RESULTS

    def reset(self) -> None:
        """Exit to the quiz list, discarding questions and answers."""
        if self.state not in (QuizState.IN_PROGRESS, QuizState.RESULTS, QuizState.REVIEWING):
            return
        self.quiz = None
        self.questions = []
        self.current_index = 0
        self.answers = {}
        self.result = None
        self.state = QuizState.BROWSING

    def leave(self) -> None:
        """Drop all view state, including the quiz list; the next visit re-fetches."""
        self.reset()
        self.state = QuizState.BROWSING
        self.quizzes = []
        self.pending_delete = None
        self.deleting = False
        self.last_error = None

    # ---- deletion ----

    def request_delete(self, quiz_id: UUID) -> bool:
        if self.state is not QuizState.BROWSING or self.deleting:
            return False
        self.pending_delete = quiz_id
        return True

    def cancel_delete(self) -> None:
        if not self.deleting:
            self.pending_delete = None

    def confirm_delete(self) -> bool:
        """Delete the pending quiz and drop it from the local list.

        On failure the quiz stays listed and the confirmation stays open.
        """
        if self.pending_delete is None or self.deleting:
            return False
        quiz_id = self.pending_delete
        self.deleting = True
        try:
            self.store.delete_quiz(quiz_id)
        except Exception as e:
            self._fail(e, "Failed to delete quiz")
            return False
        finally:
            self.deleting = False

        self.quizzes = [quiz for quiz in self.quizzes if quiz.id != quiz_id]
        self.pending_delete = None
        logger.info(f"Deleted quiz {quiz_id}")
        self.notify("success", "Quiz deleted successfully!")
        return True

    def _fail(self, error: Exception, message: str) -> None:
        logger.error(f"{message}: {error}")
        self.last_error = error
        self.notify("error", message)
