import uuid
from typing import Dict, List

import pytest

from studyaid.exceptions import NotFoundOrEmpty
from studyaid.schemas.api.quizzes import QuestionDTO, QuizDTO
from studyaid.schemas.generation import GeneratedQuestion
from studyaid.services.quiz.grading import display_percentage, grade
from studyaid.services.quiz.session import QuizSession, QuizState


class FakeQuizStore:
    def __init__(self):
        self.quizzes: List[QuizDTO] = []
        self.questions: Dict[uuid.UUID, List[QuestionDTO]] = {}
        self.attempts = []
        self.deleted = []
        self.list_calls = 0
        self.fail_attempt = False
        self.fail_delete = False

    def add_quiz(self, title, options_per_question) -> QuizDTO:
        quiz = QuizDTO(id=uuid.uuid4(), title=title)
        self.quizzes.append(quiz)
        self.questions[quiz.id] = [
            QuestionDTO(
                id=uuid.uuid4(),
                quiz_id=quiz.id,
                question_text=f"{title} Q{i + 1}",
                question_type="multiple_choice",
                options=options,
                correct_answer="A",
                explanation=f"Explanation {i + 1}",
            )
            for i, options in enumerate(options_per_question)
        ]
        return quiz

    def list_quizzes(self):
        self.list_calls += 1
        return list(self.quizzes)

    def fetch_questions(self, quiz_id):
        return list(self.questions[quiz_id])

    def record_attempt(self, quiz_id, score, total_questions):
        if self.fail_attempt:
            raise RuntimeError("network down")
        self.attempts.append((quiz_id, score, total_questions))

    def delete_quiz(self, quiz_id):
        if self.fail_delete:
            raise RuntimeError("network down")
        self.deleted.append(quiz_id)
        self.quizzes = [q for q in self.quizzes if q.id != quiz_id]


@pytest.fixture
def store():
    return FakeQuizStore()


@pytest.fixture
def notices():
    return []


@pytest.fixture
def session(store, notices):
    return QuizSession(store, notify=lambda level, message: notices.append((level, message)))


ABC = ["A", "B", "C"]


def test_partial_answers_are_graded_and_reviewed(store, session, notices) -> None:
    quiz = store.add_quiz("Cells", [ABC, ABC, ABC])
    session.refresh()

    assert session.select_quiz(quiz)
    session.select_answer("A")
    session.next()
    session.select_answer("B")
    session.next()
    assert session.is_last_question
    result = session.submit()

    assert session.state is QuizState.RESULTS
    assert result.score == 1
    assert result.total_questions == 3
    assert result.percentage == pytest.approx(33.333, abs=0.01)
    assert result.display_percentage == 33
    assert store.attempts == [(quiz.id, result.percentage, 3)]
    assert notices[-1] == ("success", "Quiz completed! Score: 33%")

    items = session.review_items()
    assert [item.is_correct for item in items] == [True, False, False]
    assert items[0].correct_answer is None
    assert items[1].correct_answer == "A"
    assert items[2].answer_label == "Not answered"
    assert items[2].explanation == "Explanation 3"


def test_questions_without_options_are_dropped(store, session) -> None:
    quiz = store.add_quiz("Mixed", [ABC, None, [], {}, {"a": "A", "b": "B"}])

    assert session.select_quiz(quiz)

    assert len(session.questions) == 2
    assert session.questions[1].options == {"a": "A", "b": "B"}


def test_quiz_without_playable_questions_stays_browsing(store, session, notices) -> None:
    quiz = store.add_quiz("Essay", [None, []])

    assert not session.select_quiz(quiz)

    assert session.state is QuizState.BROWSING
    assert isinstance(session.last_error, NotFoundOrEmpty)
    assert notices[-1] == ("error", "No valid multiple choice questions found in this quiz.")


def test_navigation_is_clamped(store, session) -> None:
    quiz = store.add_quiz("Nav", [ABC, ABC, ABC])
    session.select_quiz(quiz)

    session.previous()
    assert session.current_index == 0
    assert session.submit() is None
    session.next()
    session.next()
    session.next()
    assert session.current_index == 2
    assert session.progress == pytest.approx(1.0)


def test_answers_survive_navigation(store, session) -> None:
    quiz = store.add_quiz("Nav", [ABC, ABC])
    session.select_quiz(quiz)

    session.select_answer("C")
    session.next()
    session.previous()

    assert session.selected_answer() == "C"


def test_reset_is_idempotent(store, session) -> None:
    quiz = store.add_quiz("Reset", [ABC])
    session.select_quiz(quiz)
    session.select_answer("A")

    session.reset()
    session.reset()

    assert session.state is QuizState.BROWSING
    assert session.quiz is None
    assert session.questions == []
    assert session.answers == {}
    assert session.current_index == 0


def test_review_then_back_to_results(store, session) -> None:
    quiz = store.add_quiz("Review", [ABC, ABC])
    session.select_quiz(quiz)
    session.next()
    session.submit()

    session.review()
    assert session.state is QuizState.REVIEWING
    assert session.current_index == 0
    session.select_answer("B")
    assert session.answers == {}
    session.next()
    assert session.current_index == 1
    session.back_to_results()
    assert session.state is QuizState.RESULTS


def test_failed_attempt_still_shows_results(store, session, notices) -> None:
    quiz = store.add_quiz("Offline", [ABC])
    store.fail_attempt = True
    session.select_quiz(quiz)
    session.select_answer("A")

    result = session.submit()

    assert session.state is QuizState.RESULTS
    assert result.score == 1
    assert notices[-1] == ("error", "Failed to save quiz results")


def test_delete_removes_quiz_without_refetch(store, session, notices) -> None:
    keep = store.add_quiz("Keep", [ABC])
    drop = store.add_quiz("Drop", [ABC])
    session.refresh()

    assert session.request_delete(drop.id)
    assert not session.select_quiz(drop)
    assert session.confirm_delete()

    assert [q.id for q in session.quizzes] == [keep.id]
    assert store.deleted == [drop.id]
    assert store.list_calls == 1
    assert session.pending_delete is None
    assert notices[-1] == ("success", "Quiz deleted successfully!")


def test_cancelled_delete_changes_nothing(store, session) -> None:
    quiz = store.add_quiz("Keep", [ABC])
    session.refresh()

    session.request_delete(quiz.id)
    session.cancel_delete()

    assert session.pending_delete is None
    assert store.deleted == []
    assert session.select_quiz(quiz)


def test_failed_delete_keeps_quiz_listed(store, session, notices) -> None:
    quiz = store.add_quiz("Sticky", [ABC])
    store.fail_delete = True
    session.refresh()
    session.request_delete(quiz.id)

    assert not session.confirm_delete()

    assert [q.id for q in session.quizzes] == [quiz.id]
    assert session.pending_delete == quiz.id
    assert not session.deleting
    assert notices[-1] == ("error", "Failed to delete quiz")


def test_display_percentage_rounds_half_up() -> None:
    assert display_percentage(100 / 3) == 33
    assert display_percentage(200 / 3) == 67
    assert display_percentage(62.5) == 63
    assert display_percentage(0.0) == 0


def _question(options, correct_answer) -> QuestionDTO:
    return QuestionDTO(
        id=uuid.uuid4(),
        quiz_id=uuid.uuid4(),
        question_text="Q?",
        question_type="multiple_choice",
        options=options,
        correct_answer=correct_answer,
    )


def test_grading_is_case_sensitive() -> None:
    question = _question(ABC, "A")

    assert grade([question], {question.id: "a"}).score == 0
    assert grade([question], {question.id: "A"}).score == 1


def test_answer_outside_options_is_kept_and_never_matches() -> None:
    question = _question(ABC, "D")

    result = grade([question], {question.id: option for option in ABC})

    assert question.correct_answer == "D"
    assert result.score == 0
    assert result.percentage == 0.0


def test_generated_true_false_question_can_be_answered() -> None:
    generated = GeneratedQuestion.model_validate(
        {
            "question": "Cells have membranes?",
            "type": "true_false",
            "options": ["true", "false"],
            "correct_answer": True,
        }
    )
    question = _question(generated.options, generated.correct_answer)

    assert grade([question], {question.id: "true"}).score == 1


def test_leave_discards_quiz_and_cached_list(store, session) -> None:
    quiz = store.add_quiz("Leave", [ABC, ABC])
    session.refresh()
    session.select_quiz(quiz)
    session.select_answer("A")

    session.leave()

    assert session.state is QuizState.BROWSING
    assert session.quizzes == []
    assert session.quiz is None
    assert session.answers == {}
    assert session.pending_delete is None
    session.refresh()
    assert store.list_calls == 2


def test_leave_clears_pending_delete(store, session) -> None:
    quiz = store.add_quiz("Pending", [ABC])
    session.refresh()
    session.request_delete(quiz.id)

    session.leave()

    assert session.pending_delete is None
    assert store.deleted == []
