import uuid

import pytest
from sqlalchemy import func, select

from studyaid.models import Question, Quiz
from studyaid.repositories.materials import MaterialsRepository
from studyaid.repositories.quizzes import QuizzesRepository


def _make_quiz(session, owner_id, n_questions=4, title="Cells - Quiz"):
    repo = MaterialsRepository(session)
    quiz = repo.create_quiz(owner_id=owner_id, material_id=None, title=title)
    repo.create_questions(
        quiz.id,
        [
            {
                "question_text": f"Q{i}?",
                "question_type": "multiple_choice",
                "options": ["A", "B"],
                "correct_answer": "A",
                "explanation": None,
            }
            for i in range(n_questions)
        ],
    )
    return quiz


def test_delete_removes_questions_then_quiz(db_session, owner_id) -> None:
    quiz = _make_quiz(db_session, owner_id, n_questions=4)
    other = _make_quiz(db_session, owner_id, n_questions=2, title="Other - Quiz")
    repo = QuizzesRepository(db_session)

    removed = repo.delete_with_questions(quiz.id, owner_id)

    assert removed == 4
    assert repo.get_by_id(quiz.id, owner_id) is None
    remaining = db_session.scalar(
        select(func.count()).select_from(Question).where(Question.quiz_id == quiz.id)
    )
    assert remaining == 0
    assert len(repo.get_questions(other.id, owner_id)) == 2


def test_quizzes_are_scoped_to_owner(db_session, owner_id) -> None:
    quiz = _make_quiz(db_session, owner_id)
    stranger = uuid.uuid4()
    repo = QuizzesRepository(db_session)

    assert repo.list_for_owner(stranger) == []
    assert repo.get_questions(quiz.id, stranger) == []
    with pytest.raises(LookupError):
        repo.delete_with_questions(quiz.id, stranger)
    assert db_session.get(Quiz, quiz.id) is not None


def test_questions_come_back_in_generation_order(db_session, owner_id) -> None:
    quiz = _make_quiz(db_session, owner_id, n_questions=5)

    questions = QuizzesRepository(db_session).get_questions(quiz.id, owner_id)

    assert [q.question_text for q in questions] == [f"Q{i}?" for i in range(5)]


def test_attempt_stats(db_session, owner_id) -> None:
    quiz = _make_quiz(db_session, owner_id)
    repo = QuizzesRepository(db_session)

    assert repo.attempt_stats(owner_id) == (0, None)

    repo.record_attempt(owner_id, quiz.id, 100 / 3, 3)
    repo.record_attempt(owner_id, quiz.id, 50.0, 4)

    count, average = repo.attempt_stats(owner_id)
    assert count == 2
    assert average == pytest.approx((100 / 3 + 50.0) / 2)
    attempts = repo.list_attempts(owner_id)
    assert sorted(a.score for a in attempts) == [pytest.approx(100 / 3), 50.0]
