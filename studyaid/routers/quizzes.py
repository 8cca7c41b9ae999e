import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError

from studyaid.dependencies import CurrentUserDep, QuizzesRepoDep
from studyaid.schemas.api.quizzes import AttemptCreate, AttemptDTO, QuestionDTO, QuizDTO

router = APIRouter(prefix="/quizzes", tags=["quizzes"])
logger = logging.getLogger(__name__)


@router.get("/", response_model=List[QuizDTO])
def list_quizzes(owner_id: CurrentUserDep, repo: QuizzesRepoDep):
    """Quizzes of the current user, newest first."""
    return repo.list_for_owner(owner_id)


@router.get("/attempts", response_model=List[AttemptDTO])
def list_attempts(
    owner_id: CurrentUserDep,
    repo: QuizzesRepoDep,
    limit: int = Query(50, ge=1, le=200),
):
    return repo.list_attempts(owner_id, limit=limit)


@router.get("/{quiz_id}/questions", response_model=List[QuestionDTO])
def get_questions(quiz_id: UUID, owner_id: CurrentUserDep, repo: QuizzesRepoDep):
    """All stored questions; playability filtering is left to the quiz session."""
    if repo.get_by_id(quiz_id, owner_id) is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    return repo.get_questions(quiz_id, owner_id)


@router.post("/{quiz_id}/attempts", response_model=AttemptDTO, status_code=status.HTTP_201_CREATED)
def record_attempt(
    quiz_id: UUID,
    payload: AttemptCreate,
    owner_id: CurrentUserDep,
    repo: QuizzesRepoDep,
):
    if repo.get_by_id(quiz_id, owner_id) is None:
        raise HTTPException(status_code=404, detail="Quiz not found")
    try:
        return repo.record_attempt(owner_id, quiz_id, payload.score, payload.total_questions)
    except SQLAlchemyError as e:
        logger.error(f"Failed to save attempt for quiz {quiz_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to save quiz results")


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quiz(quiz_id: UUID, owner_id: CurrentUserDep, repo: QuizzesRepoDep):
    """Delete a quiz and all of its questions."""
    try:
        removed = repo.delete_with_questions(quiz_id, owner_id)
    except LookupError:
        raise HTTPException(status_code=404, detail="Quiz not found")
    except SQLAlchemyError as e:
        logger.error(f"Failed to delete quiz {quiz_id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to delete quiz")
    logger.info(f"Deleted quiz {quiz_id} with {removed} question(s)")
    return None
