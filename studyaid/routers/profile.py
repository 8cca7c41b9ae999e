from fastapi import APIRouter

from studyaid.dependencies import CurrentUserDep, MaterialsRepoDep, NotesRepoDep, QuizzesRepoDep
from studyaid.schemas.api.profile import ProfileStats

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/stats", response_model=ProfileStats)
def get_stats(
    owner_id: CurrentUserDep,
    materials: MaterialsRepoDep,
    notes: NotesRepoDep,
    quizzes: QuizzesRepoDep,
):
    attempts_count, average_score = quizzes.attempt_stats(owner_id)
    return ProfileStats(
        materials_count=materials.count_for_owner(owner_id),
        notes_count=notes.count_for_owner(owner_id),
        flashcards_count=materials.count_flashcards(owner_id),
        quizzes_count=quizzes.count_for_owner(owner_id),
        attempts_count=attempts_count,
        average_score=average_score,
    )
