from studyaid.schemas.api.materials import (
    GenerationResponse,
    MaterialDTO,
    PasteMaterialRequest,
    TopicMaterialRequest,
)
from studyaid.schemas.api.notes import NoteDTO
from studyaid.schemas.api.profile import ProfileStats
from studyaid.schemas.api.quizzes import AttemptCreate, AttemptDTO, QuestionDTO, QuizDTO

__all__ = [
    "PasteMaterialRequest",
    "TopicMaterialRequest",
    "GenerationResponse",
    "MaterialDTO",
    "NoteDTO",
    "ProfileStats",
    "QuizDTO",
    "QuestionDTO",
    "AttemptCreate",
    "AttemptDTO",
]
