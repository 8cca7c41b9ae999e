from studyaid.models.flashcard import Flashcard
from studyaid.models.material import Material
from studyaid.models.note import Note
from studyaid.models.quiz import Question, Quiz, QuizAttempt

__all__ = ["Material", "Note", "Flashcard", "Quiz", "Question", "QuizAttempt"]
