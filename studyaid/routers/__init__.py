"""Router modules for the StudyAid API."""

from . import materials, notes, ping, profile, quizzes

__all__ = ["materials", "notes", "ping", "profile", "quizzes"]
