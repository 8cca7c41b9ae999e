from typing import List, Optional
from uuid import UUID

import requests

from config import API_BASE_URL, REQUEST_TIMEOUT, USER_HEADER
from studyaid.schemas.api.quizzes import QuestionDTO, QuizDTO


class ApiError(Exception):
    """Error response from the StudyAid API, carrying its user-facing detail."""

    def __init__(self, status_code: int, detail: str):
        self.status_code = status_code
        self.detail = detail
        super().__init__(detail)


def _headers(user_id: str) -> dict:
    return {USER_HEADER: user_id}


def _check(response: requests.Response) -> requests.Response:
    if response.ok:
        return response
    try:
        detail = response.json().get("detail") or response.reason
    except ValueError:
        detail = response.text or response.reason
    raise ApiError(response.status_code, str(detail))


# ---- materials ----

def generate_from_topic(user_id: str, topic: str) -> dict:
    response = requests.post(
        f"{API_BASE_URL}/materials/topic",
        json={"topic": topic},
        headers=_headers(user_id),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(response).json()


def generate_from_text(user_id: str, content: str, title: Optional[str] = None) -> dict:
    response = requests.post(
        f"{API_BASE_URL}/materials/paste",
        json={"content": content, "title": title},
        headers=_headers(user_id),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(response).json()


def generate_from_upload(user_id: str, filename: str, data: bytes) -> dict:
    response = requests.post(
        f"{API_BASE_URL}/materials/upload",
        files={"file": (filename, data, "text/plain")},
        headers=_headers(user_id),
        timeout=REQUEST_TIMEOUT,
    )
    return _check(response).json()


# ---- notes ----

def list_notes(user_id: str) -> List[dict]:
    response = requests.get(f"{API_BASE_URL}/notes/", headers=_headers(user_id), timeout=REQUEST_TIMEOUT)
    return _check(response).json()


def delete_note(user_id: str, note_id: str) -> None:
    response = requests.delete(
        f"{API_BASE_URL}/notes/{note_id}", headers=_headers(user_id), timeout=REQUEST_TIMEOUT
    )
    _check(response)


def get_profile_stats(user_id: str) -> dict:
    response = requests.get(
        f"{API_BASE_URL}/profile/stats", headers=_headers(user_id), timeout=REQUEST_TIMEOUT
    )
    return _check(response).json()


# ---- quizzes ----

class ApiQuizStore:
    """Quiz storage over the HTTP API for one signed-in user."""

    def __init__(self, user_id: str):
        self.user_id = user_id

    def list_quizzes(self) -> List[QuizDTO]:
        response = requests.get(
            f"{API_BASE_URL}/quizzes/", headers=_headers(self.user_id), timeout=REQUEST_TIMEOUT
        )
        return [QuizDTO.model_validate(item) for item in _check(response).json()]

    def fetch_questions(self, quiz_id: UUID) -> List[QuestionDTO]:
        response = requests.get(
            f"{API_BASE_URL}/quizzes/{quiz_id}/questions",
            headers=_headers(self.user_id),
            timeout=REQUEST_TIMEOUT,
        )
        return [QuestionDTO.model_validate(item) for item in _check(response).json()]

    def record_attempt(self, quiz_id: UUID, score: float, total_questions: int) -> None:
        response = requests.post(
            f"{API_BASE_URL}/quizzes/{quiz_id}/attempts",
            json={"score": score, "total_questions": total_questions},
            headers=_headers(self.user_id),
            timeout=REQUEST_TIMEOUT,
        )
        _check(response)

    def delete_quiz(self, quiz_id: UUID) -> None:
        response = requests.delete(
            f"{API_BASE_URL}/quizzes/{quiz_id}",
            headers=_headers(self.user_id),
            timeout=REQUEST_TIMEOUT,
        )
        _check(response)
