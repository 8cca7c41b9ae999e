import uuid

import httpx
import openai
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import func, select

from studyaid.dependencies import get_database, get_gateway_client
from studyaid.main import app
from studyaid.models import Material, Question

API = "/api/v1"


@pytest.fixture
def client(database, gateway):
    app.dependency_overrides[get_database] = lambda: database
    app.dependency_overrides[get_gateway_client] = lambda: gateway
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def headers(owner_id):
    return {"X-User-Id": str(owner_id)}


def _count(database, model) -> int:
    with database.get_session() as session:
        return session.scalar(select(func.count()).select_from(model))


def test_topic_generation_creates_study_set(client, headers, database) -> None:
    response = client.post(f"{API}/materials/topic", json={"topic": "Osmosis"}, headers=headers)

    assert response.status_code == 201
    body = response.json()
    assert body["title"] == "Osmosis"
    assert body["flashcard_count"] == 5
    assert body["question_count"] == 8
    assert body["note_id"] is not None
    assert body["message"] == "Study materials created successfully!"
    assert body["next_view"] == "notes"
    assert _count(database, Material) == 1


def test_rate_limited_generation_persists_nothing(client, headers, database, fake_completions) -> None:
    request = httpx.Request("POST", "https://gateway.test/v1/chat/completions")
    fake_completions.error = openai.RateLimitError(
        "Error code: 429", response=httpx.Response(429, request=request), body=None
    )

    response = client.post(f"{API}/materials/topic", json={"topic": "Osmosis"}, headers=headers)

    assert response.status_code == 429
    assert response.json()["detail"] == "Rate limit exceeded. Please try again in a moment."
    assert _count(database, Material) == 0


def test_malformed_completion_is_reported(client, headers, database, fake_completions) -> None:
    fake_completions.content = "Sure! Here are your study notes."

    response = client.post(f"{API}/materials/paste", json={"content": "Cells"}, headers=headers)

    assert response.status_code == 502
    assert response.json()["detail"] == "AI generated invalid JSON format. Please try again."
    assert _count(database, Material) == 0


def test_blank_input_is_rejected(client, headers, fake_completions) -> None:
    response = client.post(f"{API}/materials/topic", json={"topic": "   "}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter a topic."

    response = client.post(f"{API}/materials/paste", json={"content": ""}, headers=headers)
    assert response.status_code == 400
    assert response.json()["detail"] == "Please enter some text to analyze."
    assert fake_completions.calls == []


def test_missing_owner_header_is_unauthorized(client) -> None:
    response = client.get(f"{API}/quizzes/")
    assert response.status_code == 401
    response = client.get(f"{API}/quizzes/", headers={"X-User-Id": "not-a-uuid"})
    assert response.status_code == 401


def test_paste_and_upload_titles(client, headers) -> None:
    response = client.post(
        f"{API}/materials/paste", json={"content": "z" * 120}, headers=headers
    )
    assert response.status_code == 201
    assert response.json()["title"] == "z" * 100 + "..."
    assert response.json()["message"] == "Material processed successfully!"

    response = client.post(
        f"{API}/materials/upload",
        files={"file": ("biology_notes.txt", b"Mitochondria make ATP.", "text/plain")},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["title"] == "biology_notes"

    materials = client.get(f"{API}/materials/", headers=headers).json()
    assert sorted(m["source_kind"] for m in materials) == ["pasted", "uploaded"]


def test_quiz_lifecycle(client, headers, database, owner_id) -> None:
    created = client.post(f"{API}/materials/topic", json={"topic": "Osmosis"}, headers=headers).json()
    quiz_id = created["quiz_id"]

    quizzes = client.get(f"{API}/quizzes/", headers=headers).json()
    assert [q["id"] for q in quizzes] == [quiz_id]

    questions = client.get(f"{API}/quizzes/{quiz_id}/questions", headers=headers).json()
    assert len(questions) == 8
    assert questions[0]["options"] == ["A", "B", "C", "D"]

    response = client.post(
        f"{API}/quizzes/{quiz_id}/attempts",
        json={"score": 87.5, "total_questions": 8},
        headers=headers,
    )
    assert response.status_code == 201
    assert response.json()["score"] == 87.5

    stranger = {"X-User-Id": str(uuid.uuid4())}
    assert client.get(f"{API}/quizzes/{quiz_id}/questions", headers=stranger).status_code == 404
    assert client.delete(f"{API}/quizzes/{quiz_id}", headers=stranger).status_code == 404

    assert client.delete(f"{API}/quizzes/{quiz_id}", headers=headers).status_code == 204
    assert client.get(f"{API}/quizzes/{quiz_id}/questions", headers=headers).status_code == 404
    assert _count(database, Question) == 0


def test_notes_and_profile_stats(client, headers) -> None:
    client.post(f"{API}/materials/topic", json={"topic": "Osmosis"}, headers=headers)

    notes = client.get(f"{API}/notes/", headers=headers).json()
    assert len(notes) == 1
    assert notes[0]["title"] == "Osmosis - Notes"

    stats = client.get(f"{API}/profile/stats", headers=headers).json()
    assert stats["materials_count"] == 1
    assert stats["notes_count"] == 1
    assert stats["flashcards_count"] == 5
    assert stats["quizzes_count"] == 1
    assert stats["attempts_count"] == 0
    assert stats["average_score"] is None

    note_id = notes[0]["id"]
    assert client.delete(f"{API}/notes/{note_id}", headers=headers).status_code == 204
    assert client.delete(f"{API}/notes/{note_id}", headers=headers).status_code == 404
    assert client.get(f"{API}/notes/", headers=headers).json() == []


def test_ping_reports_database(client, database) -> None:
    app.state.database = database
    try:
        body = client.get(f"{API}/ping").json()
    finally:
        del app.state.database

    assert body["status"] == "ok"
    assert body["database"] == "ok"


def test_upload_strips_byte_order_mark(client, headers, database) -> None:
    response = client.post(
        f"{API}/materials/upload",
        files={"file": ("cells.txt", "\ufeffCells are small.".encode("utf-8"), "text/plain")},
        headers=headers,
    )

    assert response.status_code == 201
    assert response.json()["title"] == "cells"
    with database.get_session() as session:
        material = session.scalars(select(Material)).one()
    assert material.content == "Cells are small."
