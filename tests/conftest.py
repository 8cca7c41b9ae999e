import json
import uuid
from types import SimpleNamespace
from typing import List, Optional

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

import studyaid.models  # noqa: F401
from studyaid.config import Settings
from studyaid.db.interfaces.postgresql import Base, PostgreSQLDatabase
from studyaid.services.gateway.client import AIGatewayClient


class FakeCompletions:
    """Stands in for ``AsyncOpenAI.chat.completions``."""

    def __init__(self, content: Optional[str] = None, error: Optional[Exception] = None):
        self.content = content
        self.error = error
        self.calls: List[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_bundle(
    title: Optional[str] = "Osmosis",
    flashcards: int = 5,
    key_points: int = 8,
    examples: int = 4,
    questions: int = 8,
) -> dict:
    bundle = {
        "summary": "Osmosis is the diffusion of water across a semi-permeable membrane.",
        "flashcards": [
            {"question": f"Card {i}?", "answer": f"Answer {i}.", "difficulty": "easy"}
            for i in range(flashcards)
        ],
        "key_points": [f"Point {i}" for i in range(key_points)],
        "examples": [f"Example {i}" for i in range(examples)],
        "quiz_questions": [
            {
                "question": f"Question {i}?",
                "type": "multiple_choice",
                "options": ["A", "B", "C", "D"],
                "correct_answer": "A",
                "explanation": "Because A.",
            }
            for i in range(questions)
        ],
    }
    if title is not None:
        bundle["title"] = title
    return bundle


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def database(engine):
    return PostgreSQLDatabase.from_engine(engine)


@pytest.fixture
def db_session(database):
    with database.get_session() as session:
        yield session


@pytest.fixture
def owner_id():
    return uuid.uuid4()


@pytest.fixture
def settings():
    return Settings(ai_gateway_api_key="test-key", ai_gateway_base_url="https://gateway.test/v1")


@pytest.fixture
def fake_completions():
    return FakeCompletions(content=json.dumps(make_bundle()))


@pytest.fixture
def gateway(settings, fake_completions):
    client = AIGatewayClient(settings)
    client.client = SimpleNamespace(chat=SimpleNamespace(completions=fake_completions))
    return client


@pytest.fixture
def bundle_factory():
    return make_bundle
