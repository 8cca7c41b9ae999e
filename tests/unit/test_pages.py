import uuid
from pathlib import Path

import config
import requests
from streamlit.testing.v1 import AppTest

PAGES = Path(__file__).resolve().parents[2] / "frontend" / "pages"


def _unreachable(*args, **kwargs):
    raise requests.ConnectionError("connection refused")


def test_notes_page_survives_unreachable_api(monkeypatch) -> None:
    monkeypatch.setattr(config, "USER_ID", str(uuid.uuid4()))
    monkeypatch.setattr(requests, "get", _unreachable)

    at = AppTest.from_file(str(PAGES / "notes.py")).run()

    assert not at.exception
    assert at.info[0].value == "No notes yet. Create study materials to get started."
