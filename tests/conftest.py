"""
Pytest configuration and fixtures for the MindPath API tests.
"""

import os
import tempfile

_TEST_DB_DIR = tempfile.mkdtemp(prefix="mindpath-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_TEST_DB_DIR, 'test.db')}"
os.environ["CELERY_TASK_ALWAYS_EAGER"] = "true"
os.environ["CELERY_BROKER_URL"] = "memory://"
os.environ["CELERY_RESULT_BACKEND"] = "cache+memory://"
os.environ["OPENAI_API_KEY"] = ""

import pytest
from fastapi import Header
from fastapi.testclient import TestClient

from mindpath.core.auth import get_current_owner
from mindpath.errors import AnalyzerFailure
from mindpath.main import app
from mindpath.models.database import Base, engine
from mindpath.services import analysis


DEFAULT_RESULT = {
    "analysis": "Entries show steady reflection on work stress.",
    "resources": [
        {
            "title": "Box Breathing",
            "description": "Four-count breathing to settle the nervous system",
            "type": "exercise",
            "url": None,
        }
    ],
    "recommendations": "Try a short breathing break each afternoon.",
}


class FakeAnalyzer:
    """Stands in for the LLM-backed analyzer."""

    def __init__(self, result=None, error=None, insight="Keep going."):
        self.result = result or DEFAULT_RESULT
        self.error = error
        self.insight = insight
        self.calls = []

    def analyze_notes(self, notes):
        self.calls.append(list(notes))
        if self.error is not None:
            raise self.error
        return self.result

    def quick_insight(self, notes):
        self.calls.append(list(notes))
        if self.error is not None:
            raise self.error
        return self.insight


def _owner_from_header(x_test_owner: str = Header("u1")) -> str:
    return x_test_owner


@pytest.fixture(autouse=True)
def reset_database():
    """Give every test an empty schema."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client():
    """Test client whose caller identity comes from the X-Test-Owner header."""
    app.dependency_overrides[get_current_owner] = _owner_from_header
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def fake_analyzer(monkeypatch):
    """Route every orchestration run to a fake analyzer."""
    analyzer = FakeAnalyzer()
    monkeypatch.setattr(analysis, "_build_analyzer", lambda: analyzer)
    return analyzer


@pytest.fixture
def failing_analyzer(monkeypatch):
    analyzer = FakeAnalyzer(error=AnalyzerFailure("provider unavailable"))
    monkeypatch.setattr(analysis, "_build_analyzer", lambda: analyzer)
    return analyzer
