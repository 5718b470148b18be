import os
from datetime import date, timedelta
from types import SimpleNamespace

import pytest

# Use in-memory sqlite for tests; must be set before forge is imported
os.environ["DATABASE_URL"] = "sqlite+pysqlite:///:memory:"
os.environ["ANTHROPIC_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from forge.api.deps import create_access_token  # noqa: E402
from forge.core.advisory import AdvisoryTextGenerator, get_advisor  # noqa: E402
from forge.db import Base, engine  # noqa: E402
from forge.main import app  # noqa: E402


class FakeMessages:
    """Stands in for anthropic's `client.messages`."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(content=[SimpleNamespace(text=self.text)])


def fake_advisor(text=None, error=None) -> AdvisoryTextGenerator:
    client = SimpleNamespace(messages=FakeMessages(text=text, error=error))
    return AdvisoryTextGenerator(api_key="test-key", client=client)


@pytest.fixture(autouse=True)
def clean_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    # No API key configured: every AI path takes its deterministic fallback
    app.dependency_overrides[get_advisor] = lambda: AdvisoryTextGenerator()
    return TestClient(app)


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {create_access_token('athlete-1')}"}


@pytest.fixture
def other_auth():
    return {"Authorization": f"Bearer {create_access_token('athlete-2')}"}


@pytest.fixture
def this_monday():
    today = date.today()
    return today - timedelta(days=today.weekday())
