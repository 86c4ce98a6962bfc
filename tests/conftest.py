from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from tailorcv.db import make_engine, make_sessionmaker
from tailorcv.main import app, get_llm_client, get_store
from tailorcv.store import ProfileStore


class FakeChatClient:
    """Stands in for the OpenAI SDK; replies are consumed in order."""

    def __init__(self, replies=None):
        self.replies = list(replies or [])
        self.calls = []
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._create))

    def _create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0) if self.replies else "generated text"
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            message = SimpleNamespace(content=reply)
            return SimpleNamespace(choices=[SimpleNamespace(message=message)])
        return reply


@pytest.fixture
def store():
    return ProfileStore(make_sessionmaker(make_engine("sqlite://")))


@pytest.fixture
def llm():
    return FakeChatClient(["Ada Lovelace\nTailored CV", "Dear Hiring Manager, ..."])


@pytest.fixture
def client(store, llm):
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_llm_client] = lambda: lambda: llm
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
