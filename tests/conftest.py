import asyncio
from types import SimpleNamespace

import httpx
import pytest
from fastapi.testclient import TestClient
from openai import AsyncOpenAI

from local_ai_service.main import app, get_model_client


class StubModelClient:
    """Stands in for ModelClient at the endpoint boundary."""

    model = "stub-model"
    timeout = 5

    def __init__(self, reply="", error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    async def complete(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


class FakeCompletions:
    """Mimics ``AsyncOpenAI().chat.completions``."""

    def __init__(self, reply="", delay=0, error=None, choices=True):
        self.reply = reply
        self.delay = delay
        self.error = error
        self.choices = choices
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        if not self.choices:
            return SimpleNamespace(choices=[])
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.reply))])


def fake_openai(completions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def chat_completion(content):
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "created": 0,
        "model": "llama3.2",
        "choices": [{"index": 0, "finish_reason": "stop", "message": {"role": "assistant", "content": content}}],
    }


def mock_openai(handler):
    """A real ``AsyncOpenAI`` whose HTTP traffic is answered by ``handler``."""
    transport = httpx.MockTransport(handler)
    return AsyncOpenAI(base_url="http://runtime.test/v1", api_key="test", max_retries=0,
                       http_client=httpx.AsyncClient(transport=transport))


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def use_model():
    """Installs a model client for the endpoints: ``use_model(stub)``."""
    def _install(model_client):
        app.dependency_overrides[get_model_client] = lambda: model_client
        return model_client
    yield _install
    app.dependency_overrides.clear()
