import json

import httpx
import pytest

from paper_assistant import llm, paper_store, speech


class Downstream:
    """Stands in for the external APIs; handlers are keyed by URL path suffix."""

    def __init__(self):
        self.calls: list[httpx.Request] = []
        self.handlers = {}

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        for suffix, handler in self.handlers.items():
            if request.url.path.endswith(suffix):
                return handler(request)
        return httpx.Response(404, json={"error": "no handler"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def calls_to(self, suffix: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.url.path.endswith(suffix)]


@pytest.fixture(autouse=True)
def empty_store():
    paper_store.clear()
    yield
    paper_store.clear()


@pytest.fixture
def api_keys(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setenv("ELEVENLABS_API_KEY", "test-eleven-key")


@pytest.fixture
def downstream(monkeypatch) -> Downstream:
    fake = Downstream()
    monkeypatch.setattr(llm, "get_http_client", fake.client)
    monkeypatch.setattr(speech, "get_http_client", fake.client)
    return fake


def completion(content: str) -> httpx.Response:
    return httpx.Response(200, json={"choices": [{"message": {"content": content}}]})


def embedding(vector: list[float]) -> httpx.Response:
    return httpx.Response(200, json={"data": [{"embedding": vector}]})


def request_json(request: httpx.Request) -> dict:
    return json.loads(request.content)
