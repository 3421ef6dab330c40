from __future__ import annotations

import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from fastapi.testclient import TestClient

from llm_scraper.llm.model import AnthropicClient
from llm_scraper.main import app, get_client


class FakeProvider:
    """Stands in for the messages endpoint and records what was sent to it."""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"content": [{"type": "text", "text": "# Hello"}]}
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    def reply(self, content: List[Dict[str, Any]], status_code: int = 200) -> None:
        self.respond = lambda request: httpx.Response(status_code, json={"content": content})

    @property
    def payloads(self) -> List[Dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests]


@pytest.fixture(autouse=True)
def api_key(monkeypatch):
    monkeypatch.setenv("ANTHROPIC_API_KEY", "test_key")


@pytest.fixture
def provider() -> FakeProvider:
    return FakeProvider()


@pytest.fixture
def llm(provider) -> AnthropicClient:
    return AnthropicClient(
        "https://api.anthropic.test",
        "claude-test",
        max_tokens=5000,
        transport=httpx.MockTransport(provider.handler),
    )


@pytest.fixture
def client(llm):
    app.dependency_overrides[get_client] = lambda: llm
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
