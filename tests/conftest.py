"""Shared fixtures: a fake RapidAPI upstream and env-driven settings."""

import httpx
import pytest

from config import Settings

INJURY_PAYLOAD = {
    "get": "injuries",
    "parameters": {"league": "88", "season": "2024"},
    "results": 1,
    "response": [
        {"player": {"id": 1, "name": "X", "type": "Missing Fixture", "reason": "Knee Injury"}},
    ],
}


class FakeUpstream:
    """Stands in for the RapidAPI endpoint via httpx.MockTransport."""

    def __init__(self, body=None, status_code: int = 200, raw: bytes | None = None, error: Exception | None = None):
        self.body = INJURY_PAYLOAD if body is None else body
        self.status_code = status_code
        self.raw = raw
        self.error = error
        self.requests: list[httpx.Request] = []

    @property
    def calls(self) -> int:
        return len(self.requests)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if self.raw is not None:
            return httpx.Response(self.status_code, content=self.raw)
        return httpx.Response(self.status_code, json=self.body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def settings(monkeypatch):
    monkeypatch.setenv("REDIS_URL", "rediss://default@example.upstash.io:6379")
    monkeypatch.setenv("UPSTASH_REDIS_REST_TOKEN", "token")
    monkeypatch.setenv("RAPIDAPI_KEY", "test-key")
    monkeypatch.setenv("GIT_SHA", "abc123")
    monkeypatch.delenv("ENVIRONMENT", raising=False)
    return Settings()
