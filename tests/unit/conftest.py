"""Shared fixtures for the EasyRAG SDK tests.

Server behaviour is scripted with ``httpx.MockTransport``; no network access
is required.
"""

import json

import httpx
import pytest

from easyrag_sdk import EasyRAGClient

API_KEY = "test-api-key"
BASE_URL = "https://api.test.easyrag"


class Recorder:
    """MockTransport handler that records requests and replays a scripted response."""

    def __init__(self, responder):
        self.responder = responder
        self.requests: list[httpx.Request] = []

    async def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        result = self.responder(request)
        if not isinstance(result, httpx.Response):
            result = await result
        return result

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep EASYRAG_* variables from the developer's shell out of the tests."""
    for key in ("EASYRAG_API_KEY", "EASYRAG_BASE_URL", "EASYRAG_TIMEOUT"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def make_client():
    """Build an EasyRAGClient whose transport is a Recorder around ``responder``."""

    def _make(responder, **config):
        recorder = Recorder(responder)
        http_client = httpx.AsyncClient(transport=httpx.MockTransport(recorder))
        client = EasyRAGClient(
            API_KEY,
            base_url=config.pop("base_url", BASE_URL),
            http_client=http_client,
            **config,
        )
        return client, recorder

    return _make
