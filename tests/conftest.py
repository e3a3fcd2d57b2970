"""Pytest configuration and fixtures.

Keeps provider credentials from the developer's environment out of the tests,
and provides httpx clients backed by a MockTransport in place of real upstreams.
"""
from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Callable, List

import httpx
import pytest


def ensure_project_root_on_path() -> None:
    """Add the project root directory to sys.path if not already present."""
    project_root = Path(__file__).resolve().parent.parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


ensure_project_root_on_path()

PROVIDER_ENV_VARS = [
    "AZURE_OPENAI_API_KEY",
    "AZURE_OPENAI_API_ENDPOINT",
    "OPENAI_API_KEY",
    "OPENAI_API_HOST",
    "OPENAI_API_ORG_ID",
    "HELICONE_API_KEY",
    "MISTRAL_API_KEY",
    "MISTRAL_API_HOST",
    "OPENROUTER_API_KEY",
    "OPENROUTER_API_HOST",
    "TOGETHERAI_API_KEY",
    "TOGETHERAI_API_HOST",
]


@pytest.fixture(autouse=True)
def _isolate_provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Tests see no server-side provider keys or hosts unless they set them."""
    for name in PROVIDER_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class RecordingUpstream:
    """MockTransport handler that records requests and answers from a callable."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.responder = responder
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.responder(request)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]


def json_responder(payload: Any, status_code: int = 200) -> Callable[[httpx.Request], httpx.Response]:
    def respond(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, json=payload)

    return respond


@pytest.fixture
def make_upstream():
    """Factory: ``make_upstream(responder) -> (RecordingUpstream, httpx.AsyncClient)``."""

    def factory(responder: Callable[[httpx.Request], httpx.Response]):
        upstream = RecordingUpstream(responder)
        client = httpx.AsyncClient(transport=httpx.MockTransport(upstream))
        return upstream, client

    return factory


@pytest.fixture
def json_upstream(make_upstream):
    """Factory: ``json_upstream(payload, status_code=200)``, every request gets the same JSON answer."""

    def factory(payload: Any, status_code: int = 200):
        return make_upstream(json_responder(payload, status_code))

    return factory
