"""
Pytest fixtures for audit backend tests. Nothing here touches the network:
page fetches go through a patched requests.Session.get and completion
clients are fakes handed to ProviderClients.
"""

from __future__ import annotations

from types import SimpleNamespace

import pytest
import requests

from providers import ProviderClients


def make_response(
    body: str,
    status: int = 200,
    content_type: str = "text/html; charset=utf-8",
    url: str = "https://example.com",
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Server Error"
    response._content = body.encode("utf-8")
    response._content_consumed = True
    response.headers["Content-Type"] = content_type
    response.url = url
    response.encoding = "utf-8"
    return response


class FakeCompletions:
    def __init__(self, content, error: Exception | None = None) -> None:
        self.content = content
        self.error = error
        self.calls: list[dict] = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message, finish_reason="stop")])


class FakeCompletionClient:
    def __init__(self, content, error: Exception | None = None) -> None:
        self.completions = FakeCompletions(content, error)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def serve_page(monkeypatch):
    """
    Patch requests.Session.get to answer with the given body. Returns the
    list of recorded calls as (session, url, kwargs).
    """
    calls: list[tuple] = []

    def _install(body: str = "", **response_kwargs):
        def fake_get(self, url, **kwargs):
            calls.append((self, url, kwargs))
            return make_response(body, url=url, **response_kwargs)

        monkeypatch.setattr(requests.Session, "get", fake_get)
        return calls

    return _install


@pytest.fixture
def fake_clients():
    """
    Build a ProviderClients whose factory hands out one fake client and
    records every ProviderConfig it was asked to build for.
    """

    def _build(content=None, error: Exception | None = None):
        fake = FakeCompletionClient(content, error)
        built = []

        def factory(config):
            built.append(config)
            return fake

        return ProviderClients(factory=factory), fake, built

    return _build


@pytest.fixture
def client():
    """FastAPI TestClient for the audit app."""
    from fastapi.testclient import TestClient

    from main import app

    return TestClient(app)
