"""Shared fixtures: a FastAPI client on a throwaway SQLite file and a fake fetcher."""

from datetime import date

import pytest
from fastapi.testclient import TestClient

from backend import db, settings
from backend.main import create_app


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'lifetrack.db'}")
    monkeypatch.setenv("APP_TIMEZONE", "UTC")
    settings.reset_settings()
    db._engine = None
    db._session_factory = None
    app = create_app()
    with TestClient(app) as test_client:
        yield test_client
    settings.reset_settings()


@pytest.fixture
def reference_day():
    """A Sunday, so week windows end on it."""
    return date(2024, 3, 10)


class FakeFetcher:
    """Stands in for ``api_client.request``: records calls, serves canned payloads."""

    def __init__(self, responses=None, fail_on=()):
        self.responses = dict(responses or {})
        self.fail_on = set(fail_on)
        self.calls = []

    def __call__(self, method, path, params=None, json=None):
        self.calls.append((method, path, params, json))
        if path in self.fail_on:
            raise RuntimeError(f"API error 500 Internal Server Error: {path}")
        if method != "GET":
            return {"ok": True}
        return self.responses.get(path, {"items": []})

    def gets(self, path):
        return [call for call in self.calls if call[0] == "GET" and call[1] == path]


@pytest.fixture
def fake_fetcher():
    return FakeFetcher(
        responses={
            "/v1/todos": {"items": [{"id": "t1", "title": "Write report"}]},
            "/v1/habits": {"items": [{"id": "h1", "name": "Read"}]},
        }
    )
