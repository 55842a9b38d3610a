"""Shared fixtures.

The Flask app is built with ``INIT_DB`` off so no Postgres server is needed.
The four store functions in ``budget_backend.db`` are replaced by an in-memory
``FakeStore``; the SQL behind them is covered separately in ``test_db.py``.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from budget_backend import create_app, db
from budget_backend.models import User

TEST_SECRET = "test-signing-secret-that-is-long-enough-for-hs256"


class FakeStore:
    def __init__(self) -> None:
        self.users: dict[str, User] = {}
        self.entries: list = []
        self.replace_calls = 0

    def find_user(self, username):
        return self.users.get(username)

    def create_user(self, username, password_hash):
        if username in self.users:
            raise db.DuplicateUsername(username)
        user = User(len(self.users) + 1, username, password_hash)
        self.users[username] = user
        return user

    def fetch_entries(self):
        return sorted(self.entries, key=lambda e: e.date, reverse=True)

    def replace_entries(self, entries):
        self.replace_calls += 1
        self.entries = list(entries)
        return len(entries)


@pytest.fixture(autouse=True)
def _isolate_client_state(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the client's persisted token and limits inside the test's tmp dir."""
    state_dir = tmp_path / "client-state"
    monkeypatch.setenv("BUDGET_STATE_DIR", os.fspath(state_dir))


@pytest.fixture
def store(monkeypatch: pytest.MonkeyPatch) -> FakeStore:
    fake = FakeStore()
    for name in ("find_user", "create_user", "fetch_entries", "replace_entries"):
        monkeypatch.setattr(db, name, getattr(fake, name))
    return fake


@pytest.fixture
def app(store):
    return create_app({
        "TESTING": True,
        "INIT_DB": False,
        "DATABASE_DSN": "dbname=unused",
        "JWT_SECRET_KEY": TEST_SECRET,
        "OPENAI_API_KEY": "sk-test",
    })


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(client):
    client.post("/api/register", json={"username": "alice", "password": "secret123"})
    resp = client.post("/api/login", json={"username": "alice", "password": "secret123"})
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}
