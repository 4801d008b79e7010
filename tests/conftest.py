"""Shared fixtures: a throwaway SQLite database, seeded users and push capture."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

import pytest

TEST_DB_PATH = Path(tempfile.gettempdir()) / "schneejob_messaging_test.db"
os.environ["DATABASE_URL"] = f"sqlite:///{TEST_DB_PATH}"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"

from app.config import reset_settings_cache  # noqa: E402

reset_settings_cache()

from app.domain.entities import User  # noqa: E402
from app.infrastructure.database import (  # noqa: E402
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from app.infrastructure.realtime import realtime_publisher  # noqa: E402
from app.infrastructure.repositories import UserRepository  # noqa: E402
from app.infrastructure.security import create_access_token  # noqa: E402


@pytest.fixture(autouse=True)
def reset_database():
    """Start every test from empty tables."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session():
    with SessionLocal() as db:
        yield db


@pytest.fixture()
def make_user(session):
    """Return a factory that inserts an active user and returns its entity."""

    counter = {"value": 0}

    def _make_user(
        name: str | None = None,
        *,
        company_id: int | None = None,
        is_active: bool = True,
    ) -> User:
        counter["value"] += 1
        index = counter["value"]
        return UserRepository(session).create(
            User(
                id=None,
                full_name=name or f"User {index}",
                email=f"user{index}@example.com",
                avatar_url=f"https://cdn.example.com/avatars/{index}.png",
                company_id=company_id,
                company_name=None,
                is_active=is_active,
            )
        )

    return _make_user


class PushRecorder:
    """Stand-in for ``RealtimeEventPublisher.dispatch`` that keeps every call."""

    def __init__(self) -> None:
        self.events: list[tuple[int, str, dict]] = []

    def __call__(self, user_id: int, *, event_type: str, payload) -> None:
        self.events.append((user_id, event_type, payload))

    def of_type(self, event_type: str) -> list[tuple[int, str, dict]]:
        return [event for event in self.events if event[1] == event_type]

    def clear(self) -> None:
        self.events.clear()


@pytest.fixture()
def pushes(monkeypatch) -> PushRecorder:
    recorder = PushRecorder()
    monkeypatch.setattr(realtime_publisher, "dispatch", recorder)
    return recorder


@pytest.fixture()
def auth_headers():
    """Return a helper building bearer headers for a user id."""

    def _auth_headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user_id)}"}

    return _auth_headers


@pytest.fixture()
def client():
    """Return a test client bound to a fresh application instance."""

    from fastapi.testclient import TestClient

    from main import create_app

    with TestClient(create_app()) as test_client:
        yield test_client
