"""Integration-test fixtures: a live app on an in-memory database."""

from __future__ import annotations

import uuid
from pathlib import Path
from typing import Callable, Iterator

import pytest
from fastapi.testclient import TestClient

from taskprogress.db import Base, SessionLocal, engine
from taskprogress.main import app
from taskprogress.models import AuthSession
from taskprogress.routers.auth import create_access_token
from taskprogress.settings import settings


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, reference_dir: Path) -> Iterator[TestClient]:
    """Run the app against empty tables and a temporary reference directory."""

    monkeypatch.setattr(settings, "reference_texts_dir", str(reference_dir))
    monkeypatch.setattr(settings, "scoring_strategy", "exact_alignment")
    Base.metadata.drop_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def login_as(client: TestClient) -> Callable[[str], dict[str, str]]:
    """Issue a bearer token backed by a stored session for the given user."""

    def _login(username: str) -> dict[str, str]:
        session_id = uuid.uuid4().hex
        db = SessionLocal()
        try:
            db.add(AuthSession(session_id=session_id, username=username))
            db.commit()
        finally:
            db.close()
        token = create_access_token({"sub": username, "jti": session_id})
        return {"Authorization": f"Bearer {token}"}

    return _login


@pytest.fixture
def auth_headers(login_as: Callable[[str], dict[str, str]]) -> dict[str, str]:
    """Bearer headers for the default test user."""

    return login_as("alice")
