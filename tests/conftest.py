"""Shared pytest fixtures for the task progress test suite."""

from __future__ import annotations

import os

# The engine is built at import time, so point it at a private in-memory database first.
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ.pop("SEED_USERNAME", None)
os.environ.pop("SEED_PASSWORD", None)

from pathlib import Path
from typing import Iterator

import pytest
from sqlalchemy.orm import Session

from taskprogress import models  # noqa: F401
from taskprogress.db import Base, SessionLocal, engine


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Provide a session on freshly created tables."""

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def reference_dir(tmp_path: Path) -> Path:
    """Provide an empty directory for `<task_id>.txt` reference files."""

    directory = tmp_path / "reference_texts"
    directory.mkdir()
    return directory
