"""Pytest configuration for global fixtures and logging setup."""
from __future__ import annotations

import os
from typing import Iterator

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

os.environ["DATABASE_URL"] = os.environ.get("DATABASE_URL") or "sqlite:///:memory:"
os.environ["SEED_DEFAULT_EXERCISES"] = os.environ.get("SEED_DEFAULT_EXERCISES") or "false"

from workout_creator.logging_config import configure_logging

configure_logging()

from workout_creator.database import Base, get_db
from workout_creator.main import app
from workout_creator.models import database_models  # noqa: F401  # Register tables on Base.metadata.
from workout_creator.services.exercise_library import ExerciseLibraryStore


@pytest.fixture
def engine(tmp_path) -> Iterator[Engine]:
    """File-backed SQLite database so background threads see the same data."""

    engine = create_engine(f"sqlite:///{tmp_path / 'library.db'}")
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False)


@pytest.fixture
def db_session(session_factory) -> Iterator[Session]:
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def store(db_session) -> ExerciseLibraryStore:
    """Library store without the background default-library seed."""

    return ExerciseLibraryStore(db_session, seed_defaults=False)


@pytest.fixture
def test_client() -> Iterator[TestClient]:
    """FastAPI test client backed by a private in-memory database."""

    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    testing_session = sessionmaker(bind=engine, autoflush=False)

    def override_get_db():
        db = testing_session()
        try:
            yield db
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    engine.dispose()
