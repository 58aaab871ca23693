"""
Test fixtures for Rehab Tracker.

Provides an in-memory SQLite engine shared through StaticPool, a session,
seeded trainers / athletes / exercise, and a TestClient wired to the same
database.
"""

import os
import sys
from datetime import date
from pathlib import Path
from unittest.mock import patch

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

# Settings are read once at import time
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("SEED_DEFAULT_TRAINER", "false")

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from rehab_tracker.database import get_db, init_db
from rehab_tracker.models import Assignment, Exercise, Progress, User
from rehab_tracker.services.auth_service import AuthService


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


def make_user(db, email, role, first_name="Test", last_name="User", sport=None) -> User:
    user = User(
        email=email,
        hashed_password="not-a-real-hash",
        first_name=first_name,
        last_name=last_name,
        role=role,
        sport=sport,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


@pytest.fixture
def trainer(db):
    return make_user(db, "coach@example.com", "trainer", "Casey", "Coach")


@pytest.fixture
def other_trainer(db):
    return make_user(db, "coach2@example.com", "trainer", "Robin", "Other")


@pytest.fixture
def athlete(db):
    return make_user(db, "athlete@example.com", "athlete", "Alex", "Runner", sport="Track")


@pytest.fixture
def other_athlete(db):
    return make_user(db, "athlete2@example.com", "athlete", "Sam", "Swimmer", sport="Swimming")


@pytest.fixture
def exercise(db, trainer):
    exercise = Exercise(
        name="Ankle Circles",
        description="Gentle ankle mobility exercise",
        instructions="Rotate your ankle slowly",
        body_part="ankle",
        category="mobility",
        duration=60,
        sets=3,
        reps=10,
        created_by=trainer.id,
    )
    db.add(exercise)
    db.commit()
    db.refresh(exercise)
    return exercise


def make_assignment(db, trainer, athlete, exercise, frequency="daily",
                    start_date=date(2026, 1, 1), status="active") -> Assignment:
    assignment = Assignment(
        trainer_id=trainer.id,
        athlete_id=athlete.id,
        exercise_id=exercise.id,
        frequency=frequency,
        start_date=start_date,
        status=status,
    )
    db.add(assignment)
    db.commit()
    db.refresh(assignment)
    return assignment


def add_progress(db, assignment, completed_date, pain_level=None, difficulty=None) -> Progress:
    progress = Progress(
        assignment_id=assignment.id,
        completed_date=completed_date,
        pain_level=pain_level,
        difficulty=difficulty,
    )
    db.add(progress)
    db.commit()
    db.refresh(progress)
    return progress


@pytest.fixture
def assignment(db, trainer, athlete, exercise):
    return make_assignment(db, trainer, athlete, exercise)


def auth_headers(user: User) -> dict:
    return {"Authorization": f"Bearer {AuthService.create_access_token(user)}"}


@pytest.fixture
def client(session_factory):
    """TestClient without lifespan, so no seeding or log files."""
    from rehab_tracker.main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def fail_on_commit(db, failing_call):
    """Patch ``db.commit`` so only its ``failing_call``-th invocation raises."""
    real_commit = db.commit
    calls = []

    def commit():
        calls.append(None)
        if len(calls) == failing_call:
            raise SQLAlchemyError("storage unavailable")
        real_commit()

    return patch.object(db, "commit", side_effect=commit)
