"""
Exercise API Backend: Test Configuration (conftest.py)
======================================================

Shared pytest fixtures for the whole suite.

Fixtures:
    ├── fake_store:     in-memory ExerciseStore (no database)
    ├── failing_store:  ExerciseStore whose every call raises
    ├── db_manager:     DatabaseSessionManager on a temp SQLite file, schema created
    ├── app:            fresh FastAPI app with the store dependency overridden
    ├── test_client:    httpx AsyncClient bound to `app`
    └── valid_payload:  a body that passes every field rule
"""

import os

# Must be set before exercise_api.config is imported
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test_exercises.db"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["LEGACY_ERROR_STATUS"] = "true"

import uuid
from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from exercise_api.database import DatabaseSessionManager
from exercise_api.main import create_app
from exercise_api.models.exercise import Exercise
from exercise_api.routes.exercises import get_exercise_store
from exercise_api.services.store_base import ExerciseStore


class FakeExerciseStore(ExerciseStore):
    """
    Dict-backed ExerciseStore.

    Honours the same id contract as the SQL store: a malformed id raises
    ValueError instead of reading as "not found".
    """

    def __init__(self):
        self.records: Dict[str, Exercise] = {}

    async def create(self, name, reps, weight, unit, date) -> Exercise:
        exercise = Exercise(
            id=uuid.uuid4(), name=name, reps=reps, weight=weight, unit=unit, date=date
        )
        self.records[str(exercise.id)] = exercise
        return exercise

    async def find_by_id(self, exercise_id: str) -> Optional[Exercise]:
        return self.records.get(str(uuid.UUID(exercise_id)))

    async def find(self, filters: Optional[Dict[str, Any]] = None, limit: int = 0) -> List[Exercise]:
        matches = [
            exercise for exercise in self.records.values()
            if all(getattr(exercise, k) == v for k, v in (filters or {}).items())
        ]
        return matches[:limit] if limit else matches

    async def replace(self, exercise_id, name, reps, weight, unit, date) -> int:
        exercise = await self.find_by_id(exercise_id)
        if exercise is None:
            return 0
        exercise.name, exercise.reps, exercise.weight = name, reps, weight
        exercise.unit, exercise.date = unit, date
        return 1

    async def delete_by_id(self, exercise_id: str) -> int:
        key = str(uuid.UUID(exercise_id))
        return 1 if self.records.pop(key, None) is not None else 0


@pytest.fixture
def fake_store():
    return FakeExerciseStore()


@pytest.fixture
def failing_store():
    """Every store call raises, as if the database connection had dropped."""
    store = AsyncMock(spec=ExerciseStore)
    error = RuntimeError("connection reset by peer")
    store.create.side_effect = error
    store.find_by_id.side_effect = error
    store.find.side_effect = error
    store.replace.side_effect = error
    store.delete_by_id.side_effect = error
    return store


@pytest_asyncio.fixture
async def db_manager(tmp_path):
    """SQLAlchemy manager on a throwaway SQLite file with the schema created."""
    manager = DatabaseSessionManager(f"sqlite+aiosqlite:///{tmp_path / 'exercises.db'}")
    await manager.create_schema()
    yield manager
    await manager.dispose()


@pytest.fixture
def app(fake_store):
    """App whose Record Store is the in-memory fake."""
    application = create_app()
    application.dependency_overrides[get_exercise_store] = lambda: fake_store
    return application


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient talking to `app` in-process.

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/exercises")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def valid_payload():
    return {"name": "Squat", "reps": 10, "weight": 135, "unit": "lbs", "date": "06-21-24"}
