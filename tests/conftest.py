"""Shared fixtures: an in-memory slot store and a small four-level record set."""
import pytest
from fastapi.testclient import TestClient

from app.dependencies.store import state_repository
from app.main import app
from app.schemas.state import AppState
from app.services.storage import MemorySlotStore, StateRepository


def make_state(students=(), goals=(), objectives=(), data_points=()):
    return AppState.model_validate({
        "students": list(students),
        "goals": list(goals),
        "objectives": list(objectives),
        "dataPoints": list(data_points),
    })


STUDENT = {"id": "S1", "name": "Avery", "grade": "3", "teacher": "Ms. Park"}
GOAL = {
    "id": "G1",
    "studentId": "S1",
    "category": "Reading",
    "description": "Read grade-level text fluently",
    "presentLevel": "Reads 40 wpm",
    "createdAt": "2024-09-01T00:00:00.000Z",
}
OBJECTIVE = {
    "id": "O1",
    "goalId": "G1",
    "title": "Fluency",
    "description": "Words per minute on a cold read",
    "unit": "wpm",
    "targetValue": 80,
    "targetComparator": "at-least",
    "baselineValue": 20,
    "hasSecondaryMetric": False,
    "startDate": "2024-09-01T00:00:00.000Z",
    "endDate": "2025-09-01T00:00:00.000Z",
}
DATA_POINTS = [
    {"id": "D1", "objectiveId": "O1", "date": "2024-10-01", "value": 85, "recordedBy": "Ms. Park"},
    {"id": "D2", "objectiveId": "O1", "date": "2024-09-15", "value": 60, "recordedBy": "Ms. Park"},
]


@pytest.fixture
def sample_state():
    return make_state([STUDENT], [GOAL], [OBJECTIVE], DATA_POINTS)


@pytest.fixture
def store():
    return MemorySlotStore()


@pytest.fixture
def repository(store):
    return StateRepository(store)


@pytest.fixture
def client(repository):
    app.dependency_overrides[state_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()
