"""Whole-record add/replace/lookup on a snapshot. Every call returns a new snapshot."""
from typing import Optional, Type, TypeVar

from app.schemas.data_point import DataPoint
from app.schemas.goal import Goal
from app.schemas.objective import Objective
from app.schemas.record import Record
from app.schemas.state import AppState
from app.schemas.student import Student
from app.services.errors import RecordNotFound

R = TypeVar("R", bound=Record)

COLLECTION_FOR = {
    Student: "students",
    Goal: "goals",
    Objective: "objectives",
    DataPoint: "data_points",
}


def _collection(kind: Type[Record]) -> str:
    return COLLECTION_FOR[kind]


def find_record(state: AppState, kind: Type[R], record_id: str) -> Optional[R]:
    for record in getattr(state, _collection(kind)):
        if record.id == record_id:
            return record
    return None


def get_record(state: AppState, kind: Type[R], record_id: str) -> R:
    record = find_record(state, kind, record_id)
    if record is None:
        raise RecordNotFound(kind.__name__, record_id)
    return record


def add_record(state: AppState, record: Record) -> AppState:
    name = _collection(type(record))
    return state.model_copy(update={name: [*getattr(state, name), record]})


def replace_record(state: AppState, record: Record) -> AppState:
    """Swap in ``record`` for the stored record with the same id."""
    kind = type(record)
    get_record(state, kind, record.id)
    name = _collection(kind)
    updated = [record if existing.id == record.id else existing for existing in getattr(state, name)]
    return state.model_copy(update={name: updated})
