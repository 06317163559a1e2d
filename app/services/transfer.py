"""Backup export and import-merge of whole snapshots."""
import json
import logging
from datetime import date
from typing import Optional, Union

from pydantic import ValidationError

from app.schemas.state import AppState
from app.services.errors import ImportValidationError
from app.services.merge import find_orphans, merge_states
from app.services.storage import serialize_state

logger = logging.getLogger(__name__)

REQUIRED_COLLECTIONS = ("students", "goals")

# wire collection -> parent id field its records must carry
KEY_FIELDS = {
    "students": None,
    "goals": "studentId",
    "objectives": "goalId",
    "dataPoints": "objectiveId",
}

MISSING_ID_MESSAGE = "Invalid file format: every record needs an id and a parent id."


def count_unkeyed_records(document: dict) -> int:
    """Records that are not objects or lack a string id (or parent id). Other fields are not checked."""
    missing = 0
    for collection, parent_field in KEY_FIELDS.items():
        records = document.get(collection)
        if not isinstance(records, list):
            continue
        for record in records:
            keys = ("id",) if parent_field is None else ("id", parent_field)
            if not isinstance(record, dict) or not all(isinstance(record.get(key), str) for key in keys):
                missing += 1
    return missing


def export_document(state: AppState) -> str:
    return serialize_state(state)


def export_filename(today: Optional[date] = None) -> str:
    return f"sprout_backup_{(today or date.today()).isoformat()}.json"


def parse_import(raw: Union[str, bytes]) -> AppState:
    """Turn an uploaded backup into a snapshot, or reject it as a whole.

    Only the outline is checked: the document must be an object whose
    ``students`` and ``goals`` are arrays. ``objectives`` and ``dataPoints``
    may be left out. Every record needs a string id, and every child record
    a string parent id; nothing else in a record is checked.
    """
    try:
        document = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise ImportValidationError("Error parsing JSON")

    if not isinstance(document, dict) or not all(isinstance(document.get(key), list) for key in REQUIRED_COLLECTIONS):
        raise ImportValidationError("Invalid file format.")

    missing = count_unkeyed_records(document)
    if missing:
        logger.warning(f"Rejected import with {missing} record(s) lacking an id or parent id")
        raise ImportValidationError(MISSING_ID_MESSAGE)

    try:
        return AppState.model_validate(document)
    except ValidationError as e:
        logger.warning(f"Rejected import with {e.error_count()} malformed record(s)")
        raise ImportValidationError("Invalid file format.")


def import_and_merge(current: AppState, raw: Union[str, bytes]) -> AppState:
    incoming = parse_import(raw)
    merged = merge_states(current, incoming)

    orphans = find_orphans(merged)
    if orphans:
        counts = {name: len(ids) for name, ids in orphans.items()}
        logger.warning(f"Merged data holds records with missing parents: {counts}")
    return merged
