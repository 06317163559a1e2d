"""Identity merge of two snapshots.

``merge_states(current, incoming)`` keeps every current record as-is and
appends the incoming records whose id is new to that collection. When both
sides hold the same id the current record wins and the incoming one is
dropped; records are never combined field by field. The result is a fresh
snapshot and neither input is touched, so merging the same import twice is
the same as merging it once.
"""
import logging
from typing import Dict, List, Sequence

from app.schemas.record import Record
from app.schemas.state import AppState

logger = logging.getLogger(__name__)

COLLECTIONS = ("students", "goals", "objectives", "data_points")

# child collection -> (parent collection, parent id attribute)
PARENTS = {
    "goals": ("students", "student_id"),
    "objectives": ("goals", "goal_id"),
    "data_points": ("objectives", "objective_id"),
}


def merge_records(current: Sequence[Record], incoming: Sequence[Record]) -> List[Record]:
    merged = list(current)
    seen = {record.id for record in merged}
    for record in incoming:
        if record.id in seen:
            continue
        seen.add(record.id)
        merged.append(record)
    return merged


def merge_states(current: AppState, incoming: AppState) -> AppState:
    merged = {name: merge_records(getattr(current, name), getattr(incoming, name)) for name in COLLECTIONS}
    added = {name: len(merged[name]) - len(getattr(current, name)) for name in COLLECTIONS}
    logger.info(f"Merged snapshot, new records per collection: {added}")
    return AppState(**merged)


def find_orphans(state: AppState) -> Dict[str, List[str]]:
    """Ids of records whose parent is missing, per collection. Nothing is removed."""
    orphans = {}
    for child, (parent, parent_attr) in PARENTS.items():
        parent_ids = {record.id for record in getattr(state, parent)}
        missing = [record.id for record in getattr(state, child) if getattr(record, parent_attr) not in parent_ids]
        if missing:
            orphans[child] = missing
    return orphans
