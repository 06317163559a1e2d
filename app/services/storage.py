"""Persistence of the snapshot in named slots.

The store is a plain key/value capability: ``get`` returns the raw text held
in a slot (or None) and ``put`` replaces it. Which slot holds a readable
document decides the schema version; see ``app.services.migrations``.
"""
import json
import logging
import os
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Callable, Dict, Optional

from pydantic import ValidationError

from app.schemas.state import AppState, Snapshot
from app.services.migrations import CURRENT, SCHEMA_VERSIONS, SchemaVersion, upgrade_to_current

logger = logging.getLogger(__name__)


class SlotStore(ABC):
    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Raw text held in slot ``key``, or None when the slot was never written."""

    @abstractmethod
    def put(self, key: str, value: str) -> None:
        """Replace the contents of slot ``key``."""


class MemorySlotStore(SlotStore):
    def __init__(self, slots: Optional[Dict[str, str]] = None):
        self.slots = dict(slots or {})

    def get(self, key: str) -> Optional[str]:
        return self.slots.get(key)

    def put(self, key: str, value: str) -> None:
        self.slots[key] = value


class FileSlotStore(SlotStore):
    """One JSON file per slot inside ``directory``."""

    def __init__(self, directory):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def put(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        # Write next to the target and swap in, so readers never see half a file
        with NamedTemporaryFile("w", encoding="utf-8", dir=self.directory, suffix=".tmp", delete=False) as tmp:
            tmp.write(value)
        os.replace(tmp.name, self.path_for(key))


def serialize_state(state: AppState) -> str:
    return json.dumps(state.to_document(), indent=2, ensure_ascii=False)


def read_slot(store: SlotStore, schema: SchemaVersion) -> Optional[Snapshot]:
    """Decode one slot. Missing, unreadable or malformed slots all read as None."""
    try:
        raw = store.get(schema.slot)
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read slot {schema.slot}: {e}")
        return None

    if raw is None:
        return None

    try:
        return schema.model.model_validate_json(raw)
    except ValidationError as e:
        logger.warning(f"Failed to parse stored data in slot {schema.slot}: {e.error_count()} error(s)")
        return None


def save_state(store: SlotStore, state: AppState) -> None:
    store.put(CURRENT.slot, serialize_state(state))


def load_state(store: SlotStore) -> AppState:
    """Load the current snapshot, migrating the newest legacy slot if needed.

    Tries the current slot first and returns it untouched. Otherwise tries
    older slots newest to oldest; the first readable one is upgraded through
    every later version and written to the current slot. Never raises for bad
    slot contents: with nothing readable the empty snapshot is returned.
    """
    state = read_slot(store, CURRENT)
    if state is not None:
        return state

    for schema in reversed(SCHEMA_VERSIONS[:-1]):
        legacy = read_slot(store, schema)
        if legacy is None:
            continue

        logger.info(f"Migrating v{schema.version} data to v{CURRENT.version} structure...")
        migrated = upgrade_to_current(legacy, schema.version)
        try:
            save_state(store, migrated)
        except OSError as e:
            logger.error(f"Could not write migrated data to slot {CURRENT.slot}: {e}")
        return migrated

    logger.info("No stored data found, starting with an empty snapshot")
    return AppState()


class StateRepository:
    """Serializes every read-modify-write of the snapshot through one lock."""

    def __init__(self, store: SlotStore):
        self.store = store
        self._lock = threading.Lock()

    def load(self) -> AppState:
        with self._lock:
            return load_state(self.store)

    def save(self, state: AppState) -> None:
        with self._lock:
            save_state(self.store, state)

    def apply(self, operation: Callable[[AppState], AppState]) -> AppState:
        """Load, transform and persist in one step. Nothing is written if ``operation`` raises."""
        with self._lock:
            state = operation(load_state(self.store))
            save_state(self.store, state)
            return state
