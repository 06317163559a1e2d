#!/usr/bin/env python3
"""
Load (and if needed migrate) a slot store directory and print what it holds.

Usage:
    python3 scripts/inspect_store.py path/to/data [--report STUDENT_ID]
"""

import sys
import logging
from pathlib import Path

# Add the parent directory to the sys.path to import app modules
sys.path.append(str(Path(__file__).parent.parent))

from app.services.merge import find_orphans
from app.services.records import find_record
from app.services.report import student_report
from app.services.storage import FileSlotStore, load_state
from app.schemas.student import Student


def main():
    if len(sys.argv) < 2:
        print("Usage: python3 scripts/inspect_store.py path/to/data [--report STUDENT_ID]")
        sys.exit(1)

    logging.basicConfig(level=logging.INFO)
    data_dir = Path(sys.argv[1])
    if not data_dir.is_dir():
        print(f"Error: {data_dir} is not a directory")
        sys.exit(1)

    state = load_state(FileSlotStore(data_dir))

    print("\n=== Store Summary ===")
    for name, count in state.counts().items():
        print(f"{name}: {count}")

    orphans = find_orphans(state)
    if orphans:
        print("\n=== Records With Missing Parents ===")
        for name, ids in orphans.items():
            print(f"{name}: {', '.join(ids)}")

    if len(sys.argv) == 4 and sys.argv[2] == "--report":
        student = find_record(state, Student, sys.argv[3])
        if student is None:
            print(f"Error: no student with id {sys.argv[3]}")
            sys.exit(1)
        print()
        print(student_report(state, student))


if __name__ == "__main__":
    main()
