#!/usr/bin/env python3
"""
Seed the document store with reference notes for demos or tests.

Creates the SQLite DB (if missing) at RESCUELINE_DB_PATH and inserts a few
disaster-safety notes as documents. Use --reset to clear existing documents first.

Run from project root:

    python scripts/seed_documents.py
    python scripts/seed_documents.py --reset
"""

import argparse
import sys
from pathlib import Path

# Project root on path so "rescueline" resolves
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from rescueline.core.config import DB_PATH
from rescueline.core.document_store import NewDocument, SqliteDocumentStore

# (name, content). Edit to match the scenario you are demoing.
SEED_DOCUMENTS = [
    (
        "water_advisory.txt",
        "Boil water advisory is in effect for all districts. Bring tap water to a rolling boil "
        "for at least one minute before drinking or cooking. Bottled water is distributed at "
        "the central stadium from 8am to 6pm.",
    ),
    (
        "shelters.txt",
        "Open shelters: Riverside High School gym (pets allowed), Community Center on 5th Street, "
        "St. Mary's church hall. All shelters provide blankets, water and first aid.",
    ),
    (
        "evacuation_routes.txt",
        "Highway 9 northbound is closed due to flooding. Use Route 12 to leave the valley. "
        "Do not drive through flood water; 30 cm of moving water can sweep a car away.",
    ),
]


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the document store for demos/tests.")
    parser.add_argument("--db", default=DB_PATH, help="SQLite DB path (default: RESCUELINE_DB_PATH).")
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear all existing documents before inserting seed documents.",
    )
    args = parser.parse_args()

    store = SqliteDocumentStore(args.db)
    if args.reset:
        store.clear()
        print("Cleared existing documents.")

    for name, content in SEED_DOCUMENTS:
        doc = store.insert(NewDocument(filename=name, original_name=name, mime_type="text/plain", content=content))
        print(f"  added: {name} (id={doc.id})")

    print(f"Done. Seeded {len(SEED_DOCUMENTS)} documents into {args.db}.")


if __name__ == "__main__":
    main()
