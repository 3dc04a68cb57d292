#!/usr/bin/env python3
"""
Write one owner's full backup document to a JSON file.

Usage:
    python scripts/export_owner_data.py --owner USERNAME [--output PATH]

Without --output the file goes to BACKUP_DIR/<username>-<timestamp>.json.
"""
import argparse
import json
import os
import sys
from datetime import datetime

# Add parent directory to path to import painthub modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception as e:
    print(f"WARNING: Could not load .env file: {e}")

from painthub.config import settings
from painthub.db import SessionLocal
from painthub.logging import bind_owner, clear_owner, setup_logging
from painthub.services.backup import export_owner_data
from painthub.services.owners import get_owner_by_username


def default_output_path(username: str) -> str:
    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    return os.path.join(settings.backup_dir, f"{username}-{stamp}.json")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Export an owner's data as a backup document")
    parser.add_argument("--owner", required=True, help="owner username")
    parser.add_argument("--output", help="file to write (default: BACKUP_DIR/<username>-<timestamp>.json)")
    args = parser.parse_args(argv)

    setup_logging()
    db = SessionLocal()
    try:
        owner = get_owner_by_username(db, args.owner)
        if owner is None:
            print(f"ERROR: owner '{args.owner}' not found")
            return 1
        owner_id = owner.id
        # Start the export on a fresh transaction so it can pick its own isolation level
        db.rollback()

        bind_owner(owner_id)
        try:
            document = export_owner_data(db, owner_id)
        finally:
            clear_owner()
    finally:
        db.close()

    output = args.output or default_output_path(args.owner)
    directory = os.path.dirname(output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump(document, f, indent=2, ensure_ascii=False)

    total = sum(len(rows) for rows in document.values())
    print(f"Exported {total} rows for '{args.owner}' to {output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
