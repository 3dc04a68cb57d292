#!/usr/bin/env python3
"""
Restore one owner's data from a backup document.

This REPLACES everything the owner currently has. The restore runs in a
single transaction, so a failure leaves the existing data untouched.

Usage:
    python scripts/import_owner_data.py --owner USERNAME PATH [--yes]
"""
import argparse
import json
import os
import sys

# Add parent directory to path to import painthub modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception as e:
    print(f"WARNING: Could not load .env file: {e}")

from painthub.db import SessionLocal
from painthub.logging import bind_owner, clear_owner, setup_logging
from painthub.services.backup import import_owner_data
from painthub.services.owners import get_owner_by_username


def confirm(username: str) -> bool:
    answer = input(f"This deletes all current data of '{username}' before restoring. Continue? [y/N] ")
    return answer.strip().lower() in ("y", "yes")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Replace an owner's data with a backup document")
    parser.add_argument("--owner", required=True, help="owner username")
    parser.add_argument("path", help="backup JSON file")
    parser.add_argument("--yes", action="store_true", help="skip the confirmation prompt")
    args = parser.parse_args(argv)

    setup_logging()
    with open(args.path, "r", encoding="utf-8") as f:
        document = json.load(f)

    db = SessionLocal()
    try:
        owner = get_owner_by_username(db, args.owner)
        if owner is None:
            print(f"ERROR: owner '{args.owner}' not found")
            return 1
        if not args.yes and not confirm(args.owner):
            print("Aborted.")
            return 1

        bind_owner(owner.id)
        try:
            summary = import_owner_data(db, owner.id, document)
        except Exception as e:
            print(f"✗ Restore failed, nothing was changed: {e}")
            return 1
        finally:
            clear_owner()
    finally:
        db.close()

    print(f"✓ Restored data for '{args.owner}'")
    for table, count in summary.inserted.items():
        skipped = summary.skipped.get(table, 0)
        line = f"  {table}: {count} inserted"
        if skipped:
            line += f", {skipped} skipped"
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
