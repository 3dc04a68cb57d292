#!/usr/bin/env python3
"""
Create an owner account.

Usage:
    python scripts/create_owner.py USERNAME
"""
import argparse
import os
import sys

# Add parent directory to path to import painthub modules
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

try:
    from dotenv import load_dotenv
    load_dotenv()
except Exception as e:
    print(f"WARNING: Could not load .env file: {e}")

from painthub.config import settings
from painthub.db import init_db, session_scope
from painthub.errors import ConflictError
from painthub.logging import setup_logging
from painthub.services.owners import create_owner


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Create a PaintHub owner account")
    parser.add_argument("username")
    args = parser.parse_args(argv)

    setup_logging()
    if settings.auto_create_db:
        init_db()

    try:
        with session_scope() as db:
            owner = create_owner(db, args.username)
            owner_id = owner.id
    except ConflictError as e:
        print(f"ERROR: {e.detail}")
        return 1
    print(f"Created owner '{args.username.strip()}' (id={owner_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
