#!/usr/bin/env python3
"""Initialize the database and optionally seed it with users from a YAML file."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from scorestore.db.database import Database
from scorestore.db.user_repo import UserRepository
from scorestore.errors import StoreError


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument("--seed-users", type=str, help="YAML file with user definitions")
    parser.add_argument("--db-path", type=str, help="Override database path")
    args = parser.parse_args(argv)

    db_path = Path(args.db_path) if args.db_path else None
    db = Database(path=db_path)
    db.init()
    print(f"Database initialized at: {db.path}")

    created = 0
    if args.seed_users:
        created = seed_users(db, Path(args.seed_users))

    db.close()
    print(f"Done. {created} user(s) created.")
    return 0


def seed_users(db: Database, path: Path) -> int:
    """Insert every user listed under ``users:``; skip rows the store rejects."""
    import yaml
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    repo = UserRepository(db)
    created = 0
    for u in data.get("users", []):
        if not isinstance(u, dict):
            print(f"  Skipping {u!r}: not a mapping")
            continue
        try:
            score = int(u.get("score", 0))
        except (TypeError, ValueError):
            print(f"  Skipping {u.get('name', '?')}: invalid score {u.get('score')!r}")
            continue
        try:
            user_id = repo.create(u.get("name"), u.get("email"), score)
            print(f"  Created user {user_id}: {u['name']} ({u.get('email')})")
            created += 1
        except StoreError as e:
            print(f"  Skipping {u.get('name', '?')}: [{e.code}] {e}")
    return created


if __name__ == "__main__":
    sys.exit(main())
