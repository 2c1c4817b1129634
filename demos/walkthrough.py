#!/usr/bin/env python3
"""
Score Store Walkthrough
=======================
Runs every store operation once against a fresh SQLite file:
1. Insert Alice and Bob
2. Update Alice's score
3. Read one user by id
4. Read all users ordered by score
5. Transfer points from Bob to Alice inside a transaction
6. Run a query bound to a (very short) deadline

Run: python demos/walkthrough.py [--db-path data/walkthrough.sqlite]
"""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

sys.path.insert(0, str(Path(__file__).parent.parent))

from scorestore.config import get_repo_root, get_settings
from scorestore.db.database import Database
from scorestore.db.user_repo import UserRepository
from scorestore.errors import DeadlineExceeded, StoreError
from scorestore.log import configure_logging
from scorestore.models.user import User

logger = logging.getLogger("walkthrough")

DEFAULT_DB_PATH = get_repo_root() / "data" / "walkthrough.sqlite"


def run(db_path: Path = DEFAULT_DB_PATH, timeout: Optional[float] = None) -> list[User]:
    """Execute the walkthrough and return the final table contents."""
    db_path.unlink(missing_ok=True)
    db = Database(path=db_path)
    try:
        db.init()
        repo = UserRepository(db)

        logger.info("--- 1. Insert ---")
        alice_id = repo.create("Alice", "alice@example.com", 100)
        bob_id = repo.create("Bob", "bob@example.com", 150)
        logger.info(f"Inserted Alice (ID: {alice_id}) and Bob (ID: {bob_id})")

        logger.info("--- 2. Update ---")
        repo.update_score(alice_id, 120)

        logger.info("--- 3. Read one row ---")
        alice = repo.get_by_id(alice_id)
        logger.info(f"Read user: {alice}")

        logger.info("--- 4. Read many rows ---")
        users = repo.list_all()
        logger.info(f"All users ({len(users)}):")
        for u in users:
            logger.info(f"  ID: {u.id}, Name: {u.name}, Score: {u.score}")

        logger.info("--- 5. Transaction ---")
        try:
            repo.transfer(bob_id, alice_id, 20)
        except StoreError as e:
            logger.error(f"Transfer rolled back: [{e.code}] {e}")

        logger.info("--- 6. Deadline ---")
        if timeout is None:
            timeout = get_settings().QUERY_TIMEOUT_SECONDS
        logger.info(f"  Running a query with a {timeout}s deadline...")
        try:
            rows = repo.query_with_timeout(timeout)
            logger.info(f"  Query finished in time ({len(rows)} rows)")
        except DeadlineExceeded as e:
            logger.info(f"  Deadline result: {e}")

        return repo.list_all()
    finally:
        db.close()


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Walk through every store operation")
    parser.add_argument("--db-path", type=str, help="SQLite file to (re)create")
    parser.add_argument("--timeout", type=float, help="Deadline for step 6, in seconds")
    parser.add_argument("--log-level", type=str, help="Override SCORESTORE_LOG_LEVEL")
    args = parser.parse_args(argv)

    configure_logging(args.log_level)
    db_path = Path(args.db_path) if args.db_path else DEFAULT_DB_PATH
    try:
        run(db_path, args.timeout)
    except StoreError as e:
        logger.error(f"Walkthrough aborted: [{e.code}] {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
