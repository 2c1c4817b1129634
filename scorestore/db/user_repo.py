"""Repository for the ``users`` table: CRUD, score transfer and bounded reads."""

from __future__ import annotations

import logging
import sqlite3
import time
from contextlib import closing
from typing import Optional

from scorestore.db.database import Database, translate_errors
from scorestore.errors import ConstraintViolation, DeadlineExceeded, NotFoundError
from scorestore.models.user import TransferState, User

logger = logging.getLogger(__name__)

_SELECT_BY_ID = "SELECT id, name, email, score FROM users WHERE id = ?"
_SELECT_ALL = "SELECT id, name, email, score FROM users ORDER BY score DESC"


def _require_int(field: str, value: object) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConstraintViolation(f"{field} must be an integer, got {value!r}")


class UserRepository:
    """Single-Responsibility repository for user persistence."""

    def __init__(self, db: Database):
        self._db = db

    # -- Create ----------------------------------------------------------------

    def create(self, name: str, email: Optional[str], score: int = 0) -> int:
        """Insert a new user and return its id. Raises on duplicate email."""
        if not name:
            # NOT NULL alone would let an empty string through.
            raise ConstraintViolation("user name must be a non-empty string")
        _require_int("score", score)
        with translate_errors("insert user"), self._db.transaction() as conn:
            cursor = conn.execute(
                "INSERT INTO users (name, email, score) VALUES (?, ?, ?)",
                (name, email, score),
            )
            user_id = cursor.lastrowid
        logger.info(f"Inserted user {user_id}: {name} <{email}>")
        return user_id

    # -- Read ------------------------------------------------------------------

    def get_by_id(self, user_id: int) -> User:
        with translate_errors(f"read user {user_id}"):
            row = self._db.fetchone(_SELECT_BY_ID, (user_id,))
        if row is None:
            raise NotFoundError(f"user {user_id} not found", user_id=user_id)
        return User.from_row(row)

    def list_all(self) -> list[User]:
        """All users, highest score first."""
        with translate_errors("list users"):
            rows = self._db.fetchall(_SELECT_ALL)
        return [User.from_row(r) for r in rows]

    # -- Update ----------------------------------------------------------------

    def update_score(self, user_id: int, score: int) -> User:
        """Overwrite a user's score. Raises ``NotFoundError`` for unknown ids."""
        _require_int("score", score)
        with translate_errors(f"update score of user {user_id}"), self._db.transaction() as conn:
            cursor = conn.execute(
                "UPDATE users SET score = ? WHERE id = ?", (score, user_id)
            )
            if cursor.rowcount == 0:
                logger.warning(f"Score update skipped: user {user_id} not found")
                raise NotFoundError(f"user {user_id} not found", user_id=user_id)
        logger.info(f"Updated score of user {user_id} to {score}")
        return self.get_by_id(user_id)

    # -- Transfer --------------------------------------------------------------

    def transfer(self, from_id: int, to_id: int, amount: int) -> None:
        """
        Move ``amount`` points from one user to another atomically.

        Either both rows change or neither does. The sender's score may go
        negative.
        """
        _require_int("amount", amount)
        state = TransferState.IDLE
        try:
            with translate_errors("transfer"), self._db.transaction() as conn:
                state = self._advance(state, TransferState.TX_OPEN, from_id, to_id)

                cursor = conn.execute(
                    "UPDATE users SET score = score - ? WHERE id = ?", (amount, from_id)
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"sender {from_id} not found", user_id=from_id)
                state = self._advance(state, TransferState.DEBITED, from_id, to_id)

                cursor = conn.execute(
                    "UPDATE users SET score = score + ? WHERE id = ?", (amount, to_id)
                )
                if cursor.rowcount == 0:
                    raise NotFoundError(f"recipient {to_id} not found", user_id=to_id)
                state = self._advance(state, TransferState.CREDITED, from_id, to_id)
        except BaseException as exc:
            self._advance(state, TransferState.ROLLED_BACK, from_id, to_id)
            logger.error(f"Transfer of {amount} from {from_id} to {to_id} failed: {exc}")
            raise
        self._advance(state, TransferState.COMMITTED, from_id, to_id)
        logger.info(f"Transferred {amount} points from user {from_id} to user {to_id}")

    @staticmethod
    def _advance(
        current: TransferState, new: TransferState, from_id: int, to_id: int
    ) -> TransferState:
        level = logging.INFO if new.is_terminal else logging.DEBUG
        logger.log(level, f"Transfer {from_id}->{to_id}: {current.value} -> {new.value}")
        return new

    # -- Bounded read ----------------------------------------------------------

    def query_with_timeout(self, timeout: Optional[float] = None) -> list[User]:
        """
        ``list_all`` bound to a deadline of ``timeout`` seconds from now.

        Raises ``DeadlineExceeded`` (and returns nothing) if the read has not
        finished in time. A non-positive timeout has already elapsed.
        """
        if timeout is None:
            from scorestore.config import get_settings
            timeout = get_settings().QUERY_TIMEOUT_SECONDS

        deadline = time.monotonic() + timeout
        if timeout <= 0:
            raise DeadlineExceeded(f"deadline of {timeout}s already elapsed", timeout=timeout)

        with translate_errors("bounded query"), self._db.bounded(deadline) as conn:
            try:
                with closing(conn.execute(_SELECT_ALL)) as cursor:
                    rows = cursor.fetchall()
            except sqlite3.OperationalError as exc:
                if time.monotonic() >= deadline:
                    raise DeadlineExceeded(
                        f"query interrupted after {timeout}s", timeout=timeout
                    ) from exc
                raise

        if time.monotonic() > deadline:
            raise DeadlineExceeded(f"query finished after its {timeout}s deadline", timeout=timeout)
        return [User.from_row(dict(r)) for r in rows]
