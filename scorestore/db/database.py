"""Core database connection with ACID transaction support."""

from __future__ import annotations

import logging
import sqlite3
import time
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Any, Generator, Iterator, Optional

from scorestore.db.schema import SCHEMA_DDL
from scorestore.errors import (
    CommitFailed,
    ConstraintViolation,
    StoreError,
    StoreUnavailable,
)

logger = logging.getLogger(__name__)


@contextmanager
def translate_errors(action: str) -> Iterator[None]:
    """Re-raise ``sqlite3`` failures as store error kinds.

    Integers outside SQLite's 64-bit range fail at bind time with
    ``OverflowError`` and count as constraint violations.
    """
    try:
        yield
    except StoreError:
        raise
    except (sqlite3.IntegrityError, OverflowError) as exc:
        raise ConstraintViolation(f"{action}: {exc}") from exc
    except sqlite3.Error as exc:
        raise StoreUnavailable(f"{action}: {exc}") from exc


class Database:
    """
    SQLite database wrapper with explicit ACID transaction support.

    Implements the Unit-of-Work pattern: every mutation goes through
    ``transaction()``, which commits on success and rolls back on failure.
    Reads that must finish before a deadline go through ``bounded()``.
    """

    def __init__(self, path: Optional[Path | str] = None):
        from scorestore.config import get_db_path
        if path is None:
            self.path: Path = get_db_path()
        elif isinstance(path, str):
            self.path = Path(path)
        else:
            self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    # -- connection lifecycle --------------------------------------------------

    def _ensure_dir(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            self._ensure_dir()
            try:
                conn = sqlite3.connect(str(self.path), check_same_thread=False)
                conn.row_factory = sqlite3.Row
            except sqlite3.Error as exc:
                raise StoreUnavailable(f"cannot open {self.path}: {exc}") from exc
            self._conn = conn
        return self._conn

    def close(self) -> None:
        if self._conn:
            self._conn.close()
            self._conn = None

    def init(self) -> None:
        """Create all tables (idempotent)."""
        with translate_errors("initialise schema"):
            conn = self.connection()
            conn.executescript(SCHEMA_DDL)
            conn.commit()
        logger.info(f"Database ready at {self.path}")

    # -- transaction helpers ---------------------------------------------------

    @contextmanager
    def transaction(self) -> Generator[sqlite3.Connection, None, None]:
        """ACID transaction: commits on success, rolls back on exception.

        A failing COMMIT is rolled back too and surfaces as ``CommitFailed``.
        """
        conn = self.connection()
        if not conn.in_transaction:
            conn.execute("BEGIN")
        try:
            yield conn
        except BaseException:
            self._rollback(conn)
            raise
        try:
            conn.commit()
        except sqlite3.Error as exc:
            self._rollback(conn)
            raise CommitFailed(f"commit failed: {exc}") from exc

    @staticmethod
    def _rollback(conn: sqlite3.Connection) -> None:
        try:
            conn.rollback()
        except sqlite3.Error:
            # The caller's exception is already propagating; keep it.
            logger.exception("Rollback failed")

    @contextmanager
    def bounded(
        self, deadline: float, check_interval: Optional[int] = None
    ) -> Generator[sqlite3.Connection, None, None]:
        """Abort any statement still running at ``deadline`` (``time.monotonic``).

        SQLite only checks the deadline every ``check_interval`` VM
        instructions, so expiry is best-effort. An aborted statement raises
        ``sqlite3.OperationalError("interrupted")``.
        """
        if check_interval is None:
            from scorestore.config import get_settings
            check_interval = get_settings().PROGRESS_CHECK_INTERVAL

        def _expired() -> int:
            return 1 if time.monotonic() >= deadline else 0

        conn = self.connection()
        conn.set_progress_handler(_expired, check_interval)
        try:
            yield conn
        finally:
            conn.set_progress_handler(None, check_interval)

    # -- low-level query helpers -----------------------------------------------

    def fetchone(self, sql: str, params: tuple = ()) -> Optional[dict[str, Any]]:
        with closing(self.connection().execute(sql, params)) as cursor:
            row = cursor.fetchone()
        return dict(row) if row else None

    def fetchall(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        with closing(self.connection().execute(sql, params)) as cursor:
            rows = cursor.fetchall()
        return [dict(r) for r in rows]


# -- module singleton ----------------------------------------------------------

_default_db: Optional[Database] = None


def get_db(path: Optional[Path] = None) -> Database:
    """Return (and lazily initialise) the module-level Database singleton."""
    global _default_db
    if _default_db is None:
        _default_db = Database(path)
        _default_db.init()
    return _default_db


def reset_db() -> None:
    """Close and discard the singleton (useful in tests)."""
    global _default_db
    if _default_db is not None:
        _default_db.close()
        _default_db = None
