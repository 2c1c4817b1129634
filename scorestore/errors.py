"""Error kinds raised by the record store.

Every failure surfaced to a caller is a ``StoreError`` subclass carrying a
stable ``code``. Raw ``sqlite3`` exceptions never leave the repository layer;
they are chained as ``__cause__`` on the translated error.
"""

from __future__ import annotations

from typing import Optional


class StoreError(Exception):
    """Base exception for all record store failures."""

    code = "store_error"

    def __init__(self, message: str, *, user_id: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.user_id = user_id


class NotFoundError(StoreError):
    """No row matches the requested id."""

    code = "not_found"


class ConstraintViolation(StoreError):
    """A schema constraint (UNIQUE, NOT NULL) rejected the write."""

    code = "constraint_violation"


class StoreUnavailable(StoreError):
    """The engine could not be reached or failed mid-operation."""

    code = "store_unavailable"


class CommitFailed(StoreError):
    """The transaction body succeeded but COMMIT did not."""

    code = "commit_failed"


class DeadlineExceeded(StoreError):
    """A bounded-wait read did not finish before its deadline."""

    code = "deadline_exceeded"

    def __init__(self, message: str, *, timeout: Optional[float] = None):
        super().__init__(message)
        self.timeout = timeout
