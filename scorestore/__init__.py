"""scorestore: a scored-user table on SQLite with atomic transfers."""

from scorestore.db import Database, UserRepository
from scorestore.errors import (
    CommitFailed,
    ConstraintViolation,
    DeadlineExceeded,
    NotFoundError,
    StoreError,
    StoreUnavailable,
)
from scorestore.models import TransferState, User

__all__ = [
    "CommitFailed",
    "ConstraintViolation",
    "Database",
    "DeadlineExceeded",
    "NotFoundError",
    "StoreError",
    "StoreUnavailable",
    "TransferState",
    "User",
    "UserRepository",
]
