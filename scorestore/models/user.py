"""User domain model: one row of the ``users`` table."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Optional


class TransferState(str, Enum):
    """Lifecycle of a single score transfer."""
    IDLE = "idle"
    TX_OPEN = "tx_open"
    DEBITED = "debited"
    CREDITED = "credited"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"

    @property
    def is_terminal(self) -> bool:
        return self in (TransferState.COMMITTED, TransferState.ROLLED_BACK)


@dataclass(frozen=True)
class User:
    """A scored user. Instances are detached copies of a stored row."""

    id: int
    name: str
    email: Optional[str]
    score: Optional[int]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> "User":
        return cls(
            id=row["id"],
            name=row["name"],
            email=row.get("email"),
            score=row.get("score"),
        )
