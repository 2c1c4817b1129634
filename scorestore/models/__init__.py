"""Domain models for the score store."""

from scorestore.models.user import TransferState, User

__all__ = ["TransferState", "User"]
