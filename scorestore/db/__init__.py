"""Database layer: SQLite with ACID transactions and repository pattern."""

from scorestore.db.database import Database, get_db, reset_db
from scorestore.db.schema import SCHEMA_DDL
from scorestore.db.user_repo import UserRepository

__all__ = ["Database", "get_db", "reset_db", "SCHEMA_DDL", "UserRepository"]
