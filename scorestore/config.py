"""
Central configuration loader.
Reads from environment variables (via .env) into a pydantic-settings model.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# ---------------------------------------------------------------------------
# Load .env from repo root (if present)
# ---------------------------------------------------------------------------
_REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(_REPO_ROOT / ".env")


class Settings(BaseSettings):
    """Settings loaded from ``SCORESTORE_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SCORESTORE_",
        case_sensitive=True,
        extra="ignore",
    )

    DATABASE_PATH: Path = Field(default=_REPO_ROOT / "data" / "user_data.sqlite")
    QUERY_TIMEOUT_SECONDS: float = Field(default=0.001, ge=0)
    # SQLite VM instructions between deadline checks in bounded queries
    PROGRESS_CHECK_INTERVAL: int = Field(default=1000, gt=0)
    LOG_LEVEL: str = Field(default="INFO")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------
def get_repo_root() -> Path:
    return _REPO_ROOT


def get_db_path() -> Path:
    return get_settings().DATABASE_PATH
