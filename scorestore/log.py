"""Logging setup shared by scripts and demos."""

from __future__ import annotations

import logging
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """Configure root logging; falls back to ``Settings.LOG_LEVEL``."""
    if level is None:
        from scorestore.config import get_settings
        level = get_settings().LOG_LEVEL
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)
