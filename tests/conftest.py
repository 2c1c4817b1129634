"""Pytest configuration and shared fixtures."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv
load_dotenv()

from scorestore.db.database import Database
from scorestore.db.user_repo import UserRepository


def pytest_configure(config):
    """Configure custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")


@pytest.fixture
def db(tmp_path):
    """A fresh, initialised database in a temporary directory."""
    database = Database(path=tmp_path / "test.sqlite")
    database.init()
    yield database
    database.close()


@pytest.fixture
def repo(db):
    return UserRepository(db)
