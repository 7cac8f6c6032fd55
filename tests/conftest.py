"""Shared fixtures — temporary SQLite email store."""

from __future__ import annotations

import pytest

from reply_context.config import DatabaseConfig
from reply_context.db.connection import Database
from reply_context.db.models import EmailRepository


@pytest.fixture
def db(tmp_path):
    """Create a temporary database for testing."""
    database = Database(DatabaseConfig(sqlite_path=tmp_path / "test.db"))
    database.initialize_schema()
    return database


@pytest.fixture
def repo(db):
    return EmailRepository(db)
