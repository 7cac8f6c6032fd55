"""Database connection management — SQLite."""

from __future__ import annotations

import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Generator

from reply_context.config import DatabaseConfig

logger = logging.getLogger(__name__)

_MIGRATIONS = ["001_emails.sql"]


class Database:
    """Thin SQLite wrapper; one connection per operation."""

    def __init__(self, config: DatabaseConfig):
        self.path = Path(config.sqlite_path)
        self.path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def connection(self) -> Generator[sqlite3.Connection, None, None]:
        """Get a database connection (context manager)."""
        conn = sqlite3.connect(str(self.path))
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA journal_mode=WAL")
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def execute(self, sql: str, params: tuple = ()) -> list[dict[str, Any]]:
        """Execute a query and return results as list of dicts."""
        with self.connection() as conn:
            cursor = conn.execute(sql, params)
            if cursor.description:
                columns = [d[0] for d in cursor.description]
                return [dict(zip(columns, row)) for row in cursor.fetchall()]
            return []

    def execute_one(self, sql: str, params: tuple = ()) -> dict[str, Any] | None:
        """Execute a query and return the first row as a dict, or None."""
        results = self.execute(sql, params)
        return results[0] if results else None

    def execute_write(self, sql: str, params: tuple = ()) -> int:
        """Execute an INSERT/UPDATE/DELETE and return lastrowid or rowcount."""
        with self.connection() as conn:
            cursor = conn.execute(sql, params)
            return cursor.lastrowid or cursor.rowcount

    def initialize_schema(self) -> None:
        """Apply bundled migrations (all idempotent)."""
        migrations_dir = Path(__file__).parent / "migrations"
        for migration_file in _MIGRATIONS:
            migration_path = migrations_dir / migration_file
            if not migration_path.exists():
                logger.warning("Migration file not found: %s", migration_path)
                continue
            with self.connection() as conn:
                conn.executescript(migration_path.read_text())
            logger.info("Applied migration: %s", migration_file)
