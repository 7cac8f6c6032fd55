"""Database layer — SQLite-backed email store."""

from reply_context.db.connection import Database
from reply_context.db.models import EmailRepository

__all__ = ["Database", "EmailRepository"]
