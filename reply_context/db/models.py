"""Email repository — SQLite implementation of the email store."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from reply_context.db.connection import Database
from reply_context.mail.models import IncomingEmail, StoredEmail, parse_timestamp
from reply_context.storage import EmailFilter, SortOrder

logger = logging.getLogger(__name__)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def to_db_timestamp(value: datetime | None) -> str | None:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime(_TIMESTAMP_FORMAT)


def from_db_timestamp(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.strptime(value, _TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError:
        return parse_timestamp(value)


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class EmailRepository:
    """Database operations for stored emails."""

    def __init__(self, db: Database):
        self.db = db

    def find_emails(
        self, email_filter: EmailFilter, order: SortOrder, limit: int
    ) -> list[StoredEmail]:
        clauses = ["user_id = ?"]
        params: list[Any] = [email_filter.user_id]

        if email_filter.thread_id is not None:
            clauses.append("thread_id = ?")
            params.append(email_filter.thread_id)
        if email_filter.sender_contains:
            clauses.append("LOWER(from_address) LIKE ? ESCAPE '\\'")
            params.append(f"%{_escape_like(email_filter.sender_contains.lower())}%")
        if email_filter.exclude_message_id:
            clauses.append("message_id != ?")
            params.append(email_filter.exclude_message_id)
        if email_filter.received_after is not None:
            if email_filter.include_undated:
                clauses.append("(received_at >= ? OR received_at IS NULL)")
            else:
                clauses.append("received_at >= ?")
            params.append(to_db_timestamp(email_filter.received_after))

        direction = "DESC" if order == SortOrder.DESCENDING else "ASC"
        params.append(limit)
        rows = self.db.execute(
            f"""SELECT * FROM emails
                WHERE {' AND '.join(clauses)}
                ORDER BY received_at {direction}, id {direction}
                LIMIT ?""",
            tuple(params),
        )
        return [self._to_stored(r) for r in rows]

    def get_by_message(self, user_id: str, message_id: str) -> StoredEmail | None:
        row = self.db.execute_one(
            "SELECT * FROM emails WHERE user_id = ? AND message_id = ?",
            (user_id, message_id),
        )
        return self._to_stored(row) if row else None

    def store_incoming(self, user_id: str, incoming: IncomingEmail) -> str:
        """Persist an incoming email. Idempotent; returns the row id."""
        existing = self.get_by_message(user_id, incoming.message_id)
        if existing:
            logger.info("Email already stored: %s", incoming.message_id)
            return existing.id

        row_id = self.db.execute_write(
            """INSERT INTO emails (
                user_id, message_id, thread_id, from_address, to_address,
                subject, body, snippet, received_at, labels
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                user_id,
                incoming.message_id,
                incoming.thread_id or None,
                incoming.from_address,
                incoming.to or None,
                incoming.subject or None,
                incoming.body or None,
                incoming.snippet or None,
                to_db_timestamp(parse_timestamp(incoming.received_at)),
                json.dumps(incoming.labels) if incoming.labels else None,
            ),
        )
        logger.info("Email stored: %s -> %s", incoming.message_id, row_id)
        return str(row_id)

    @staticmethod
    def _to_stored(row: dict[str, Any]) -> StoredEmail:
        return StoredEmail(
            id=str(row["id"]),
            user_id=row["user_id"],
            message_id=row["message_id"],
            thread_id=row["thread_id"],
            from_address=row["from_address"],
            to_address=row["to_address"],
            subject=row["subject"],
            body=row["body"],
            snippet=row["snippet"],
            received_at=from_db_timestamp(row["received_at"]),
            labels=json.loads(row["labels"]) if row["labels"] else None,
        )
