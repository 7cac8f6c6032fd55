"""Storage port — the narrow query interface the context engine reads emails through."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from reply_context.mail.models import StoredEmail


class SortOrder(str, Enum):
    """Ordering by receive time."""

    ASCENDING = "asc"
    DESCENDING = "desc"


@dataclass
class EmailFilter:
    """Conjunction of conditions on stored emails. Unset fields are not applied."""

    user_id: str
    thread_id: str | None = None
    sender_contains: str | None = None
    exclude_message_id: str | None = None
    received_after: datetime | None = None
    # Emails with no receive time still pass the received_after bound.
    include_undated: bool = True


class EmailStore(Protocol):
    """Read access to a user's stored mail."""

    def find_emails(
        self, email_filter: EmailFilter, order: SortOrder, limit: int
    ) -> list[StoredEmail]:
        """Return matching emails ordered by receive time, at most ``limit`` of them.

        ``sender_contains`` is a case-insensitive substring match on the from field.
        """
        ...
