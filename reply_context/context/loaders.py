"""History loaders — thread and sender lookups against the email store.

Both are synchronous and let store errors propagate; the builder decides
how a failed lookup degrades.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from reply_context.mail.models import ContextEmail
from reply_context.storage import EmailFilter, EmailStore, SortOrder

logger = logging.getLogger(__name__)

# Extra rows fetched beyond max_thread_emails so the budgeter can drop the
# oldest without starving the result.
THREAD_OVERFETCH = 2


def load_thread_emails(
    store: EmailStore,
    user_id: str,
    thread_id: str | None,
    exclude_message_id: str,
    max_count: int,
) -> list[ContextEmail]:
    """Other emails in the thread, oldest first."""
    if not thread_id:
        return []

    rows = store.find_emails(
        EmailFilter(
            user_id=user_id,
            thread_id=thread_id,
            exclude_message_id=exclude_message_id,
        ),
        SortOrder.ASCENDING,
        max_count + THREAD_OVERFETCH,
    )
    logger.debug("Loaded %d thread emails for thread %s", len(rows), thread_id)
    return [ContextEmail.from_stored(r) for r in rows]


def load_sender_emails(
    store: EmailStore,
    user_id: str,
    sender_email: str,
    exclude_message_id: str,
    lookback_days: int,
    max_count: int,
    now: datetime | None = None,
) -> list[ContextEmail]:
    """Recent emails from the sender within the lookback window, newest first.

    Matching is a substring test because stored from fields may still carry
    the ``"Name" <addr>`` form. Undated emails are kept.
    """
    now = now or datetime.now(timezone.utc)
    rows = store.find_emails(
        EmailFilter(
            user_id=user_id,
            sender_contains=sender_email,
            exclude_message_id=exclude_message_id,
            received_after=now - timedelta(days=lookback_days),
            include_undated=True,
        ),
        SortOrder.DESCENDING,
        max_count,
    )
    logger.debug("Loaded %d sender emails for %s", len(rows), sender_email)
    return [ContextEmail.from_stored(r) for r in rows]
