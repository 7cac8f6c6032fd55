"""Email data models — incoming, stored, and context representations."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any

from reply_context.mail.address import extract_email_address

NO_SUBJECT = "(No subject)"


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """Parse an ISO-8601 or RFC 2822 timestamp into an aware UTC datetime.

    Returns None for empty or unparsable input. Naive values are taken as UTC.
    """
    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        parsed = value
    else:
        text = value.strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError:
            try:
                parsed = parsedate_to_datetime(text)
            except (TypeError, ValueError):
                return None

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


@dataclass
class IncomingEmail:
    """A newly arrived message that a reply is being drafted for."""

    message_id: str
    from_address: str
    subject: str = ""
    body: str = ""
    thread_id: str | None = None
    to: str | None = None
    snippet: str | None = None
    received_at: str | None = None
    labels: list[str] = field(default_factory=list)

    @classmethod
    def from_payload(cls, data: dict[str, Any]) -> IncomingEmail:
        """Parse a webhook payload (camelCase or snake_case keys)."""

        def pick(*keys: str) -> Any:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return None

        return cls(
            message_id=pick("messageId", "message_id") or "",
            from_address=pick("from", "from_address") or "",
            subject=pick("subject") or "",
            body=pick("body") or "",
            thread_id=pick("threadId", "thread_id") or None,
            to=pick("to") or None,
            snippet=pick("snippet") or None,
            received_at=pick("receivedAt", "received_at") or None,
            labels=list(pick("labels") or []),
        )


@dataclass
class StoredEmail:
    """A row from the email store."""

    id: str
    user_id: str
    message_id: str
    from_address: str
    thread_id: str | None = None
    to_address: str | None = None
    subject: str | None = None
    body: str | None = None
    snippet: str | None = None
    received_at: datetime | None = None
    labels: list[str] | None = None


@dataclass
class ContextEmail:
    """One email as presented to the drafting agent."""

    id: str
    message_id: str
    from_address: str
    from_email: str
    subject: str
    to: str | None = None
    body: str | None = None
    snippet: str | None = None
    received_at: datetime | None = None
    is_current_email: bool = False

    @classmethod
    def from_stored(cls, email: StoredEmail) -> ContextEmail:
        return cls(
            id=email.id,
            message_id=email.message_id,
            from_address=email.from_address,
            from_email=extract_email_address(email.from_address),
            to=email.to_address,
            subject=email.subject or NO_SUBJECT,
            body=email.body,
            snippet=email.snippet,
            received_at=parse_timestamp(email.received_at),
            is_current_email=False,
        )

    @classmethod
    def from_incoming(cls, email: IncomingEmail) -> ContextEmail:
        # Not persisted yet, so there is no storage id.
        return cls(
            id="",
            message_id=email.message_id,
            from_address=email.from_address,
            from_email=extract_email_address(email.from_address),
            to=email.to or None,
            subject=email.subject or NO_SUBJECT,
            body=email.body,
            snippet=email.snippet or None,
            received_at=parse_timestamp(email.received_at),
            is_current_email=True,
        )

    @property
    def content(self) -> str:
        """Body, falling back to snippet."""
        return self.body or self.snippet or ""


@dataclass
class ThreadContext:
    thread_id: str
    emails: list[ContextEmail] = field(default_factory=list)

    @property
    def email_count(self) -> int:
        return len(self.emails)


@dataclass
class SenderContext:
    sender_email: str
    sender_name: str
    emails: list[ContextEmail] = field(default_factory=list)

    @property
    def email_count(self) -> int:
        return len(self.emails)


@dataclass
class ContextMetadata:
    context_build_time_ms: int = 0
    thread_emails_loaded: int = 0
    sender_emails_loaded: int = 0
    token_estimate: int = 0
    truncated: bool = False


@dataclass
class EmailContext:
    """Everything the drafting agent should know before writing a reply."""

    incoming_email: ContextEmail
    thread: ThreadContext | None = None
    sender_history: SenderContext | None = None
    metadata: ContextMetadata = field(default_factory=ContextMetadata)

    def format_for_prompt(self, now: datetime | None = None) -> str:
        """Render as a plain-text block for the draft prompt."""
        from reply_context.context.formatter import format_for_prompt

        return format_for_prompt(self, now=now)
