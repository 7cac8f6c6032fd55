"""Prompt formatter — renders an EmailContext as plain text.

The section markers are matched literally by downstream prompt templates;
do not change them.
"""

from __future__ import annotations

from datetime import datetime, timezone

from reply_context.mail.models import EmailContext

THREAD_MARKER = "=== THREAD HISTORY ==="
SENDER_MARKER = "=== OTHER EMAILS FROM THIS SENDER ==="
FIRST_TIME_NOTICE = "NOTE: This appears to be the first email from this sender."

MAX_SENDER_ENTRIES = 3
PREVIEW_CHARS = 100


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count != 1 else ''}"


def _clock(dt: datetime) -> str:
    hour = dt.hour % 12 or 12
    return f"{hour}:{dt.minute:02d} {'AM' if dt.hour < 12 else 'PM'}"


def format_date(dt: datetime, now: datetime | None = None) -> str:
    """Relative label: Today/Yesterday with time, weekday within a week, else a short date."""
    now = now or datetime.now(timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    diff_days = int((now - dt).total_seconds() // 86400)

    if diff_days == 0:
        return f"Today at {_clock(dt)}"
    if diff_days == 1:
        return f"Yesterday at {_clock(dt)}"
    if 1 < diff_days < 7:
        return f"{dt.strftime('%A')}, {_clock(dt)}"
    label = f"{dt.strftime('%b')} {dt.day}"
    if dt.year != now.year:
        label += f", {dt.year}"
    return label


def format_for_prompt(context: EmailContext, now: datetime | None = None) -> str:
    """Format pre-loaded context as a block for the draft prompt."""
    now = now or datetime.now(timezone.utc)
    lines: list[str] = []

    thread = context.thread
    if thread and thread.emails:
        lines.append(THREAD_MARKER)
        lines.append(
            "This email is part of a conversation with "
            f"{_plural(thread.email_count, 'previous message')}."
        )
        lines.append("")
        for email in thread.emails:
            lines.append("--- Previous Email ---")
            lines.append(f"From: {email.from_address}")
            lines.append(f"Subject: {email.subject}")
            if email.received_at:
                lines.append(f"Date: {format_date(email.received_at, now)}")
            lines.append("")
            lines.append(email.content or "(No content)")
            lines.append("")

    sender = context.sender_history
    if sender and sender.emails:
        lines.append(SENDER_MARKER)
        lines.append(
            f"You have {_plural(sender.email_count, 'other email')} "
            f"from {sender.sender_name} (not in this thread)."
        )
        lines.append("")
        for email in sender.emails[:MAX_SENDER_ENTRIES]:
            when = format_date(email.received_at, now) if email.received_at else "unknown date"
            lines.append(f'- "{email.subject}" ({when})')
            preview = email.snippet or email.body
            if preview:
                lines.append(f"  Preview: {preview[:PREVIEW_CHARS]}...")
        lines.append("")

    if not context.thread and not context.sender_history:
        lines.append(FIRST_TIME_NOTICE)
        lines.append("")

    meta = context.metadata
    if meta.truncated:
        lines.append(
            f"[Context truncated to fit token budget. {meta.thread_emails_loaded} thread emails, "
            f"{meta.sender_emails_loaded} sender emails available.]"
        )
        lines.append("")

    return "\n".join(lines)
