"""Token estimation — a cheap, monotonic stand-in for a real tokenizer."""

from __future__ import annotations

import math

from reply_context.mail.models import ContextEmail

CHARS_PER_TOKEN = 4


def estimate_tokens(text: str | None) -> int:
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN)


def estimate_email_tokens(email: ContextEmail) -> int:
    """Estimate the cost of an email as rendered: From, Subject, then content."""
    rendered = "\n".join(
        [f"From: {email.from_address}", f"Subject: {email.subject}", email.content]
    )
    return estimate_tokens(rendered)
