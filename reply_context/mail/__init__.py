"""Email models and sender address normalization."""

from reply_context.mail.address import extract_display_name, extract_email_address
from reply_context.mail.models import (
    ContextEmail,
    ContextMetadata,
    EmailContext,
    IncomingEmail,
    SenderContext,
    StoredEmail,
    ThreadContext,
)

__all__ = [
    "extract_display_name",
    "extract_email_address",
    "ContextEmail",
    "ContextMetadata",
    "EmailContext",
    "IncomingEmail",
    "SenderContext",
    "StoredEmail",
    "ThreadContext",
]
