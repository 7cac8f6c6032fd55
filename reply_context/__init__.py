"""Deterministic reply context for an email drafting agent."""

from reply_context.config import ContextConfig
from reply_context.context import ContextBuilder, build_draft_prompt, format_for_prompt
from reply_context.mail.models import EmailContext, IncomingEmail

__all__ = [
    "ContextConfig",
    "ContextBuilder",
    "build_draft_prompt",
    "format_for_prompt",
    "EmailContext",
    "IncomingEmail",
]
