"""Context builder — assembles thread and sender history for a reply draft.

Both lookups run concurrently on worker threads. Each one degrades to an
empty result on failure, so a broken thread fetch never costs the sender
history and vice versa. build_context never raises on store errors.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping
from typing import Any

from reply_context.config import ContextConfig
from reply_context.context.budget import apply_token_budget
from reply_context.context.loaders import load_sender_emails, load_thread_emails
from reply_context.mail.address import extract_display_name, extract_email_address
from reply_context.mail.models import (
    ContextEmail,
    ContextMetadata,
    EmailContext,
    IncomingEmail,
    SenderContext,
    ThreadContext,
)
from reply_context.storage import EmailStore

logger = logging.getLogger(__name__)


class ContextBuilder:
    """Builds the pre-loaded context an agent gets before drafting a reply."""

    def __init__(self, store: EmailStore):
        self.store = store

    async def build_context(
        self,
        user_id: str,
        incoming: IncomingEmail,
        config: ContextConfig | Mapping[str, Any] | None = None,
    ) -> EmailContext:
        started = time.monotonic()
        cfg = ContextConfig.resolve(config)
        sender_email = extract_email_address(incoming.from_address)

        thread_branch = (
            self._safe_load(
                "Thread",
                load_thread_emails,
                self.store,
                user_id,
                incoming.thread_id,
                incoming.message_id,
                cfg.max_thread_emails,
            )
            if incoming.thread_id
            else _no_emails()
        )
        sender_branch = self._safe_load(
            "Sender",
            load_sender_emails,
            self.store,
            user_id,
            sender_email,
            incoming.message_id,
            cfg.sender_lookback_days,
            cfg.max_sender_emails,
        )
        thread_emails, sender_emails = await asyncio.gather(thread_branch, sender_branch)

        thread_ids = {e.message_id for e in thread_emails}
        sender_only = [e for e in sender_emails if e.message_id not in thread_ids]

        thread = (
            ThreadContext(thread_id=incoming.thread_id, emails=thread_emails)
            if incoming.thread_id and thread_emails
            else None
        )
        sender = (
            SenderContext(
                sender_email=sender_email,
                sender_name=extract_display_name(incoming.from_address),
                emails=sender_only,
            )
            if sender_only
            else None
        )

        budget = apply_token_budget(thread, sender, cfg)

        metadata = ContextMetadata(
            context_build_time_ms=int((time.monotonic() - started) * 1000),
            thread_emails_loaded=len(thread_emails),
            sender_emails_loaded=len(sender_only),
            token_estimate=budget.token_estimate,
            truncated=budget.truncated,
        )
        logger.info(
            "Context built in %dms: %d thread, %d sender emails, ~%d tokens%s",
            metadata.context_build_time_ms,
            metadata.thread_emails_loaded,
            metadata.sender_emails_loaded,
            metadata.token_estimate,
            " (truncated)" if metadata.truncated else "",
        )

        return EmailContext(
            incoming_email=ContextEmail.from_incoming(incoming),
            thread=budget.thread,
            sender_history=budget.sender,
            metadata=metadata,
        )

    async def _safe_load(
        self, label: str, loader: Callable[..., list[ContextEmail]], *args: Any
    ) -> list[ContextEmail]:
        try:
            return await asyncio.to_thread(loader, *args)
        except Exception as e:
            logger.warning("%s fetch failed (non-fatal): %s", label, e)
            return []


async def _no_emails() -> list[ContextEmail]:
    return []
