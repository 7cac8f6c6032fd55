"""Token budget allocation between thread history and sender history.

Thread history has priority: it gets a fixed sub-budget and is admitted
first, newest to oldest, skipping any email that no longer fits, then
restored to chronological order. Sender history only gets what is left of
the configured total after the thread and the prompt-template reserve,
capped by its own sub-budget, and stops at its first overflow.

The sub-budgets below are constants and do not scale with
``total_token_budget``; a smaller configured total only shrinks the
sender share. This is kept for compatibility with existing prompts, but a
total below THREAD_BUDGET + RESERVE is effectively not honored for the
thread section.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from reply_context.config import ContextConfig
from reply_context.context.tokens import estimate_email_tokens
from reply_context.mail.models import ContextEmail, SenderContext, ThreadContext

logger = logging.getLogger(__name__)

THREAD_BUDGET = 5000
SENDER_BUDGET = 2000
# Held back for the surrounding prompt template.
RESERVE = 1000


@dataclass
class BudgetResult:
    token_estimate: int
    truncated: bool
    thread: ThreadContext | None
    sender: SenderContext | None


def _admit(
    emails: list[ContextEmail], budget: int, skip_oversized: bool = False
) -> tuple[list[ContextEmail], int]:
    """Take emails in order while the running total fits.

    By default admission stops at the first email that does not fit. With
    ``skip_oversized`` that email is passed over and later ones are still tried.
    """
    admitted: list[ContextEmail] = []
    used = 0
    for email in emails:
        cost = estimate_email_tokens(email)
        if used + cost > budget:
            if skip_oversized:
                continue
            break
        admitted.append(email)
        used += cost
    return admitted, used


def apply_token_budget(
    thread: ThreadContext | None,
    sender: SenderContext | None,
    config: ContextConfig,
) -> BudgetResult:
    truncated = False
    thread_tokens = 0
    sender_tokens = 0

    kept_thread: ThreadContext | None = None
    if thread and thread.emails:
        newest_first, thread_tokens = _admit(
            list(reversed(thread.emails)), THREAD_BUDGET, skip_oversized=True
        )
        dropped = len(thread.emails) - len(newest_first)
        if dropped:
            truncated = True
            logger.debug("Dropped %d thread emails over budget", dropped)
        if newest_first:
            kept_thread = replace(thread, emails=list(reversed(newest_first)))

    kept_sender: SenderContext | None = None
    if sender and sender.emails:
        remaining = config.total_token_budget - thread_tokens - RESERVE
        if remaining <= 0:
            truncated = True
            logger.debug("No budget left for sender history, dropping %d", sender.email_count)
        else:
            admitted, sender_tokens = _admit(sender.emails, min(SENDER_BUDGET, remaining))
            dropped = len(sender.emails) - len(admitted)
            if dropped:
                truncated = True
                logger.debug("Dropped %d sender emails over budget", dropped)
            if admitted:
                kept_sender = replace(sender, emails=admitted)

    return BudgetResult(
        token_estimate=thread_tokens + sender_tokens,
        truncated=truncated,
        thread=kept_thread,
        sender=kept_sender,
    )
