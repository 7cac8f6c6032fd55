"""Print the pre-loaded draft context for a stored email.

Treats the stored message as if it had just arrived and shows exactly what
the drafting agent would receive.

Usage:
    bin/preview-context.py --user USER_ID --message MESSAGE_ID
    bin/preview-context.py --user USER_ID --message MESSAGE_ID --budget 3000 --full-prompt
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

from reply_context.config import AppConfig
from reply_context.context import ContextBuilder, build_draft_prompt
from reply_context.db import Database, EmailRepository
from reply_context.mail.models import IncomingEmail
from reply_context.db.models import to_db_timestamp


def main():
    parser = argparse.ArgumentParser(description="Preview draft context for a stored email")
    parser.add_argument("--user", required=True, help="User id the email belongs to")
    parser.add_argument("--message", required=True, help="Provider message id")
    parser.add_argument("--budget", type=int, help="Override total token budget")
    parser.add_argument(
        "--full-prompt", action="store_true", help="Print the whole draft prompt"
    )
    args = parser.parse_args()

    config = AppConfig.from_yaml()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    db = Database(config.database)
    db.initialize_schema()
    repo = EmailRepository(db)

    stored = repo.get_by_message(args.user, args.message)
    if stored is None:
        print(f"No email {args.message} stored for user {args.user}")
        sys.exit(1)

    incoming = IncomingEmail(
        message_id=stored.message_id,
        thread_id=stored.thread_id,
        from_address=stored.from_address,
        to=stored.to_address,
        subject=stored.subject or "",
        body=stored.body or "",
        snippet=stored.snippet,
        received_at=to_db_timestamp(stored.received_at),
        labels=stored.labels or [],
    )

    context_config = config.context
    if args.budget is not None:
        context_config = context_config.model_copy(update={"total_token_budget": args.budget})

    context = asyncio.run(ContextBuilder(repo).build_context(args.user, incoming, context_config))
    section = context.format_for_prompt()

    print(build_draft_prompt(incoming, section) if args.full_prompt else section)

    meta = context.metadata
    print("---")
    print(f"Thread emails loaded: {meta.thread_emails_loaded}")
    print(f"Sender emails loaded: {meta.sender_emails_loaded}")
    print(f"Token estimate:       {meta.token_estimate}")
    print(f"Truncated:            {meta.truncated}")
    print(f"Build time:           {meta.context_build_time_ms}ms")


if __name__ == "__main__":
    main()
