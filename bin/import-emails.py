"""Load email payloads from a YAML file into the local email store.

The file holds a list of payloads in webhook shape (messageId, threadId,
from, to, subject, body, snippet, receivedAt, labels).

Usage:
    bin/import-emails.py emails.yml --user USER_ID
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

import yaml

from reply_context.config import AppConfig
from reply_context.db import Database, EmailRepository
from reply_context.mail.models import IncomingEmail


def main():
    parser = argparse.ArgumentParser(description="Import emails into the local store")
    parser.add_argument("file", type=Path, help="YAML file with a list of email payloads")
    parser.add_argument("--user", required=True, help="User id to store the emails under")
    args = parser.parse_args()

    config = AppConfig.from_yaml()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    with open(args.file) as f:
        payloads = yaml.safe_load(f) or []
    if not isinstance(payloads, list):
        print(f"Expected a list of emails in {args.file}")
        sys.exit(1)

    db = Database(config.database)
    db.initialize_schema()
    repo = EmailRepository(db)

    stored = 0
    for payload in payloads:
        incoming = IncomingEmail.from_payload(payload)
        if not incoming.message_id:
            print(f"  Skipping email without messageId: {incoming.subject or '(no subject)'}")
            continue
        repo.store_incoming(args.user, incoming)
        stored += 1

    print(f"Done. Stored {stored}/{len(payloads)} emails for user {args.user}.")


if __name__ == "__main__":
    main()
