"""Draft prompt assembly — wraps pre-loaded context around the incoming email."""

from __future__ import annotations

from reply_context.mail.models import IncomingEmail

INCOMING_MARKER = "=== INCOMING EMAIL (REPLY TO THIS) ==="

DRAFT_GUIDELINES = """Generate a professional and helpful reply. Consider the context above when crafting your response:
- If this is part of a thread, maintain continuity with previous messages
- If you've corresponded with this sender before, match the established tone
- Reference past conversations when relevant

You still have access to the searchEmails tool if you need additional context not provided above.

Remember to:
1. Match the appropriate tone
2. Be concise but complete
3. Include greeting and sign-off
4. Write as the person replying (first person)"""


def build_draft_prompt(incoming: IncomingEmail, context_section: str) -> str:
    """Build the drafting agent's prompt from the formatted context."""
    body = incoming.body or incoming.snippet or "(No content)"
    return f"""You are drafting a reply to an incoming email. I have pre-loaded relevant context for you.

{context_section}
{INCOMING_MARKER}
From: {incoming.from_address}
Subject: {incoming.subject}

{body}
---

{DRAFT_GUIDELINES}"""
