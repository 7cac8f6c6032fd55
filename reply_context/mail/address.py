"""Sender address normalization for free-form From headers."""

from __future__ import annotations

import re

UNKNOWN_ADDRESS = "unknown@unknown.com"
UNKNOWN_NAME = "Unknown"

_BRACKET_RE = re.compile(r"<([^>]+)>")
_ADDRESS_RE = re.compile(r"[\w.+-]+@[\w.-]+\.\w+")
_NAME_RE = re.compile(r"^([^<]+)<")


def extract_email_address(raw: str | None) -> str:
    """Return the lower-cased address from a From header.

    Prefers ``<addr>``, then the first address-looking token, then the whole
    trimmed input.
    """
    if not raw:
        return UNKNOWN_ADDRESS

    m = _BRACKET_RE.search(raw)
    if m:
        return m.group(1).strip().lower()

    m = _ADDRESS_RE.search(raw)
    if m:
        return m.group(0).strip().lower()

    return raw.strip().lower()


def extract_display_name(raw: str | None) -> str:
    """Return the display name part of a From header, or the address if there is none."""
    if not raw:
        return UNKNOWN_NAME

    m = _NAME_RE.match(raw)
    if m:
        name = m.group(1).replace('"', "").strip()
        if name:
            return name

    return extract_email_address(raw)
