"""Text normalization for keyword matching."""

from __future__ import annotations

import re
from datetime import date, datetime

_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: str | None) -> str:
    """Lower-case, collapse whitespace and trim. ``None`` becomes ``""``."""
    if not value:
        return ""
    return _WHITESPACE.sub(" ", value).strip().lower()


def normalize_descriptor(name: str, brand: str | None = None) -> str:
    """Build the matching text for an item: ``"<name> <brand>"``."""
    return normalize_text(f"{name} {brand or ''}")


def parse_date(value: str | date | None) -> date | None:
    """Parse an ISO date or datetime string. Returns None if unparseable."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not value or not isinstance(value, str):
        return None
    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        pass
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None
