from __future__ import annotations

from datetime import date, datetime
from typing import Optional


def ensure_aware(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        raise ValueError("datetime must be timezone-aware")
    return dt


def to_iso(dt: datetime) -> str:
    ensure_aware(dt)
    # store as ISO 8601 with offset
    return dt.isoformat()


def from_iso(s: str) -> datetime:
    return datetime.fromisoformat(s)


def parse_due_date(text: Optional[str]) -> Optional[str]:
    """Parse YYYY-MM-DD input. Returns the normalized date string, None for empty input."""
    if text is None:
        return None
    text = text.strip()
    if not text:
        return None
    return date.fromisoformat(text).isoformat()


def format_day(value: Optional[str], with_year: bool = True) -> str:
    """'2024-03-05' or a full ISO timestamp -> 'Mar 05, 2024'."""
    if not value:
        return ""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return value
    return parsed.strftime("%b %d, %Y" if with_year else "%b %d")
