"""
Small parsing helpers shared by the Telegram handlers.
"""
from __future__ import annotations

from typing import Optional


def parse_callback_data(data: str, expected_parts: int = 3) -> Optional[tuple[str, ...]]:
    """Parse callback data into parts. Returns None if invalid."""
    parts = data.split(":", expected_parts - 1)
    return tuple(parts) if len(parts) >= expected_parts else None
