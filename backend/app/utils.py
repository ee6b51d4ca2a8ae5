"""
Shared utility functions for the news aggregation application.
"""
from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Union


def now_utc() -> datetime:
    """
    Get current UTC datetime with timezone information.

    Returns:
        Current UTC datetime
    """
    return datetime.now(timezone.utc)


def normalize_text(text: str | None) -> str:
    """
    Normalize whitespace in text content.

    Args:
        text: Input text string (can be None)

    Returns:
        Normalized text with single spaces and trimmed edges
    """
    if not text:
        return ""
    return re.sub(r"\s+", " ", text).strip()


def truncate_words(text: str, max_words: int) -> str:
    """
    Keep at most max_words whitespace-separated words, joined by single spaces.
    """
    return " ".join(text.split()[:max_words])


def format_number(value: Union[int, float]) -> str:
    """
    Render a number without a trailing ".0" when it is integral (1.0 -> "1").
    """
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)
