"""
Common utilities for article source providers.
"""
from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional, Union

from dateutil import parser as dateparser


def parse_utc_datetime(date_string: Optional[str]) -> Optional[datetime]:
    """
    Parse a date string and convert to UTC datetime.

    Args:
        date_string: Date string in various formats, or None

    Returns:
        UTC datetime object, or None if input is None/empty
    """
    if not date_string:
        return None

    parsed_date = dateparser.parse(date_string)
    if parsed_date.tzinfo:
        return parsed_date.astimezone(timezone.utc)
    else:
        return parsed_date.replace(tzinfo=timezone.utc)


def from_unix_timestamp(timestamp: Optional[Union[int, float]]) -> Optional[datetime]:
    """Convert epoch seconds to a UTC datetime; None when missing."""
    if not timestamp:
        return None
    return datetime.fromtimestamp(timestamp, tz=timezone.utc)


def clean_text(text: Optional[str]) -> str:
    """
    Clean and normalize text content.

    Args:
        text: Raw text string or None

    Returns:
        Cleaned text string, empty string if input is None
    """
    if not text:
        return ""
    return text.strip()
