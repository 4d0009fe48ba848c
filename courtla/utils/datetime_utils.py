"""
Datetime utility functions.
"""

from datetime import datetime, timedelta

import pytz


def utcnow() -> datetime:
    """
    Get current UTC datetime using pytz.UTC.

    Returns:
        Current UTC datetime with pytz timezone information
    """
    return datetime.now(pytz.UTC)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value.tzinfo is None:
        return pytz.UTC.localize(value)
    return value.astimezone(pytz.UTC)


def days_from_now(days: float) -> datetime:
    """Return the UTC instant ``days`` days from now (negative for the past)."""
    return utcnow() + timedelta(days=days)
