"""
Timestamp helpers - all stored timestamps are timezone-aware UTC
"""

from datetime import datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def next_timestamp(previous: Optional[datetime] = None) -> datetime:
    """
    Current time, nudged forward so it is strictly later than ``previous``.

    Two writes inside the same clock tick would otherwise get equal
    updated_at values.
    """
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now
