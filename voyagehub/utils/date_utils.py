"""
Date utilities shared by models, services and the reminder job.
"""
from datetime import date, datetime, timedelta, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Current UTC time as a naive datetime.

    SQLite stores DATETIME columns without an offset, so every timestamp we
    write is naive UTC to keep values comparable after a round trip.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def today() -> date:
    return utcnow().date()


def days_until(target: date, reference: Optional[date] = None) -> int:
    """
    Number of whole days from ``reference`` (default today) to ``target``.

    Negative when the target lies in the past.
    """
    reference = reference or today()
    return (target - reference).days


def expiry_window(days: int, reference: Optional[date] = None) -> tuple[date, date]:
    """
    Inclusive date range [reference, reference + days] used for expiry checks.
    """
    start = reference or today()
    return start, start + timedelta(days=days)
