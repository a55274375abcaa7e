"""
UTC helpers - every stored timestamp is interpreted as UTC
"""
from datetime import datetime, date, time, timezone, timedelta
from typing import Optional


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive datetimes (SQLite drops tzinfo), convert aware ones"""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def start_of_day(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


def current_week_start(today: Optional[date] = None) -> date:
    """Monday of the week containing today (UTC)"""
    today = today or utcnow().date()
    return today - timedelta(days=today.weekday())


def isoformat_utc(value: Optional[datetime]) -> str:
    if value is None:
        return "N/A"
    return as_utc(value).isoformat()
