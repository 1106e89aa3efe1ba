# core/datetime_utils.py
"""
Centralized datetime handling for the playground backend.

Award windows and ranking periods are calendar based: a "day" starts at local
midnight in settings.TIME_ZONE, a "week" starts on Monday midnight. A login at
23:59 and another at 00:01 belong to two different days.
"""
from datetime import datetime, timedelta
from typing import Optional
from django.utils import timezone


def now() -> datetime:
    """
    Get current datetime (timezone-aware when USE_TZ=True).

    This is the single source of truth for "now" in the backend.
    """
    return timezone.now()


def _local(dt: datetime) -> datetime:
    if timezone.is_aware(dt):
        return timezone.localtime(dt)
    return dt


def start_of_day(dt: datetime) -> datetime:
    """Midnight of the calendar day `dt` falls on."""
    return _local(dt).replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_today(current: Optional[datetime] = None) -> datetime:
    return start_of_day(current or now())


def start_of_week(current: Optional[datetime] = None) -> datetime:
    """Monday midnight of the week containing `current`."""
    today = start_of_today(current)
    return today - timedelta(days=today.weekday())


def start_of_trailing_days(days: int, current: Optional[datetime] = None) -> datetime:
    """
    Midnight of the first day of a trailing window of `days` calendar days
    ending today (days=7 -> start of the day 6 days ago).
    """
    return start_of_today(current) - timedelta(days=days - 1)


def day_key(dt: datetime) -> str:
    """ISO date label of the local calendar day, e.g. '2026-10-19'."""
    return _local(dt).date().isoformat()


def iso_week_key(dt: datetime) -> str:
    """ISO week label, e.g. '2026-W43'."""
    year, week, _ = _local(dt).isocalendar()
    return f"{year}-W{week:02d}"

