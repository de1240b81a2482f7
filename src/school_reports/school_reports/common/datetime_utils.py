from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ValidationError


def parse_clock_time(value: str) -> time:
    """Parse an HH:MM (or HH:MM:SS) clock value, keeping hours and minutes only."""
    parts = value.strip().split(":")
    if len(parts) not in (2, 3):
        raise ValueError(f"Invalid clock time: {value!r}")
    return time(hour=int(parts[0]), minute=int(parts[1]))


def format_clock_time(value: time | None) -> str | None:
    return value.strftime("%H:%M") if value is not None else None


def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ValidationError(f"Unknown reporting timezone: {name!r}") from e


def now_local(tz: ZoneInfo) -> datetime:
    """Current time in the reporting timezone.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(tz)


def to_local_date(value: datetime, tz: ZoneInfo) -> date:
    """Calendar day of a timestamp in the reporting timezone.

    Naive timestamps are read as UTC, which is how the store saves them.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz).date()


def day_bounds_utc(start: date, end: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """[start 00:00, end+1 00:00) in the reporting timezone, as naive UTC datetimes."""
    lower = datetime.combine(start, time.min, tzinfo=tz).astimezone(timezone.utc)
    upper = datetime.combine(end + timedelta(days=1), time.min, tzinfo=tz).astimezone(timezone.utc)
    return lower.replace(tzinfo=None), upper.replace(tzinfo=None)


def start_of_week(today: date) -> date:
    """Sunday that opens the week containing ``today``."""
    return today - timedelta(days=(today.weekday() + 1) % 7)


def as_local(now: datetime | None, tz: ZoneInfo) -> datetime:
    """``now`` in the reporting timezone; naive values are taken as already local."""
    if now is None:
        return now_local(tz)
    if now.tzinfo is not None:
        return now.astimezone(tz)
    return now
