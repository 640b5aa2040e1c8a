"""Date helpers shared by every aggregation.

Records carry calendar days as ``yyyy-MM-dd`` strings and instants as ISO-8601
timestamps. Instants are converted to a calendar day in an explicit timezone
before any day arithmetic; naive timestamps are read as UTC, which is how the
record store writes them.
"""

from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dashboard.constants import DATE_FORMAT, DEFAULT_TIMEZONE


class InvalidDateError(ValueError):
    """Raised when a record carries a date that cannot be parsed."""


def _zone(tz_name: str | None) -> ZoneInfo:
    try:
        return ZoneInfo(tz_name or DEFAULT_TIMEZONE)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise InvalidDateError(f"Unknown timezone: {tz_name!r}") from exc


def parse_day(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or len(value.strip()) != 10:
        raise InvalidDateError(f"Invalid date: {value!r}")
    try:
        return date.fromisoformat(value.strip())
    except ValueError as exc:
        raise InvalidDateError(f"Invalid date: {value!r}") from exc


def parse_timestamp(value) -> datetime:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError as exc:
            raise InvalidDateError(f"Invalid timestamp: {value!r}") from exc
    else:
        raise InvalidDateError(f"Invalid timestamp: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def local_day(value, tz_name: str | None = None) -> date:
    """Calendar day of a date, a ``yyyy-MM-dd`` string or a timestamp."""
    if isinstance(value, date) and not isinstance(value, datetime):
        return value
    if isinstance(value, str) and len(value.strip()) == 10:
        return parse_day(value)
    return parse_timestamp(value).astimezone(_zone(tz_name)).date()


def today(tz_name: str | None = None, now: datetime | None = None) -> date:
    current = now or datetime.now(timezone.utc)
    if current.tzinfo is None:
        current = current.replace(tzinfo=timezone.utc)
    return current.astimezone(_zone(tz_name)).date()


def days_between(start: date, end: date) -> int:
    return (end - start).days


def start_of_week(day: date) -> date:
    return day - timedelta(days=day.weekday())


def end_of_week(day: date) -> date:
    return start_of_week(day) + timedelta(days=6)


def start_of_month(day: date) -> date:
    return day.replace(day=1)


def end_of_month(day: date) -> date:
    last = calendar.monthrange(day.year, day.month)[1]
    return day.replace(day=last)


def is_same_day(left, right, tz_name: str | None = None) -> bool:
    return local_day(left, tz_name) == local_day(right, tz_name)


def format_day(day: date) -> str:
    return day.strftime(DATE_FORMAT)
