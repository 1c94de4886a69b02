"""Calendar windows and timestamp helpers.

Policy: instants are stored and compared in UTC. Calendar boundaries (day,
month) are computed in a single display timezone and converted back to UTC
before they reach the data store. Naive datetimes are read as UTC; plain
``date`` values are calendar dates in the display timezone.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta
from typing import List, Union

import pytz

DateLike = Union[date, datetime]


def get_tz(name: str | None = None):
    return pytz.timezone(name) if name else pytz.utc


def to_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return pytz.utc.localize(value)
    return value.astimezone(pytz.utc)


def now_utc() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(pytz.utc)


def local_date(value: DateLike, tz=pytz.utc) -> date:
    """Calendar date of ``value`` in ``tz``."""
    if isinstance(value, datetime):
        return to_utc(value).astimezone(tz).date()
    return value


def _at(day: date, moment: time, tz) -> datetime:
    return tz.localize(datetime.combine(day, moment))


def start_of_day(value: DateLike, tz=pytz.utc) -> datetime:
    return _at(local_date(value, tz), time.min, tz)


def end_of_day(value: DateLike, tz=pytz.utc) -> datetime:
    return _at(local_date(value, tz), time.max, tz)


def start_of_month(value: DateLike, tz=pytz.utc) -> datetime:
    return _at(local_date(value, tz).replace(day=1), time.min, tz)


def end_of_month(value: DateLike, tz=pytz.utc) -> datetime:
    day = local_date(value, tz)
    last = calendar.monthrange(day.year, day.month)[1]
    return _at(day.replace(day=last), time.max, tz)


def days_in_month(value: DateLike, tz=pytz.utc) -> List[date]:
    first = local_date(value, tz).replace(day=1)
    last = calendar.monthrange(first.year, first.month)[1]
    return [first + timedelta(days=offset) for offset in range(last)]


def is_same_day(a: DateLike, b: DateLike, tz=pytz.utc) -> bool:
    return local_date(a, tz) == local_date(b, tz)


def add_months(value: date, months: int) -> date:
    """First day of the month ``months`` away from ``value``."""
    index = value.year * 12 + (value.month - 1) + months
    return date(index // 12, index % 12 + 1, 1)


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_iso_month(value: str) -> date:
    """Parse YYYY-MM string into the first day of that month."""
    return datetime.strptime(value, "%Y-%m").date()


def format_time(value: datetime, tz=pytz.utc) -> str:
    return to_utc(value).astimezone(tz).strftime("%I:%M:%S %p")


def format_date(value: DateLike, tz=pytz.utc) -> str:
    day = local_date(value, tz)
    return f"{day.strftime('%B')} {day.day}, {day.year}"
