from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import AbstractSet, Union

from ..core.constants import ISO_DATE_FORMAT
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value, ISO_DATE_FORMAT).date()
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mock it easier.
    """
    return datetime.now()


def time_to_minutes(value: str) -> int:
    """Minutes since midnight for an ``HH:MM`` string ("" counts as 0)."""
    if not value:
        return 0
    try:
        hours, minutes = value.strip().split(":")[:2]
        return int(hours) * 60 + int(minutes)
    except ValueError:
        raise ValidationError(f"Invalid time {value!r}, expected HH:MM")


def month_key(year: int, month: int) -> str:
    return f"{int(year):04d}-{int(month):02d}"


def in_month(day: date, year: int, month: int) -> bool:
    return day.year == int(year) and day.month == int(month)


def days_in_month(year: int, month: int) -> list[date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError(f"Invalid month {month!r}")
    first = date(int(year), int(month), 1)
    count = calendar.monthrange(first.year, first.month)[1]
    return [first + timedelta(days=i) for i in range(count)]


def working_days_in_month(year: int, month: int, holiday_dates: AbstractSet[Union[str, date]] = frozenset()) -> int:
    """Days of the month that are not declared holidays.

    Weekends count as working days unless they appear in ``holiday_dates``.
    """
    holidays = {d.isoformat() if isinstance(d, date) else str(d) for d in holiday_dates}
    return sum(1 for day in days_in_month(year, month) if day.isoformat() not in holidays)


def is_late(check_in: datetime, shift_start: str, grace_period_minutes: int) -> bool:
    """True when check-in minute is strictly after shift start + grace.

    Seconds are ignored; a shift crossing midnight is not supported.
    """
    check_in_minutes = check_in.hour * 60 + check_in.minute
    return check_in_minutes > time_to_minutes(shift_start) + int(grace_period_minutes)


def is_future_date(value: date, today: date) -> bool:
    """Strictly after today (today itself is not the future)."""
    return value > today
