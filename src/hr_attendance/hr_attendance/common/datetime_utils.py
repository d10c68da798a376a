from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator, Optional


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def minutes_between(start: Optional[datetime], end: Optional[datetime]) -> int:
    """Whole minutes from start to end, floor-truncated. 0 if either side is missing."""
    if not start or not end:
        return 0
    return int((end - start).total_seconds() // 60)


def iter_days(start: date, end: date) -> Iterator[date]:
    """Every calendar day in [start, end]."""
    day = start
    while day <= end:
        yield day
        day += timedelta(days=1)


def inclusive_day_count(start: date, end: date) -> int:
    return (end - start).days + 1


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def sunday_week_number(day: date) -> int:
    """Week of year, weeks starting on Sunday (days before the first Sunday are week 0)."""
    return int(day.strftime("%U"))
