from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator

from ..core.constants import PAYROLL_WEEK_END_WEEKDAY
from ..core.exceptions import ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD (or an ISO datetime, time part ignored) into date."""
    try:
        return datetime.strptime(value.strip().split("T", 1)[0], "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Ngày không hợp lệ: {value!r} (YYYY-MM-DD)")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def payroll_week_end(day: date) -> date:
    """Thursday closing the payroll week that contains `day`.

    Friday and Saturday belong to the next week.
    """
    diff = (PAYROLL_WEEK_END_WEEKDAY - day.weekday()) % 7
    return day + timedelta(days=diff)


def payroll_week_range(day: date) -> tuple[date, date]:
    end = payroll_week_end(day)
    return end - timedelta(days=6), end


def month_range(year: int, month: int) -> tuple[date, date]:
    if not 1 <= int(month) <= 12:
        raise ValidationError("Tháng không hợp lệ")
    last_day = calendar.monthrange(int(year), int(month))[1]
    return date(int(year), int(month), 1), date(int(year), int(month), last_day)


def previous_month(year: int, month: int) -> tuple[int, int]:
    if int(month) == 1:
        return int(year) - 1, 12
    return int(year), int(month) - 1


def iter_dates(start: date, end: date) -> Iterator[date]:
    if end < start:
        raise ValidationError("Ngày kết thúc phải sau ngày bắt đầu")
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def short_label(day: date) -> str:
    return f"{day.day}/{day.month}"
