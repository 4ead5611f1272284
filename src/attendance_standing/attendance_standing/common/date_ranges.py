"""Reporting windows used by dashboards and exports.

The school week runs Saturday to Thursday; Friday is the only day off.
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.constants import MAX_REPORT_RANGE_DAYS
from ..core.enums import DateRangeType
from ..core.exceptions import ValidationError

SCHOOL_WEEK_DAYS = ("Saturday", "Sunday", "Monday", "Tuesday", "Wednesday", "Thursday")
_SATURDAY = 5
_FRIDAY = 4


@dataclass(frozen=True)
class DateRange:
    start: date
    end: date
    label: str

    @property
    def days(self) -> int:
        return (self.end - self.start).days + 1


def week_start(day: date) -> date:
    """Most recent Saturday on or before ``day``."""
    return day - timedelta(days=(day.weekday() - _SATURDAY) % 7)


def week_bounds(day: date) -> tuple[date, date, list[date]]:
    start = week_start(day)
    days = [start + timedelta(days=i) for i in range(len(SCHOOL_WEEK_DAYS))]
    return start, days[-1], days


def is_work_day(day: date) -> bool:
    return day.weekday() != _FRIDAY


def _month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def validate_date_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("Start date must be before end date")
    if (end - start).days > MAX_REPORT_RANGE_DAYS:
        raise ValidationError(f"Date range cannot exceed {MAX_REPORT_RANGE_DAYS} days")


def get_date_range(
    kind: DateRangeType | str,
    *,
    today: date,
    custom_start: Optional[date] = None,
    custom_end: Optional[date] = None,
) -> DateRange:
    try:
        kind = DateRangeType(kind)
    except ValueError:
        raise ValidationError(f"Unknown date range type: {kind}") from None

    if kind == DateRangeType.CURRENT_WEEK:
        start, end, _ = week_bounds(today)
        return DateRange(start=start, end=end, label="Current Week")

    if kind == DateRangeType.LAST_WEEK:
        start, end, _ = week_bounds(week_start(today) - timedelta(days=7))
        return DateRange(start=start, end=end, label="Last Week")

    if kind == DateRangeType.CURRENT_MONTH:
        start, end = _month_bounds(today.year, today.month)
        return DateRange(start=start, end=end, label="Current Month")

    if kind == DateRangeType.LAST_MONTH:
        year, month = (today.year - 1, 12) if today.month == 1 else (today.year, today.month - 1)
        start, end = _month_bounds(year, month)
        return DateRange(start=start, end=end, label="Last Month")

    if not custom_start or not custom_end:
        raise ValidationError("Custom date range requires both start and end dates")
    validate_date_range(custom_start, custom_end)
    return DateRange(start=custom_start, end=custom_end, label="Custom Range")
