from __future__ import annotations

from datetime import date

import pytest

from src.attendance_standing.attendance_standing.common.date_ranges import (
    get_date_range,
    is_work_day,
    validate_date_range,
    week_bounds,
    week_start,
)
from src.attendance_standing.attendance_standing.core.exceptions import ValidationError

# 2024-11-19 is a Tuesday
TUESDAY = date(2024, 11, 19)


def test_school_week_starts_on_saturday():
    assert week_start(TUESDAY) == date(2024, 11, 16)
    assert week_start(date(2024, 11, 16)) == date(2024, 11, 16)
    # Friday belongs to the week that started the previous Saturday
    assert week_start(date(2024, 11, 22)) == date(2024, 11, 16)


def test_week_bounds_cover_saturday_to_thursday():
    start, end, days = week_bounds(TUESDAY)

    assert start == date(2024, 11, 16)
    assert end == date(2024, 11, 21)
    assert len(days) == 6
    assert all(is_work_day(d) for d in days)
    assert not is_work_day(date(2024, 11, 22))


def test_current_and_last_week():
    current = get_date_range("current-week", today=TUESDAY)
    last = get_date_range("last-week", today=TUESDAY)

    assert (current.start, current.end, current.label) == (date(2024, 11, 16), date(2024, 11, 21), "Current Week")
    assert (last.start, last.end) == (date(2024, 11, 9), date(2024, 11, 14))


def test_current_and_last_month():
    current = get_date_range("current-month", today=TUESDAY)
    last = get_date_range("last-month", today=date(2024, 1, 10))

    assert (current.start, current.end) == (date(2024, 11, 1), date(2024, 11, 30))
    assert (last.start, last.end, last.label) == (date(2023, 12, 1), date(2023, 12, 31), "Last Month")


def test_custom_range():
    r = get_date_range("custom", today=TUESDAY, custom_start=date(2024, 9, 1), custom_end=date(2024, 9, 30))

    assert r.days == 30
    assert r.label == "Custom Range"


@pytest.mark.parametrize(
    "start, end",
    [
        (date(2024, 9, 30), date(2024, 9, 1)),
        (date(2023, 1, 1), date(2024, 6, 1)),
    ],
)
def test_invalid_custom_ranges(start, end):
    with pytest.raises(ValidationError):
        validate_date_range(start, end)


def test_custom_range_needs_both_bounds():
    with pytest.raises(ValidationError):
        get_date_range("custom", today=TUESDAY, custom_start=date(2024, 9, 1))


def test_unknown_range_type():
    with pytest.raises(ValidationError):
        get_date_range("fortnight", today=TUESDAY)
