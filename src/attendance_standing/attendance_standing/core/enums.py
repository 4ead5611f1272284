from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Per-period attendance status as stored by the marking screens."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    SICK = "SICK"
    LEAVE = "LEAVE"
    NOT_MARKED = "NOT_MARKED"

    @property
    def is_marked(self) -> bool:
        return self is not AttendanceStatus.NOT_MARKED


class RecordShape(str, Enum):
    """Which storage layout a batch of attendance rows came from."""

    # attendance_records: one row per student/period
    LEGACY = "legacy"
    # attendance_records_new: one row per student/day with period_{1..6}_* columns
    PERIOD_COLUMNS = "current"


class StandingStatus(str, Enum):
    """Academic standing derived from the attendance rate.

    WARNING is advisory only: it is the display form of a GOOD result that sits
    just above the tasdiq threshold and never affects exam eligibility.
    """

    GOOD = "GOOD"
    WARNING = "WARNING"
    TASDIQ_REQUIRED = "TASDIQ_REQUIRED"
    MAHROOM = "MAHROOM"


class DateRangeType(str, Enum):
    CURRENT_WEEK = "current-week"
    LAST_WEEK = "last-week"
    CURRENT_MONTH = "current-month"
    LAST_MONTH = "last-month"
    CUSTOM = "custom"
