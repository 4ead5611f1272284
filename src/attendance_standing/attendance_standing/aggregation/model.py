from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class DateWindow:
    """Inclusive date window; a missing bound is unbounded."""

    start: Optional[date] = None
    end: Optional[date] = None

    def __post_init__(self):
        if self.start is not None and self.end is not None and self.start > self.end:
            raise ValidationError("Start date must be before end date")

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


@dataclass(frozen=True)
class DailyStat:
    """Per-day view: each student counts once, by their first marked period."""

    date: date
    total: int
    present: int
    absent: int
    sick: int
    leave: int
    not_marked: int
    rate: float


@dataclass(frozen=True)
class StudentAggregate:
    """Per-student view: every marked period counts."""

    student_id: str
    total_marked_periods: int = 0
    present_count: int = 0
    absent_count: int = 0
    sick_count: int = 0
    leave_count: int = 0
    attendance_rate: float = 0.0


@dataclass(frozen=True)
class RankedStudent:
    rank: int
    student_id: str
    attendance_rate: float


@dataclass(frozen=True)
class ClassAggregate:
    class_id: str
    student_count: int
    # None means "not applicable": the class has no members
    class_average_rate: Optional[float]
    ranked_students: tuple[RankedStudent, ...] = ()
    members: tuple[StudentAggregate, ...] = ()

    @property
    def is_applicable(self) -> bool:
        return self.student_count > 0

    def member(self, student_id: str) -> Optional[StudentAggregate]:
        for m in self.members:
            if m.student_id == student_id:
                return m
        return None


@dataclass(frozen=True)
class DaySession:
    period_number: int
    status: AttendanceStatus
    subject: Optional[str] = None
    teacher_id: Optional[str] = None


@dataclass(frozen=True)
class StudentDay:
    """Calendar cell for one student and date."""

    date: date
    status: AttendanceStatus
    sessions: tuple[DaySession, ...]


@dataclass(frozen=True)
class AggregationResult:
    window: DateWindow
    daily: tuple[DailyStat, ...]
    students: tuple[StudentAggregate, ...]
    classes: tuple[ClassAggregate, ...]
