from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus, RecordShape


@dataclass(frozen=True)
class AttendanceEvent:
    """Canonical attendance unit: one student, one class, one period of one day.

    (student_id, class_id, date, period_number) is unique within a normalized stream.
    """

    student_id: str
    class_id: str
    date: date
    period_number: int
    status: AttendanceStatus
    subject: Optional[str] = None
    teacher_id: Optional[str] = None
    marked_at: Optional[datetime] = None
    marked_by: Optional[str] = None

    @property
    def key(self) -> tuple[str, str, date, int]:
        return (self.student_id, self.class_id, self.date, self.period_number)


@dataclass(frozen=True)
class RowBatch:
    """Homogeneous batch of raw storage rows, tagged by the storage collaborator."""

    shape: RecordShape
    rows: Sequence[Mapping[str, Any]] = ()


@dataclass(frozen=True)
class RowRejection:
    """A row (or a single period of a row) the normalizer refused to emit."""

    row_index: int
    reason: str
    period_number: Optional[int] = None
    row: Optional[Mapping[str, Any]] = None


@dataclass(frozen=True)
class NormalizationResult:
    events: tuple[AttendanceEvent, ...] = ()
    rejections: tuple[RowRejection, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.rejections
