from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ...common.datetime_utils import coerce_date, coerce_datetime
from ...common.validators import optional_text, require_non_empty
from ...core.enums import AttendanceStatus
from ...core.exceptions import ValidationError
from ..model import AttendanceEvent

_MARKED_STATUSES = {s.value: s for s in AttendanceStatus if s.is_marked}


@dataclass(frozen=True)
class PeriodDecision:
    """Outcome for one period slot of a raw row.

    Exactly one of ``event``/``error`` is set, or neither when the slot is unmarked.
    """

    period_number: Optional[int]
    event: Optional[AttendanceEvent] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class RowHeader:
    student_id: str
    class_id: str
    date: date
    marked_by: Optional[str]
    marked_at: Optional[datetime]


class RowShapeStrategy(ABC):
    """Strategy Pattern: encapsulate how one storage layout maps to canonical events."""

    @abstractmethod
    def expand(self, row: Mapping[str, Any]) -> Sequence[PeriodDecision]:
        """Turn one raw row into period decisions.

        Raises ValidationError when the row as a whole is unusable.
        """

        raise NotImplementedError

    @staticmethod
    def read_header(row: Mapping[str, Any]) -> RowHeader:
        student_id = require_non_empty(row.get("student_id"), "student_id")
        class_id = require_non_empty(row.get("class_id"), "class_id")

        raw_date = row.get("date")
        if raw_date is None or raw_date == "":
            raise ValidationError("date is required")
        try:
            day = coerce_date(raw_date)
        except (TypeError, ValueError):
            raise ValidationError(f"date is not a calendar date: {raw_date!r}") from None

        try:
            marked_at = coerce_datetime(row.get("marked_at"))
        except (TypeError, ValueError):
            raise ValidationError(f"marked_at is not a timestamp: {row.get('marked_at')!r}") from None

        return RowHeader(
            student_id=student_id,
            class_id=class_id,
            date=day,
            marked_by=optional_text(row.get("marked_by")),
            marked_at=marked_at,
        )

    @staticmethod
    def decide(
        header: RowHeader,
        *,
        period_number: int,
        raw_status: Any,
        subject: Any = None,
        teacher_id: Any = None,
    ) -> PeriodDecision:
        text = optional_text(raw_status)
        if text is None:
            return PeriodDecision(period_number=period_number)

        code = text.upper()
        if code == AttendanceStatus.NOT_MARKED.value:
            return PeriodDecision(period_number=period_number)

        status = _MARKED_STATUSES.get(code)
        if status is None:
            return PeriodDecision(period_number=period_number, error=f"unrecognized status {text!r}")

        return PeriodDecision(
            period_number=period_number,
            event=AttendanceEvent(
                student_id=header.student_id,
                class_id=header.class_id,
                date=header.date,
                period_number=period_number,
                status=status,
                subject=optional_text(subject),
                teacher_id=optional_text(teacher_id),
                marked_at=header.marked_at,
                marked_by=header.marked_by,
            ),
        )
