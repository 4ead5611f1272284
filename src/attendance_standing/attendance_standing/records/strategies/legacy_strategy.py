from __future__ import annotations

from typing import Any, Mapping, Sequence

from ...common.validators import require_period_number
from .base import PeriodDecision, RowShapeStrategy


class LegacyRowStrategy(RowShapeStrategy):
    """attendance_records: the row already is one period of one student."""

    def expand(self, row: Mapping[str, Any]) -> Sequence[PeriodDecision]:
        header = self.read_header(row)
        period_number = require_period_number(row.get("period_number"))

        teacher = row.get("teacher_id")
        if teacher is None:
            teacher = row.get("teacher_name")

        return [
            self.decide(
                header,
                period_number=period_number,
                raw_status=row.get("status"),
                subject=row.get("subject"),
                teacher_id=teacher,
            )
        ]
