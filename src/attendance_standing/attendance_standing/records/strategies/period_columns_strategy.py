from __future__ import annotations

from typing import Any, Mapping, Sequence

from ...core.constants import PERIODS_PER_DAY
from .base import PeriodDecision, RowShapeStrategy


class PeriodColumnsRowStrategy(RowShapeStrategy):
    """attendance_records_new: one row per student/day, six parallel period columns.

    Missing period columns are treated as unmarked, so partially filled days are fine.
    """

    def expand(self, row: Mapping[str, Any]) -> Sequence[PeriodDecision]:
        header = self.read_header(row)
        return [
            self.decide(
                header,
                period_number=p,
                raw_status=row.get(f"period_{p}_status"),
                subject=row.get(f"period_{p}_subject"),
                teacher_id=row.get(f"period_{p}_teacher"),
            )
            for p in range(1, PERIODS_PER_DAY + 1)
        ]
