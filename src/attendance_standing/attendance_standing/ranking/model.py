from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class StudentRank:
    """Where one student stands inside their class.

    For an empty class nothing can be ranked: rank, rates and percentile are None.
    """

    student_id: str
    class_id: str
    class_size: int
    rank: Optional[int] = None
    attendance_rate: Optional[float] = None
    class_average_rate: Optional[float] = None
    percentile: Optional[float] = None

    @property
    def applicable(self) -> bool:
        return self.rank is not None

    @property
    def above_average(self) -> Optional[bool]:
        if not self.applicable:
            return None
        return self.attendance_rate > self.class_average_rate


@dataclass(frozen=True)
class ClassStatistics:
    class_id: str
    total_students: int
    average_rate: Optional[float] = None
    median_rate: Optional[float] = None
    highest_rate: Optional[float] = None
    lowest_rate: Optional[float] = None
    students_at_risk: int = 0
    students_requiring_tasdiq: int = 0
    students_with_warning: int = 0
    perfect_attendance: int = 0


@dataclass(frozen=True)
class OverallStatistics:
    total_classes: int
    total_students: int
    total_at_risk: int
    total_with_warning: int
    overall_average_rate: Optional[float]
    classes_with_at_risk_students: int
