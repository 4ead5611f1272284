from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import RowBatch


class AttendanceRowSource(Protocol):
    """Storage collaborator: picks the table (shape) and hands back tagged rows."""

    def fetch_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        class_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> RowBatch:
        raise NotImplementedError


class RosterSource(Protocol):
    def get_roster(self, class_id: str) -> dict[str, str]:
        """Map student_id -> class_id for every student enrolled in the class."""

        raise NotImplementedError

    def get_class_id(self, student_id: str) -> Optional[str]:
        raise NotImplementedError
