from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.constants import PERIODS_PER_DAY
from ..core.enums import RecordShape
from ..database.connection import DatabaseConnection, fetchall, fetchone, read_cursor
from .model import RowBatch
from .repository import AttendanceRowSource, RosterSource

_LEGACY_COLUMNS = [
    "student_id",
    "class_id",
    "date",
    "period_number",
    "status",
    "subject",
    "teacher_name",
    "marked_by",
    "marked_at",
]

_PERIOD_COLUMNS = ["student_id", "class_id", "date", "marked_by", "marked_at"] + [
    f"period_{p}_{field}" for p in range(1, PERIODS_PER_DAY + 1) for field in ("status", "teacher", "subject")
]

_TABLES = {
    RecordShape.LEGACY: ("attendance_records", _LEGACY_COLUMNS),
    RecordShape.PERIOD_COLUMNS: ("attendance_records_new", _PERIOD_COLUMNS),
}


class MySQLAttendanceRowRepository(AttendanceRowSource):
    """Reads raw rows from whichever attendance table is configured.

    Rows are returned as-is; converting them is the normalizer's job.
    """

    def __init__(self, conn_factory: DatabaseConnection, *, shape: RecordShape = RecordShape.PERIOD_COLUMNS):
        self._conn_factory = conn_factory
        self._shape = RecordShape(shape)

    def fetch_rows(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        class_id: Optional[str] = None,
        student_id: Optional[str] = None,
    ) -> RowBatch:
        table, columns = _TABLES[self._shape]
        clauses: list[str] = []
        params: list[object] = []

        if start_date is not None:
            clauses.append("date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("date <= %s")
            params.append(end_date)
        if class_id is not None:
            clauses.append("class_id = %s")
            params.append(str(class_id))
        if student_id is not None:
            clauses.append("student_id = %s")
            params.append(str(student_id))

        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""
        order = "date ASC, period_number ASC" if self._shape == RecordShape.LEGACY else "date ASC"

        with read_cursor(self._conn_factory) as cur:
            cur.execute(
                f"""
                SELECT {", ".join(columns)}
                FROM {table}
                {where}
                ORDER BY {order}, student_id ASC
                """,
                tuple(params),
            )
            return RowBatch(shape=self._shape, rows=fetchall(cur))


class MySQLRosterRepository(RosterSource):
    """Students belong to a class through their class section ("<name> - <session>")."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_roster(self, class_id: str) -> dict[str, str]:
        with read_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT s.id AS student_id, c.id AS class_id
                FROM students s
                JOIN classes c ON s.class_section = CONCAT(c.name, ' - ', c.session)
                WHERE c.id = %s
                ORDER BY s.id ASC
                """,
                (str(class_id),),
            )
            return {str(r["student_id"]): str(r["class_id"]) for r in fetchall(cur)}

    def get_class_id(self, student_id: str) -> Optional[str]:
        with read_cursor(self._conn_factory) as cur:
            cur.execute(
                """
                SELECT c.id AS class_id
                FROM students s
                JOIN classes c ON s.class_section = CONCAT(c.name, ' - ', c.session)
                WHERE s.id = %s
                LIMIT 1
                """,
                (str(student_id),),
            )
            r = fetchone(cur)
            return str(r["class_id"]) if r else None
