from __future__ import annotations

import pytest

from src.attendance_standing.attendance_standing.core.enums import RecordShape
from src.attendance_standing.attendance_standing.records.model import RowBatch
from src.attendance_standing.attendance_standing.reports.service import StandingReportService
from src.attendance_standing.attendance_standing.standing.model import StandingThresholds


class FakeRowRepo:
    def __init__(self, rows, shape=RecordShape.PERIOD_COLUMNS):
        self._rows = rows
        self._shape = shape
        self.calls = []

    def fetch_rows(self, *, start_date=None, end_date=None, class_id=None, student_id=None):
        self.calls.append(
            {"start_date": start_date, "end_date": end_date, "class_id": class_id, "student_id": student_id}
        )
        rows = [
            r
            for r in self._rows
            if (class_id is None or r["class_id"] == class_id)
            and (student_id is None or r["student_id"] == student_id)
        ]
        return RowBatch(shape=self._shape, rows=rows)


class FakeRosterRepo:
    def __init__(self, roster):
        self._roster = roster

    def get_roster(self, class_id):
        return {sid: cid for sid, cid in self._roster.items() if cid == class_id}

    def get_class_id(self, student_id):
        return self._roster.get(student_id)


def day_row(student_id, day, statuses, class_id="C1"):
    row = {"student_id": student_id, "class_id": class_id, "date": day}
    for p, status in enumerate(statuses, start=1):
        row[f"period_{p}_status"] = status
    return row


# S1: 11 of 12 present. S2: 4 of 8 present plus one bad status. S3: enrolled, never marked.
SAMPLE_ROWS = [
    day_row("S1", "2024-11-19", ["PRESENT"] * 6),
    day_row("S1", "2024-11-20", ["PRESENT"] * 5 + ["ABSENT"]),
    day_row("S2", "2024-11-19", ["PRESENT", "ABSENT", "ABSENT", "PRESENT", "NOT_MARKED", "NOT_MARKED"]),
    day_row("S2", "2024-11-20", ["ABSENT", "ABSENT", "PRESENT", "PRESENT", "BOGUS", "NOT_MARKED"]),
    day_row("S9", "2024-11-19", ["PRESENT"] * 6, class_id="C2"),
]
SAMPLE_ROSTER = {"S1": "C1", "S2": "C1", "S3": "C1", "S9": "C2"}


@pytest.fixture
def make_report_service():
    def _make(rows=SAMPLE_ROWS, roster=SAMPLE_ROSTER, thresholds=None):
        return StandingReportService(
            FakeRowRepo(rows),
            FakeRosterRepo(roster),
            thresholds=thresholds or StandingThresholds(),
        )

    return _make


@pytest.fixture
def row_repo_factory():
    return FakeRowRepo


@pytest.fixture
def roster_repo_factory():
    return FakeRosterRepo


@pytest.fixture
def day_row_factory():
    return day_row
