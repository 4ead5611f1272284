from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..aggregation.model import (
    ClassAggregate,
    DailyStat,
    DateWindow,
    StudentAggregate,
    StudentDay,
)
from ..aggregation.service import Aggregator
from ..common.validators import require_non_empty
from ..ranking.comparator import build_class_aggregate, class_statistics, rank_of
from ..ranking.model import ClassStatistics, StudentRank
from ..records.model import AttendanceEvent, RowRejection
from ..records.repository import AttendanceRowSource, RosterSource
from ..records.service import RecordNormalizer
from ..standing.evaluator import evaluate_student
from ..standing.model import StandingResult, StandingThresholds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StudentStanding:
    aggregate: StudentAggregate
    standing: StandingResult


@dataclass(frozen=True)
class ClassReport:
    window: DateWindow
    class_aggregate: ClassAggregate
    statistics: ClassStatistics
    daily: tuple[DailyStat, ...]
    students: tuple[StudentStanding, ...]
    rejections: tuple[RowRejection, ...]


@dataclass(frozen=True)
class StudentReport:
    """Standing over all of the student's events in the window.

    ``rank`` is scoped to one class section: its ``attendance_rate`` counts only
    periods marked in that class, so it differs from ``aggregate`` for a student
    who moved between classes.
    """

    window: DateWindow
    student_id: str
    aggregate: StudentAggregate
    standing: StandingResult
    days: tuple[StudentDay, ...]
    events: tuple[AttendanceEvent, ...]
    rank: Optional[StudentRank]
    rejections: tuple[RowRejection, ...]


class StandingReportService:
    """Use case: fetch rows, normalize, aggregate, then evaluate and rank.

    The thresholds are fixed per service instance; build another one to evaluate
    against a different policy.
    """

    def __init__(
        self,
        rows: AttendanceRowSource,
        roster: RosterSource,
        *,
        thresholds: StandingThresholds,
        normalizer: Optional[RecordNormalizer] = None,
        aggregator: Optional[Aggregator] = None,
    ):
        self._rows = rows
        self._roster = roster
        self._thresholds = thresholds
        self._normalizer = normalizer or RecordNormalizer()
        self._aggregator = aggregator or Aggregator()

    @property
    def thresholds(self) -> StandingThresholds:
        return self._thresholds

    def build_class_report(
        self,
        *,
        class_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ClassReport:
        class_id = require_non_empty(class_id, "class_id")
        window = DateWindow(start=start, end=end)

        batch = self._rows.fetch_rows(start_date=start, end_date=end, class_id=class_id)
        normalized = self._normalizer.normalize(batch)
        # rows of other classes can share a student; keep this class only
        events = [e for e in normalized.events if e.class_id == class_id]

        roster = {sid: cid for sid, cid in self._roster.get_roster(class_id).items() if cid == class_id}
        result = self._aggregator.aggregate(events, roster=roster, window=window, class_ids=[class_id])
        class_aggregate = result.classes[0]

        logger.info(
            "Built class report class=%s students=%s events=%s rejected=%s",
            class_id,
            class_aggregate.student_count,
            len(events),
            len(normalized.rejections),
        )

        return ClassReport(
            window=window,
            class_aggregate=class_aggregate,
            statistics=class_statistics(class_aggregate, self._thresholds),
            daily=result.daily,
            students=tuple(
                StudentStanding(aggregate=m, standing=evaluate_student(m, self._thresholds))
                for m in class_aggregate.members
            ),
            rejections=normalized.rejections,
        )

    def build_student_report(
        self,
        *,
        student_id: str,
        start: Optional[date] = None,
        end: Optional[date] = None,
        class_id: Optional[str] = None,
    ) -> StudentReport:
        student_id = require_non_empty(student_id, "student_id")
        window = DateWindow(start=start, end=end)

        batch = self._rows.fetch_rows(start_date=start, end_date=end, student_id=student_id)
        normalized = self._normalizer.normalize(batch)
        events = self._aggregator.filter_window(
            [e for e in normalized.events if e.student_id == student_id], start, end
        )

        aggregate = self._aggregator.student_aggregate(events, student_id)
        rank = self._rank_in_class(student_id, class_id or self._roster.get_class_id(student_id), start, end)

        logger.info("Built student report student=%s events=%s", student_id, len(events))

        return StudentReport(
            window=window,
            student_id=student_id,
            aggregate=aggregate,
            standing=evaluate_student(aggregate, self._thresholds),
            days=self._aggregator.student_days(events, student_id),
            events=tuple(events),
            rank=rank,
            rejections=normalized.rejections,
        )

    def _rank_in_class(
        self,
        student_id: str,
        class_id: Optional[str],
        start: Optional[date],
        end: Optional[date],
    ) -> Optional[StudentRank]:
        """Rank among the class roster, computed from that class's events only."""

        if not class_id:
            return None

        roster = self._roster.get_roster(class_id)
        if student_id not in roster:
            # unresolved ids stay opaque; no rank rather than a failure
            return None

        batch = self._rows.fetch_rows(start_date=start, end_date=end, class_id=class_id)
        events = self._aggregator.filter_window(
            [e for e in self._normalizer.normalize(batch).events if e.class_id == class_id], start, end
        )
        members = self._aggregator.student_aggregates(events, roster.keys())
        members = [m for m in members if m.student_id in roster]
        return rank_of(build_class_aggregate(class_id, members), student_id)
