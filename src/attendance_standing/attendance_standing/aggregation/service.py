from __future__ import annotations

from collections import Counter
from datetime import date
from typing import Iterable, Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..ranking.comparator import build_class_aggregate
from ..records.model import AttendanceEvent
from .model import (
    AggregationResult,
    ClassAggregate,
    DailyStat,
    DateWindow,
    DaySession,
    StudentAggregate,
    StudentDay,
)

# Worst status wins on the calendar view
_DAY_PRECEDENCE = (
    AttendanceStatus.ABSENT,
    AttendanceStatus.SICK,
    AttendanceStatus.LEAVE,
    AttendanceStatus.PRESENT,
)


def _event_order(event: AttendanceEvent):
    return (event.date, event.period_number)


def percentage(part: int, whole: int) -> float:
    if whole <= 0:
        return 0.0
    # multiply first: 57 of 100 must come out as exactly 57.0, not 56.99...
    return part * 100 / whole


class Aggregator:
    """Fold canonical events into daily, per-student and per-class statistics.

    Stateless: the same events always give equal results.
    """

    def filter_window(
        self,
        events: Iterable[AttendanceEvent],
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[AttendanceEvent]:
        window = DateWindow(start=start, end=end)
        return [e for e in events if window.contains(e.date)]

    def daily_stats(
        self,
        events: Iterable[AttendanceEvent],
        member_ids: Optional[Iterable[str]] = None,
    ) -> tuple[DailyStat, ...]:
        """One DailyStat per date that has events.

        ``member_ids`` is the roster: members with no marked period on a date
        are counted in ``not_marked`` for that date.
        """

        # date -> student_id -> status of record (None while unmarked)
        by_date: dict[date, dict[str, Optional[AttendanceStatus]]] = {}

        for e in sorted(events, key=_event_order):
            day = by_date.setdefault(e.date, {})
            if day.get(e.student_id) is None:
                day[e.student_id] = e.status if e.status.is_marked else None

        members = tuple(member_ids or ())
        for day in by_date.values():
            for student_id in members:
                day.setdefault(student_id, None)

        out: list[DailyStat] = []
        for day_date in sorted(by_date):
            statuses = Counter(by_date[day_date].values())
            total = sum(n for s, n in statuses.items() if s is not None)
            present = statuses[AttendanceStatus.PRESENT]
            out.append(
                DailyStat(
                    date=day_date,
                    total=total,
                    present=present,
                    absent=statuses[AttendanceStatus.ABSENT],
                    sick=statuses[AttendanceStatus.SICK],
                    leave=statuses[AttendanceStatus.LEAVE],
                    not_marked=statuses[None],
                    rate=percentage(present, total),
                )
            )
        return tuple(out)

    def student_aggregates(
        self,
        events: Iterable[AttendanceEvent],
        student_ids: Optional[Iterable[str]] = None,
    ) -> tuple[StudentAggregate, ...]:
        counts: dict[str, Counter] = {sid: Counter() for sid in (student_ids or ())}

        for e in events:
            c = counts.setdefault(e.student_id, Counter())
            if e.status.is_marked:
                c[e.status] += 1

        return tuple(self._to_aggregate(sid, counts[sid]) for sid in sorted(counts))

    def student_aggregate(self, events: Iterable[AttendanceEvent], student_id: str) -> StudentAggregate:
        mine = [e for e in events if e.student_id == student_id]
        return self.student_aggregates(mine, [student_id])[0]

    def class_aggregates(
        self,
        aggregates: Iterable[StudentAggregate],
        roster: Mapping[str, str],
        class_ids: Optional[Iterable[str]] = None,
    ) -> tuple[ClassAggregate, ...]:
        by_student = {a.student_id: a for a in aggregates}
        members: dict[str, list[StudentAggregate]] = {cid: [] for cid in (class_ids or ())}

        for student_id, class_id in roster.items():
            aggregate = by_student.get(student_id) or StudentAggregate(student_id=student_id)
            members.setdefault(class_id, []).append(aggregate)

        return tuple(build_class_aggregate(cid, members[cid]) for cid in sorted(members))

    def aggregate(
        self,
        events: Sequence[AttendanceEvent],
        *,
        roster: Optional[Mapping[str, str]] = None,
        window: Optional[DateWindow] = None,
        class_ids: Optional[Iterable[str]] = None,
    ) -> AggregationResult:
        window = window or DateWindow()
        roster = roster or {}
        in_window = self.filter_window(events, window.start, window.end)

        students = self.student_aggregates(in_window, roster.keys())
        return AggregationResult(
            window=window,
            daily=self.daily_stats(in_window, roster.keys()),
            students=students,
            classes=self.class_aggregates(students, roster, class_ids),
        )

    def student_days(self, events: Iterable[AttendanceEvent], student_id: str) -> tuple[StudentDay, ...]:
        sessions_by_date: dict[date, list[DaySession]] = {}

        for e in sorted(events, key=_event_order):
            if e.student_id != student_id or not e.status.is_marked:
                continue
            sessions_by_date.setdefault(e.date, []).append(
                DaySession(period_number=e.period_number, status=e.status, subject=e.subject, teacher_id=e.teacher_id)
            )

        out: list[StudentDay] = []
        for day_date in sorted(sessions_by_date):
            sessions = tuple(sessions_by_date[day_date])
            seen = {s.status for s in sessions}
            status = next(s for s in _DAY_PRECEDENCE if s in seen)
            out.append(StudentDay(date=day_date, status=status, sessions=sessions))
        return tuple(out)

    @staticmethod
    def _to_aggregate(student_id: str, counts: Counter) -> StudentAggregate:
        total = sum(counts.values())
        present = counts[AttendanceStatus.PRESENT]
        return StudentAggregate(
            student_id=student_id,
            total_marked_periods=total,
            present_count=present,
            absent_count=counts[AttendanceStatus.ABSENT],
            sick_count=counts[AttendanceStatus.SICK],
            leave_count=counts[AttendanceStatus.LEAVE],
            attendance_rate=percentage(present, total),
        )
