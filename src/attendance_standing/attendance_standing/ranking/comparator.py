from __future__ import annotations

import statistics
from typing import Iterable, Optional, Sequence

from ..aggregation.model import ClassAggregate, RankedStudent, StudentAggregate
from ..core.enums import StandingStatus
from ..core.exceptions import ValidationError
from ..standing.evaluator import evaluate
from ..standing.model import StandingThresholds
from .model import ClassStatistics, OverallStatistics, StudentRank


def _rank_key(a: StudentAggregate):
    return (-a.attendance_rate, a.student_id)


def class_average(aggregates: Sequence[StudentAggregate]) -> Optional[float]:
    """Mean of member rates; every student weighs the same whatever their period count."""

    if not aggregates:
        return None
    return sum(a.attendance_rate for a in aggregates) / len(aggregates)


def rank_students(aggregates: Iterable[StudentAggregate]) -> tuple[RankedStudent, ...]:
    ordered = sorted(aggregates, key=_rank_key)
    return tuple(
        RankedStudent(rank=i, student_id=a.student_id, attendance_rate=a.attendance_rate)
        for i, a in enumerate(ordered, start=1)
    )


def build_class_aggregate(class_id: str, aggregates: Iterable[StudentAggregate]) -> ClassAggregate:
    members = tuple(sorted(aggregates, key=lambda a: a.student_id))
    return ClassAggregate(
        class_id=class_id,
        student_count=len(members),
        class_average_rate=class_average(members),
        ranked_students=rank_students(members),
        members=members,
    )


def rank_of(class_aggregate: ClassAggregate, student_id: str) -> StudentRank:
    if not class_aggregate.is_applicable:
        return StudentRank(student_id=student_id, class_id=class_aggregate.class_id, class_size=0)

    ranked = class_aggregate.ranked_students
    for entry in ranked:
        if entry.student_id == student_id:
            break
    else:
        raise ValidationError(f"Student {student_id} is not a member of class {class_aggregate.class_id}")

    size = len(ranked)
    percentile = 100.0 if size == 1 else (size - entry.rank) / (size - 1) * 100

    return StudentRank(
        student_id=student_id,
        class_id=class_aggregate.class_id,
        class_size=size,
        rank=entry.rank,
        attendance_rate=entry.attendance_rate,
        class_average_rate=class_aggregate.class_average_rate,
        percentile=percentile,
    )


def class_statistics(class_aggregate: ClassAggregate, thresholds: StandingThresholds) -> ClassStatistics:
    if not class_aggregate.is_applicable:
        return ClassStatistics(class_id=class_aggregate.class_id, total_students=0)

    rates = [m.attendance_rate for m in class_aggregate.members]
    results = [evaluate(r, thresholds) for r in rates]

    return ClassStatistics(
        class_id=class_aggregate.class_id,
        total_students=class_aggregate.student_count,
        average_rate=class_aggregate.class_average_rate,
        median_rate=statistics.median(rates),
        highest_rate=max(rates),
        lowest_rate=min(rates),
        students_at_risk=sum(1 for r in results if r.status == StandingStatus.MAHROOM),
        students_requiring_tasdiq=sum(1 for r in results if r.status == StandingStatus.TASDIQ_REQUIRED),
        students_with_warning=sum(1 for r in rates if r < thresholds.warning_boundary),
        perfect_attendance=sum(
            1 for m in class_aggregate.members if m.total_marked_periods > 0 and m.attendance_rate == 100
        ),
    )


def overall_statistics(stats: Sequence[ClassStatistics]) -> Optional[OverallStatistics]:
    if not stats:
        return None

    averages = [s.average_rate for s in stats if s.average_rate is not None]
    return OverallStatistics(
        total_classes=len(stats),
        total_students=sum(s.total_students for s in stats),
        total_at_risk=sum(s.students_at_risk for s in stats),
        total_with_warning=sum(s.students_with_warning for s in stats),
        overall_average_rate=sum(averages) / len(averages) if averages else None,
        classes_with_at_risk_students=sum(1 for s in stats if s.students_at_risk > 0),
    )
