from __future__ import annotations

import random

import pytest

from src.attendance_standing.attendance_standing.aggregation.model import StudentAggregate
from src.attendance_standing.attendance_standing.core.exceptions import ValidationError
from src.attendance_standing.attendance_standing.ranking.comparator import (
    build_class_aggregate,
    class_average,
    class_statistics,
    overall_statistics,
    rank_of,
    rank_students,
)
from src.attendance_standing.attendance_standing.standing.model import StandingThresholds


def agg(student_id, rate, total=20):
    return StudentAggregate(
        student_id=student_id,
        total_marked_periods=total,
        present_count=round(total * rate / 100),
        attendance_rate=rate,
    )


def test_ranks_are_dense_and_ordered_by_rate():
    ranked = rank_students([agg("S1", 80.0), agg("S2", 95.0), agg("S3", 60.0)])

    assert [(r.rank, r.student_id) for r in ranked] == [(1, "S2"), (2, "S1"), (3, "S3")]


def test_ties_break_by_student_id_regardless_of_input_order():
    students = [agg("S4", 90.0), agg("S2", 90.0), agg("S3", 70.0), agg("S1", 90.0)]
    expected = [r.student_id for r in rank_students(students)]

    rng = random.Random(7)
    for _ in range(20):
        shuffled = students[:]
        rng.shuffle(shuffled)
        assert [r.student_id for r in rank_students(shuffled)] == expected

    assert expected == ["S1", "S2", "S4", "S3"]


def test_class_average_is_unweighted_mean():
    members = [agg("S1", 100.0, total=2), agg("S2", 50.0, total=200)]

    assert class_average(members) == 75.0
    assert class_average([]) is None


def test_rank_of_reports_percentile_and_average():
    cls = build_class_aggregate("C1", [agg("S1", 80.0), agg("S2", 95.0), agg("S3", 60.0)])

    top = rank_of(cls, "S2")
    middle = rank_of(cls, "S1")
    bottom = rank_of(cls, "S3")

    assert (top.rank, top.percentile) == (1, 100.0)
    assert (middle.rank, middle.percentile) == (2, 50.0)
    assert (bottom.rank, bottom.percentile) == (3, 0.0)
    assert top.class_size == 3
    assert top.class_average_rate == pytest.approx(235 / 3)
    assert top.above_average
    assert not bottom.above_average


def test_single_member_class():
    cls = build_class_aggregate("C1", [agg("S1", 42.0)])

    rank = rank_of(cls, "S1")

    assert rank.rank == 1
    assert rank.class_size == 1
    assert rank.percentile == 100.0
    assert cls.class_average_rate == 42.0


def test_empty_class_is_not_applicable():
    cls = build_class_aggregate("C1", [])

    rank = rank_of(cls, "S1")

    assert cls.student_count == 0
    assert cls.class_average_rate is None
    assert cls.ranked_students == ()
    assert not rank.applicable
    assert rank.rank is None
    assert rank.percentile is None
    assert rank.above_average is None


def test_rank_of_non_member_is_rejected():
    cls = build_class_aggregate("C1", [agg("S1", 80.0)])

    with pytest.raises(ValidationError):
        rank_of(cls, "S9")


def test_class_statistics_summarize_standing():
    thresholds = StandingThresholds()
    cls = build_class_aggregate(
        "C1",
        [agg("S1", 100.0), agg("S2", 88.0), agg("S3", 80.0), agg("S4", 70.0), agg("S5", 0.0, total=0)],
    )

    stats = class_statistics(cls, thresholds)

    assert stats.total_students == 5
    assert stats.average_rate == pytest.approx(338 / 5)
    assert stats.median_rate == 80.0
    assert stats.highest_rate == 100.0
    assert stats.lowest_rate == 0.0
    assert stats.students_at_risk == 2
    assert stats.students_requiring_tasdiq == 1
    assert stats.students_with_warning == 4
    assert stats.perfect_attendance == 1


def test_class_statistics_of_empty_class():
    stats = class_statistics(build_class_aggregate("C1", []), StandingThresholds())

    assert stats.total_students == 0
    assert stats.average_rate is None
    assert stats.median_rate is None


def test_overall_statistics_roll_up_classes():
    thresholds = StandingThresholds()
    a = class_statistics(build_class_aggregate("C1", [agg("S1", 100.0), agg("S2", 60.0)]), thresholds)
    b = class_statistics(build_class_aggregate("C2", [agg("S3", 95.0)]), thresholds)
    empty = class_statistics(build_class_aggregate("C3", []), thresholds)

    overall = overall_statistics([a, b, empty])

    assert overall.total_classes == 3
    assert overall.total_students == 3
    assert overall.total_at_risk == 1
    assert overall.classes_with_at_risk_students == 1
    assert overall.overall_average_rate == pytest.approx((80.0 + 95.0) / 2)
    assert overall_statistics([]) is None


def test_good_student_ranks_above_class_average():
    cls = build_class_aggregate("C1", [agg("S1", 95.0), agg("S2", 69.0)])

    rank = rank_of(cls, "S1")

    assert rank.class_average_rate == 82.0
    assert rank.above_average
    assert rank.rank == 1
