"""Academic standing classification.

Everything here is a pure function of the rate and the thresholds passed in;
nothing is remembered between calls, so a student who recovers above a
threshold is classified by the new rate on the next evaluation.
"""

from __future__ import annotations

import math
from dataclasses import replace

from ..aggregation.model import StudentAggregate
from ..common.validators import is_real_number
from ..core.enums import StandingStatus
from ..core.exceptions import InvalidRateError
from .model import StandingResult, StandingThresholds


def _require_rate(attendance_rate) -> float:
    if not is_real_number(attendance_rate):
        raise InvalidRateError(f"Attendance rate must be a number, got {attendance_rate!r}")
    if not 0 <= attendance_rate <= 100:
        raise InvalidRateError(f"Attendance rate must be within [0, 100], got {attendance_rate}")
    return float(attendance_rate)


def evaluate(attendance_rate: float, thresholds: StandingThresholds) -> StandingResult:
    rate = _require_rate(attendance_rate)

    if rate < thresholds.mahroom_threshold:
        return StandingResult(status=StandingStatus.MAHROOM, attendance_rate=rate)
    if rate < thresholds.tasdiq_threshold:
        return StandingResult(status=StandingStatus.TASDIQ_REQUIRED, attendance_rate=rate)
    return StandingResult(
        status=StandingStatus.GOOD,
        attendance_rate=rate,
        warning=rate < thresholds.warning_boundary,
    )


def evaluate_rate(
    attendance_rate: float,
    mahroom_threshold: float,
    tasdiq_threshold: float,
    warning_margin: float,
) -> StandingResult:
    """Same as evaluate() with the thresholds passed loose.

    Threshold validation happens before the rate is looked at.
    """

    thresholds = StandingThresholds(
        mahroom_threshold=mahroom_threshold,
        tasdiq_threshold=tasdiq_threshold,
        warning_margin=warning_margin,
    )
    return evaluate(attendance_rate, thresholds)


def max_absences(total_marked_periods: int, threshold: float) -> int:
    """Absent periods a student may accumulate before falling under ``threshold``."""

    if total_marked_periods <= 0:
        return 0
    return math.floor(total_marked_periods * (100 - threshold) / 100)


def evaluate_student(aggregate: StudentAggregate, thresholds: StandingThresholds) -> StandingResult:
    result = evaluate(aggregate.attendance_rate, thresholds)

    total = aggregate.total_marked_periods
    before_mahroom = max(0, max_absences(total, thresholds.mahroom_threshold) - aggregate.absent_count)
    before_tasdiq = max(0, max_absences(total, thresholds.tasdiq_threshold) - aggregate.absent_count)

    if result.status == StandingStatus.MAHROOM:
        remaining = 0
    elif result.status == StandingStatus.TASDIQ_REQUIRED:
        remaining = before_mahroom
    else:
        remaining = before_tasdiq

    return replace(
        result,
        remaining_absences=remaining,
        remaining_absences_before_tasdiq=before_tasdiq,
        remaining_absences_before_mahroom=before_mahroom,
    )
