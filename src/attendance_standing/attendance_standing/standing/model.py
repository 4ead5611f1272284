from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.validators import is_real_number
from ..core.enums import StandingStatus
from ..core.exceptions import ConfigurationError


@dataclass(frozen=True)
class StandingThresholds:
    """Percent thresholds for academic standing.

    Defaults are the school's published policy: below 75% is mahroom, below 85%
    needs tasdiq, and anything under 90% (85 + 5) shows an advisory warning.
    """

    mahroom_threshold: float = 75.0
    tasdiq_threshold: float = 85.0
    warning_margin: float = 5.0

    def __post_init__(self):
        for name in ("mahroom_threshold", "tasdiq_threshold", "warning_margin"):
            if not is_real_number(getattr(self, name)):
                raise ConfigurationError(f"{name} must be a number, got {getattr(self, name)!r}")

        if not 0 <= self.mahroom_threshold <= 100 or not 0 <= self.tasdiq_threshold <= 100:
            raise ConfigurationError("Thresholds must be percentages between 0 and 100")
        if self.mahroom_threshold >= self.tasdiq_threshold:
            raise ConfigurationError(
                f"mahroom_threshold ({self.mahroom_threshold}) must be lower than "
                f"tasdiq_threshold ({self.tasdiq_threshold})"
            )
        if self.warning_margin < 0:
            raise ConfigurationError("warning_margin cannot be negative")

    @property
    def warning_boundary(self) -> float:
        return self.tasdiq_threshold + self.warning_margin


@dataclass(frozen=True)
class StandingResult:
    status: StandingStatus
    attendance_rate: float
    # advisory only, set on GOOD results just above the tasdiq threshold
    warning: bool = False
    remaining_absences: Optional[int] = None
    remaining_absences_before_tasdiq: Optional[int] = None
    remaining_absences_before_mahroom: Optional[int] = None

    @property
    def display_status(self) -> StandingStatus:
        if self.status == StandingStatus.GOOD and self.warning:
            return StandingStatus.WARNING
        return self.status

    @property
    def is_exam_eligible(self) -> bool:
        return self.status != StandingStatus.MAHROOM

    @property
    def requires_action(self) -> bool:
        return self.status in (StandingStatus.MAHROOM, StandingStatus.TASDIQ_REQUIRED)
