from __future__ import annotations

import math
from typing import Any, Optional

from ..core.constants import PERIODS_PER_DAY
from ..core.exceptions import ValidationError


def require_non_empty(value: Any, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required")
    return str(value).strip()


def optional_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def require_period_number(value: Any) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError("period_number is required")
    try:
        period = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"period_number is not a number: {value!r}") from None
    if period != value and str(period) != str(value).strip():
        raise ValidationError(f"period_number is not a whole number: {value!r}")
    if not 1 <= period <= PERIODS_PER_DAY:
        raise ValidationError(f"period_number must be between 1 and {PERIODS_PER_DAY}, got {period}")
    return period


def is_real_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return not math.isnan(value) and not math.isinf(value)
