from __future__ import annotations

from typing import Optional

from ..core.constants import RATE_DECIMALS


def round_rate(rate: Optional[float]) -> Optional[float]:
    """Round a percentage for display.

    Only the presentation layer calls this; the engine compares full-precision
    rates against thresholds.
    """

    if rate is None:
        return None
    return round(float(rate), RATE_DECIMALS)
