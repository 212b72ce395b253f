# normalizer.py
# Purpose: Derive payments-per-year and the total coupon period count from bond inputs

from __future__ import annotations

import logging
import math

from .config import PERIOD_EPSILON
from .models import CouponFrequency

logger = logging.getLogger(__name__)


def payments_per_year(frequency: CouponFrequency) -> int:
    return 1 if CouponFrequency(frequency) == CouponFrequency.ANNUAL else 2


def total_periods(years_to_maturity: float, ppy: int) -> int:
    """Number of coupon periods to maturity.

    A product within ``PERIOD_EPSILON`` of a whole number is snapped to it.
    Anything else is floored (never below one period).
    """
    raw = years_to_maturity * ppy
    nearest = round(raw)
    if abs(raw - nearest) < PERIOD_EPSILON:
        return max(1, int(nearest))

    floored = max(1, math.floor(raw))
    logger.warning(
        f"Fractional period count {raw:.6f} ({years_to_maturity} years x {ppy}/yr); using {floored}"
    )
    return floored
