# cashflows.py
# Purpose: Project the periodic coupon schedule (dates, coupons, cumulative interest, principal)

from __future__ import annotations

import calendar
from datetime import date
from typing import List

from .analytics import round_to_two_decimals
from .config import MONTHS_PER_PERIOD
from .models import CashFlow


def add_months(dt: date, months: int) -> date:
    """Shift ``dt`` by whole months, clamping to the last day of the target month."""
    year = dt.year + (dt.month - 1 + months) // 12
    month = (dt.month - 1 + months) % 12 + 1
    last_day = calendar.monthrange(year, month)[1]
    return dt.replace(year=year, month=month, day=min(dt.day, last_day))


def generate_cash_flows(
    face_value: float,
    coupon: float,
    n_periods: int,
    ppy: int,
    valuation_date: date,
) -> List[CashFlow]:
    """Build one CashFlow per coupon period, dated from ``valuation_date``.

    The running interest total is accumulated unrounded; only the emitted rows
    are rounded to cents. Principal drops to zero on the final period.
    """
    months_per_period = MONTHS_PER_PERIOD[ppy]
    cash_flows: List[CashFlow] = []
    cumulative = 0.0

    for period in range(1, n_periods + 1):
        cumulative += coupon
        remaining = 0.0 if period == n_periods else face_value
        cash_flows.append(
            CashFlow(
                period=period,
                payment_date=add_months(valuation_date, period * months_per_period),
                coupon_payment=round_to_two_decimals(coupon),
                cumulative_interest=round_to_two_decimals(cumulative),
                remaining_principal=round_to_two_decimals(remaining),
            )
        )

    return cash_flows
