# models.py
# Purpose: Typed domain models for bond inputs, cashflow rows, solver output and results

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import List, Optional


class CouponFrequency(str, Enum):
    ANNUAL = "annual"
    SEMI_ANNUAL = "semi-annual"


class PremiumDiscount(str, Enum):
    PREMIUM = "premium"
    DISCOUNT = "discount"
    PAR = "par"


@dataclass(frozen=True)
class BondInput:
    face_value: float
    coupon_rate: float
    market_price: float
    years_to_maturity: float
    coupon_frequency: CouponFrequency


@dataclass(frozen=True)
class CashFlow:
    period: int
    payment_date: date
    coupon_payment: float
    cumulative_interest: float
    remaining_principal: float


@dataclass(frozen=True)
class YieldSolution:
    """Outcome of a YTM solve.

    ``yield_pct`` is the annualized yield in percent, or None when no method
    could find a root.
    """

    yield_pct: Optional[float]
    converged: bool
    iterations: int
    method: str
    residual: Optional[float] = None


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class BondCalculationResult:
    current_yield: float
    yield_to_maturity: Optional[float]
    total_interest: float
    premium_discount: PremiumDiscount
    discount_amount: float
    cash_flows: List[CashFlow] = field(default_factory=list)
    solver: Optional[YieldSolution] = None
