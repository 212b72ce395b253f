# analytics.py
# Purpose: Closed-form bond metrics (coupon, current yield, total interest, premium/discount)

from __future__ import annotations

import math
from typing import Tuple

from .config import PAR_TOLERANCE
from .models import PremiumDiscount


def round_to_two_decimals(value: float) -> float:
    """Round half-up to cents (``round`` would use banker's rounding)."""
    return math.floor(value * 100 + 0.5) / 100


def coupon_payment(face_value: float, coupon_rate: float, ppy: int) -> float:
    return face_value * (coupon_rate / 100.0) / ppy


def current_yield(coupon_rate: float, face_value: float, market_price: float) -> float:
    """Annual coupon income over market price, in percent. ``market_price`` must be > 0."""
    annual_coupon = (coupon_rate / 100.0) * face_value
    return annual_coupon / market_price * 100.0


def total_interest(face_value: float, coupon_rate: float, years_to_maturity: float) -> float:
    return (coupon_rate / 100.0) * face_value * years_to_maturity


def classify_premium_discount(face_value: float, market_price: float) -> Tuple[PremiumDiscount, float]:
    """Return the premium/discount/par status and the signed price difference.

    Prices within a cent of face value are par with a zero difference.
    """
    difference = market_price - face_value
    if abs(difference) < PAR_TOLERANCE:
        return PremiumDiscount.PAR, 0.0
    if difference > 0:
        return PremiumDiscount.PREMIUM, difference
    return PremiumDiscount.DISCOUNT, difference
