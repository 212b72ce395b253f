# validation.py
# Purpose: Whitelist and range-check raw bond calculation payloads before they reach the engine

from __future__ import annotations

import math
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .config import PERIOD_EPSILON
from .models import BondInput, CouponFrequency, FieldError

REQUIRED_FIELDS: Tuple[str, ...] = (
    "faceValue",
    "couponRate",
    "marketPrice",
    "yearsToMaturity",
    "couponFrequency",
)

_FREQUENCY_VALUES = [f.value for f in CouponFrequency]


class ValidationError(ValueError):
    """Raised by :func:`parse_bond_input` with every field-level violation attached."""

    def __init__(self, errors: List[FieldError]):
        self.errors = errors
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))


def _to_number(value: Any) -> Optional[float]:
    # bool is an int subclass; a JSON true/false is not a number here
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    return number if math.isfinite(number) else None


def validate_bond_payload(
    payload: Any, allowed_extra: Iterable[str] = ()
) -> Tuple[Optional[BondInput], List[FieldError]]:
    """Check a decoded JSON body and build a BondInput from it.

    All violations are collected rather than stopping at the first one.
    Fields outside ``REQUIRED_FIELDS`` and ``allowed_extra`` are rejected.

    Returns:
        ``(BondInput, [])`` when the payload is clean, otherwise ``(None, errors)``.
    """
    if not isinstance(payload, dict):
        return None, [FieldError("body", "Request body must be a JSON object")]

    errors: List[FieldError] = []
    whitelist = set(REQUIRED_FIELDS) | set(allowed_extra)
    for key in payload:
        if key not in whitelist:
            errors.append(FieldError(str(key), f"property {key} should not exist"))

    numbers: Dict[str, Optional[float]] = {}
    for name in ("faceValue", "couponRate", "marketPrice", "yearsToMaturity"):
        raw = payload.get(name)
        if raw is None:
            errors.append(FieldError(name, f"{name} is required"))
            numbers[name] = None
            continue
        number = _to_number(raw)
        if number is None:
            errors.append(FieldError(name, f"{name} must be a number"))
        numbers[name] = number

    face_value = numbers["faceValue"]
    if face_value is not None and face_value <= 0:
        errors.append(FieldError("faceValue", "Face value must be positive"))

    coupon_rate = numbers["couponRate"]
    if coupon_rate is not None:
        if coupon_rate < 0:
            errors.append(FieldError("couponRate", "Coupon rate cannot be negative"))
        elif coupon_rate > 100:
            errors.append(FieldError("couponRate", "Coupon rate cannot exceed 100%"))

    market_price = numbers["marketPrice"]
    if market_price is not None and market_price <= 0:
        errors.append(FieldError("marketPrice", "Market price must be positive"))

    years = numbers["yearsToMaturity"]
    years_ok = False
    if years is not None:
        if years <= 0:
            errors.append(FieldError("yearsToMaturity", "Years to maturity must be positive"))
        elif years > 100:
            errors.append(FieldError("yearsToMaturity", "Years to maturity cannot exceed 100"))
        else:
            years_ok = True

    frequency: Optional[CouponFrequency] = None
    raw_frequency = payload.get("couponFrequency")
    if raw_frequency is None:
        errors.append(FieldError("couponFrequency", "Coupon frequency is required"))
    else:
        try:
            frequency = CouponFrequency(raw_frequency)
        except ValueError:
            errors.append(
                FieldError(
                    "couponFrequency",
                    'Coupon frequency must be either "annual" or "semi-annual"',
                )
            )

    if years_ok and frequency is not None:
        ppy = 1 if frequency == CouponFrequency.ANNUAL else 2
        periods = years * ppy
        if abs(periods - round(periods)) >= PERIOD_EPSILON:
            errors.append(
                FieldError(
                    "yearsToMaturity",
                    f"Years to maturity must give a whole number of {frequency.value} coupon periods",
                )
            )

    if errors:
        return None, errors

    return (
        BondInput(
            face_value=face_value,
            coupon_rate=coupon_rate,
            market_price=market_price,
            years_to_maturity=years,
            coupon_frequency=frequency,
        ),
        [],
    )


def parse_bond_input(payload: Any, allowed_extra: Iterable[str] = ()) -> BondInput:
    """Like :func:`validate_bond_payload` but raises :class:`ValidationError` on failure."""
    bond, errors = validate_bond_payload(payload, allowed_extra)
    if errors:
        raise ValidationError(errors)
    return bond


def errors_to_dicts(errors: Iterable[FieldError]) -> List[Dict[str, str]]:
    return [{"field": e.field, "message": e.message} for e in errors]
