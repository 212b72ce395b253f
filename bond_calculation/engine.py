# engine.py
# Purpose: Orchestrate normalizer, closed-form metrics, YTM solver and schedule into one result

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Dict, Optional

from .analytics import (
    classify_premium_discount,
    coupon_payment,
    current_yield,
    round_to_two_decimals,
    total_interest,
)
from .cashflows import generate_cash_flows
from .models import BondCalculationResult, BondInput
from .normalizer import payments_per_year, total_periods
from .ytm import solve_ytm

logger = logging.getLogger(__name__)


def calculate_bond(bond: BondInput, valuation_date: Optional[date] = None) -> BondCalculationResult:
    """Compute yields, total interest, premium/discount status and the cash-flow schedule.

    Args:
        bond: Validated bond parameters.
        valuation_date: Date the payment schedule is projected from. Defaults to today.

    Returns:
        BondCalculationResult with rates and amounts rounded to cents. When the
        YTM solver cannot find a root, ``yield_to_maturity`` is None and
        ``solver.converged`` is False.
    """
    if valuation_date is None:
        valuation_date = date.today()
    elif isinstance(valuation_date, datetime):
        valuation_date = valuation_date.date()

    ppy = payments_per_year(bond.coupon_frequency)
    n_periods = total_periods(bond.years_to_maturity, ppy)
    coupon = coupon_payment(bond.face_value, bond.coupon_rate, ppy)

    cy = current_yield(bond.coupon_rate, bond.face_value, bond.market_price)
    interest = total_interest(bond.face_value, bond.coupon_rate, bond.years_to_maturity)
    status, difference = classify_premium_discount(bond.face_value, bond.market_price)
    solution = solve_ytm(bond.face_value, bond.market_price, coupon, n_periods, ppy)
    cash_flows = generate_cash_flows(bond.face_value, coupon, n_periods, ppy, valuation_date)

    if not solution.converged:
        logger.warning(
            f"YTM did not converge for face={bond.face_value} price={bond.market_price} "
            f"rate={bond.coupon_rate} years={bond.years_to_maturity}"
        )

    ytm = round_to_two_decimals(solution.yield_pct) if solution.yield_pct is not None else None

    return BondCalculationResult(
        current_yield=round_to_two_decimals(cy),
        yield_to_maturity=ytm,
        total_interest=round_to_two_decimals(interest),
        premium_discount=status,
        discount_amount=round_to_two_decimals(abs(difference)),
        cash_flows=cash_flows,
        solver=solution,
    )


def result_to_dict(result: BondCalculationResult) -> Dict[str, Any]:
    """Serialize a result to the camelCase JSON shape the front end consumes."""
    payload: Dict[str, Any] = {
        "currentYield": result.current_yield,
        "yieldToMaturity": result.yield_to_maturity,
        "totalInterest": result.total_interest,
        "premiumDiscount": result.premium_discount.value,
        "discountAmount": result.discount_amount,
        "cashFlows": [
            {
                "period": cf.period,
                "paymentDate": cf.payment_date.strftime("%Y-%m-%d"),
                "couponPayment": cf.coupon_payment,
                "cumulativeInterest": cf.cumulative_interest,
                "remainingPrincipal": cf.remaining_principal,
            }
            for cf in result.cash_flows
        ],
    }
    if result.solver is not None:
        payload["solver"] = {
            "converged": result.solver.converged,
            "iterations": result.solver.iterations,
            "method": result.solver.method,
        }
    return payload
