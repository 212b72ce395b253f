# Purpose: End-to-end tests for bond_calculation/engine.py (pipeline assembly, rounding, serialization).

from datetime import date, datetime

import pytest

from bond_calculation.engine import calculate_bond, result_to_dict
from bond_calculation.models import BondInput, CouponFrequency, PremiumDiscount, YieldSolution
from bond_calculation.ytm import price_at_yield


class TestCalculateBond:
    def test_discount_bond_reference_case(self, discount_bond, valuation_date):
        result = calculate_bond(discount_bond, valuation_date)
        assert result.current_yield == 5.26
        assert result.yield_to_maturity > result.current_yield
        assert result.total_interest == 500.0
        assert result.premium_discount == PremiumDiscount.DISCOUNT
        assert result.discount_amount == 50.0
        assert len(result.cash_flows) == 20
        assert result.cash_flows[0].coupon_payment == 25.0
        assert result.solver.converged

    def test_par_bond(self, par_bond, valuation_date):
        result = calculate_bond(par_bond, valuation_date)
        assert result.yield_to_maturity == pytest.approx(5.0, abs=0.01)
        assert result.premium_discount == PremiumDiscount.PAR
        assert result.discount_amount == 0.0

    def test_premium_amount_is_positive(self, valuation_date):
        bond = BondInput(1000.0, 6.0, 1080.0, 8.0, CouponFrequency.ANNUAL)
        result = calculate_bond(bond, valuation_date)
        assert result.premium_discount == PremiumDiscount.PREMIUM
        assert result.discount_amount == 80.0
        assert result.yield_to_maturity < 6.0

    def test_schedule_invariants(self, discount_bond, valuation_date):
        result = calculate_bond(discount_bond, valuation_date)
        flows = result.cash_flows
        assert flows[-1].remaining_principal == 0
        assert all(cf.remaining_principal == discount_bond.face_value for cf in flows[:-1])
        cumulative = [cf.cumulative_interest for cf in flows]
        assert all(b > a for a, b in zip(cumulative, cumulative[1:]))
        assert cumulative[-1] == pytest.approx(result.total_interest, abs=0.01)

    def test_reconstructed_price_matches_market(self, discount_bond, valuation_date):
        result = calculate_bond(discount_bond, valuation_date)
        recovered = price_at_yield(result.solver.yield_pct / 100, 1000.0, 25.0, 20, 2)
        assert recovered == pytest.approx(950.0, abs=0.01)

    def test_idempotent_for_same_valuation_date(self, discount_bond, valuation_date):
        assert calculate_bond(discount_bond, valuation_date) == calculate_bond(discount_bond, valuation_date)

    def test_defaults_valuation_date_to_today(self, discount_bond, freeze_time):
        with freeze_time:
            result = calculate_bond(discount_bond)
        assert result.cash_flows[0].payment_date == date(2025, 7, 15)
        assert result.cash_flows[-1].payment_date == date(2035, 1, 15)

    def test_accepts_datetime_valuation(self, discount_bond):
        result = calculate_bond(discount_bond, datetime(2025, 1, 15, 16, 30))
        assert result.cash_flows[0].payment_date == date(2025, 7, 15)

    def test_non_convergence_yields_none(self, discount_bond, valuation_date, mocker):
        mocker.patch(
            "bond_calculation.engine.solve_ytm",
            return_value=YieldSolution(yield_pct=None, converged=False, iterations=100, method="none"),
        )
        result = calculate_bond(discount_bond, valuation_date)
        assert result.yield_to_maturity is None
        assert result.current_yield == 5.26
        assert result_to_dict(result)["yieldToMaturity"] is None


class TestResultToDict:
    def test_wire_shape(self, discount_bond, valuation_date):
        payload = result_to_dict(calculate_bond(discount_bond, valuation_date))
        assert list(payload) == [
            "currentYield",
            "yieldToMaturity",
            "totalInterest",
            "premiumDiscount",
            "discountAmount",
            "cashFlows",
            "solver",
        ]
        assert payload["premiumDiscount"] == "discount"
        first = payload["cashFlows"][0]
        assert first == {
            "period": 1,
            "paymentDate": "2025-07-15",
            "couponPayment": 25.0,
            "cumulativeInterest": 25.0,
            "remainingPrincipal": 1000.0,
        }
        assert payload["cashFlows"][-1]["remainingPrincipal"] == 0
        assert payload["solver"]["converged"] is True
        assert payload["solver"]["method"] == "newton"
