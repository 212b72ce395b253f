# Purpose: Convergence and fallback tests for the Newton-Raphson YTM solver (bond_calculation/ytm.py).

import math

import pytest

from bond_calculation.analytics import coupon_payment
from bond_calculation.config import get_solver_config
from bond_calculation.ytm import initial_guess, price_and_derivative, price_at_yield, solve_ytm


def _solve(face, rate, price, years, ppy, **kwargs):
    n = int(round(years * ppy))
    coupon = coupon_payment(face, rate, ppy)
    return solve_ytm(face, price, coupon, n, ppy, **kwargs), coupon, n


class TestPricing:
    def test_price_at_coupon_rate_is_par(self):
        assert price_at_yield(0.05, 1000, 25, 20, 2) == pytest.approx(1000.0)
        assert price_at_yield(0.08, 100, 8, 5, 1) == pytest.approx(100.0)

    def test_zero_yield_is_undiscounted_sum(self):
        assert price_at_yield(0.0, 1000, 25, 20, 2) == pytest.approx(1500.0)

    def test_invalid_periodic_rate_returns_nan(self):
        assert math.isnan(price_at_yield(-2.5, 1000, 25, 20, 2))

    def test_derivative_matches_finite_difference(self):
        y, h = 0.06, 1e-6
        _, analytic = price_and_derivative(y, 1000, 25, 20, 2)
        numeric = (price_at_yield(y + h, 1000, 25, 20, 2) - price_at_yield(y - h, 1000, 25, 20, 2)) / (2 * h)
        assert analytic == pytest.approx(numeric, rel=1e-5)
        assert analytic < 0

    def test_initial_guess_approximates_yield(self):
        guess = initial_guess(1000, 950, 25, 20, 2)
        assert guess == pytest.approx((50 + 5) / 975)


class TestNewtonConvergence:
    def test_par_bond_yields_coupon_rate(self):
        solution, _, _ = _solve(1000, 5, 1000, 10, 2)
        assert solution.converged
        assert solution.method == "newton"
        assert solution.yield_pct == pytest.approx(5.0, abs=1e-4)

    def test_discount_bond_yield_exceeds_current_yield(self):
        solution, _, _ = _solve(1000, 5, 950, 10, 2)
        assert solution.converged
        assert solution.yield_pct > 50 / 950 * 100
        assert 5.5 < solution.yield_pct < 5.8

    @pytest.mark.parametrize(
        "rate,price,years,ppy",
        [
            (5, 950, 10, 2),
            (5, 1050, 10, 2),
            (8, 700, 30, 1),
            (3, 1400, 5, 1),
            (0, 600, 15, 2),
            (12, 1200, 1, 2),
            (5, 500, 1, 1),
            (6.5, 1500, 20, 2),
        ],
    )
    def test_recovers_market_price(self, rate, price, years, ppy):
        solution, coupon, n = _solve(1000, rate, price, years, ppy)
        assert solution.converged
        assert solution.method == "newton"
        assert solution.iterations < 100
        recovered = price_at_yield(solution.yield_pct / 100, 1000, coupon, n, ppy)
        assert recovered == pytest.approx(price, abs=0.01)

    def test_premium_bond_yield_below_coupon(self):
        solution, _, _ = _solve(1000, 5, 1050, 10, 2)
        assert solution.yield_pct < 5.0


class TestFallback:
    def test_brent_takes_over_when_newton_leaves_domain(self, mocker):
        expected, _, _ = _solve(1000, 5, 950, 10, 2)
        mocker.patch("bond_calculation.ytm.initial_guess", return_value=50.0)

        solution, coupon, n = _solve(1000, 5, 950, 10, 2)
        assert solution.converged
        assert solution.method == "brent"
        assert solution.yield_pct == pytest.approx(expected.yield_pct, abs=1e-6)
        assert price_at_yield(solution.yield_pct / 100, 1000, coupon, n, 2) == pytest.approx(950, abs=0.01)

    def test_no_fallback_reports_non_convergence(self, mocker):
        mocker.patch("bond_calculation.ytm.initial_guess", return_value=50.0)
        solution, _, _ = _solve(1000, 5, 950, 10, 2, fallback=False)
        assert not solution.converged
        assert solution.yield_pct is None
        assert solution.method == "none"

    def test_unbracketable_price_reports_non_convergence(self, mocker):
        # A one-year zero priced at 50 needs a yield of 1900%, outside the bracket
        mocker.patch("bond_calculation.ytm.initial_guess", return_value=50.0)
        solution, _, _ = _solve(1000, 0, 50, 1, 1)
        assert not solution.converged
        assert solution.yield_pct is None

    def test_exhausted_budget_without_fallback(self):
        solution, _, _ = _solve(1000, 5, 950, 10, 2, max_iter=1, fallback=False)
        assert not solution.converged
        assert solution.iterations == 1


class TestSolverConfig:
    def test_defaults(self, monkeypatch):
        monkeypatch.setattr("core.settings_loader.get_solver_settings", lambda: {})
        cfg = get_solver_config()
        assert cfg["tolerance"] == 1e-5
        assert cfg["max_iterations"] == 100
        assert cfg["bracket_low"] == -0.99
        assert cfg["bracket_high"] == 10.0
        assert cfg["fallback_enabled"] is True

    def test_settings_override(self, monkeypatch):
        monkeypatch.setattr(
            "core.settings_loader.get_solver_settings",
            lambda: {"max_iterations": "7", "fallback_enabled": False},
        )
        cfg = get_solver_config()
        assert cfg["max_iterations"] == 7
        assert cfg["fallback_enabled"] is False
