# ytm.py
# Purpose: Yield-to-Maturity solver (Newton-Raphson with a bracketing fallback)

from __future__ import annotations

import logging
import math
from typing import Optional, Tuple

import numpy as np
import scipy.optimize as opt

from .config import get_solver_config
from .models import YieldSolution

logger = logging.getLogger(__name__)

__all__ = ["initial_guess", "price_at_yield", "price_and_derivative", "solve_ytm"]

# Largest finite objective value handed to the bracketing solver
_OBJECTIVE_CAP = 1e300
_MIN_DERIVATIVE = 1e-12


def initial_guess(
    face_value: float,
    market_price: float,
    coupon: float,
    n_periods: int,
    ppy: int,
) -> float:
    """Approximate annual YTM: (annual coupon + annualized pull to par) / average price."""
    annual_coupon = coupon * ppy
    pull_to_par = (face_value - market_price) / n_periods * ppy
    return (annual_coupon + pull_to_par) / ((face_value + market_price) / 2.0)


def _discount_factors(y: float, n_periods: int, ppy: int) -> Optional[Tuple[np.ndarray, float]]:
    base = 1.0 + y / ppy
    if not math.isfinite(base) or base <= 0.0:
        return None
    t = np.arange(1, n_periods + 1, dtype=float)
    with np.errstate(over="ignore", divide="ignore", invalid="ignore"):
        factors = np.power(base, -t)
    return factors, base


def price_at_yield(y: float, face_value: float, coupon: float, n_periods: int, ppy: int) -> float:
    """Dirty price of the bond at annual decimal yield ``y`` (NaN when 1 + y/ppy <= 0)."""
    dfs = _discount_factors(y, n_periods, ppy)
    if dfs is None:
        return math.nan
    factors, _ = dfs
    with np.errstate(over="ignore", invalid="ignore"):
        coupons = coupon * factors.sum() if coupon else 0.0
        principal = face_value * factors[-1]
    return float(coupons + principal)


def price_and_derivative(
    y: float, face_value: float, coupon: float, n_periods: int, ppy: int
) -> Tuple[float, float]:
    """Return ``(P(y), dP/dy)`` with the derivative taken w.r.t. the annual yield."""
    dfs = _discount_factors(y, n_periods, ppy)
    if dfs is None:
        return math.nan, math.nan
    factors, base = dfs
    t = np.arange(1, n_periods + 1, dtype=float)
    with np.errstate(over="ignore", invalid="ignore"):
        coupons = coupon * factors.sum() if coupon else 0.0
        principal = face_value * factors[-1]
        weighted = coupon * (t * factors).sum() if coupon else 0.0
        derivative = -(weighted + n_periods * principal) / base / ppy
    return float(coupons + principal), float(derivative)


def _newton(
    y: float,
    market_price: float,
    face_value: float,
    coupon: float,
    n_periods: int,
    ppy: int,
    tol: float,
    max_iter: int,
) -> Tuple[Optional[float], int, Optional[float]]:
    residual: Optional[float] = None
    for iteration in range(max_iter):
        if not math.isfinite(y):
            logger.debug(f"Newton produced non-finite yield at iteration {iteration}")
            return None, iteration, residual
        price, derivative = price_and_derivative(y, face_value, coupon, n_periods, ppy)
        residual = price - market_price
        if not math.isfinite(residual):
            logger.debug(f"Newton left the pricing domain at iteration {iteration} (y={y})")
            return None, iteration, None
        if abs(residual) < tol:
            return y, iteration, residual
        if not math.isfinite(derivative) or abs(derivative) < _MIN_DERIVATIVE:
            logger.debug(f"Newton derivative degenerate at iteration {iteration}: {derivative}")
            return None, iteration, residual
        y -= residual / derivative
    return None, max_iter, residual


def _bracketed(
    market_price: float,
    face_value: float,
    coupon: float,
    n_periods: int,
    ppy: int,
    low: float,
    high: float,
    max_iter: int,
) -> Tuple[Optional[float], int]:
    def _objective(y: float) -> float:
        value = price_at_yield(y, face_value, coupon, n_periods, ppy) - market_price
        if math.isinf(value):
            return math.copysign(_OBJECTIVE_CAP, value)
        return value

    f_low, f_high = _objective(low), _objective(high)
    if math.isnan(f_low) or math.isnan(f_high) or f_low * f_high > 0:
        logger.warning(
            f"Cannot bracket YTM in [{low:.2%}, {high:.2%}] for price {market_price}"
        )
        return None, 0

    root, info = opt.brentq(
        _objective, low, high, xtol=1e-14, maxiter=max_iter, full_output=True, disp=False
    )
    if not info.converged:
        return None, info.iterations
    return float(root), info.iterations


def solve_ytm(
    face_value: float,
    market_price: float,
    coupon: float,
    n_periods: int,
    ppy: int,
    *,
    tol: Optional[float] = None,
    max_iter: Optional[int] = None,
    fallback: Optional[bool] = None,
) -> YieldSolution:
    """Solve for the annual yield that prices the bond at ``market_price``.

    Newton-Raphson from the approximate-YTM starting point first. If Newton
    diverges, stalls on a flat derivative or runs out of iterations, a Brent
    bracketing search over the configured yield range takes over. The returned
    ``YieldSolution`` carries ``converged=False`` and no yield when both fail.
    """
    cfg = get_solver_config()
    tol = cfg["tolerance"] if tol is None else tol
    max_iter = cfg["max_iterations"] if max_iter is None else max_iter
    fallback = cfg["fallback_enabled"] if fallback is None else fallback

    guess = initial_guess(face_value, market_price, coupon, n_periods, ppy)
    y, iterations, residual = _newton(
        guess, market_price, face_value, coupon, n_periods, ppy, tol, max_iter
    )
    if y is not None:
        return YieldSolution(
            yield_pct=y * 100.0,
            converged=True,
            iterations=iterations,
            method="newton",
            residual=residual,
        )

    logger.info(
        f"Newton-Raphson did not converge after {iterations} iterations "
        f"(face={face_value}, price={market_price}, periods={n_periods})"
    )
    if not fallback:
        return YieldSolution(
            yield_pct=None, converged=False, iterations=iterations, method="none", residual=residual
        )

    root, bracket_iterations = _bracketed(
        market_price,
        face_value,
        coupon,
        n_periods,
        ppy,
        cfg["bracket_low"],
        cfg["bracket_high"],
        max_iter,
    )
    total_iterations = iterations + bracket_iterations
    if root is None:
        return YieldSolution(
            yield_pct=None,
            converged=False,
            iterations=total_iterations,
            method="none",
            residual=residual,
        )

    final_residual = price_at_yield(root, face_value, coupon, n_periods, ppy) - market_price
    return YieldSolution(
        yield_pct=root * 100.0,
        converged=True,
        iterations=total_iterations,
        method="brent",
        residual=final_residual,
    )
