# config.py
# Purpose: Numerical constants for the bond calculation package, with settings.yaml overrides

from __future__ import annotations

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)

# Newton-Raphson stops once |P(y) - price| falls below this (price units)
TOL = 1e-5
MAX_ITER = 100

# Bracket for the fallback root-find, annual decimal yield
BRACKET_LOW = -0.99
BRACKET_HIGH = 10.0

# Within one cent of face value counts as par
PAR_TOLERANCE = 0.01

# Snap period counts this close to an integer
PERIOD_EPSILON = 1e-9

MONTHS_PER_PERIOD = {1: 12, 2: 6}


def get_solver_config() -> Dict[str, Any]:
    """Return solver parameters, overlaying the ``solver`` section of settings.yaml."""
    cfg: Dict[str, Any] = {
        "tolerance": TOL,
        "max_iterations": MAX_ITER,
        "bracket_low": BRACKET_LOW,
        "bracket_high": BRACKET_HIGH,
        "fallback_enabled": True,
    }
    try:
        # Local import to avoid a hard dependency on the settings file at import time
        from core.settings_loader import get_solver_settings

        overrides = get_solver_settings() or {}
    except ImportError:
        overrides = {}

    for key in cfg:
        if key in overrides and overrides[key] is not None:
            cfg[key] = overrides[key]

    cfg["tolerance"] = float(cfg["tolerance"])
    cfg["max_iterations"] = int(cfg["max_iterations"])
    cfg["bracket_low"] = float(cfg["bracket_low"])
    cfg["bracket_high"] = float(cfg["bracket_high"])
    cfg["fallback_enabled"] = bool(cfg["fallback_enabled"])
    return cfg
