# Add project root to sys.path for module imports
import os, sys
import pytest
from datetime import date

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from bond_calculation.models import BondInput, CouponFrequency


@pytest.fixture
def valuation_date():
    """Fixed schedule anchor so date assertions are deterministic."""
    return date(2025, 1, 15)


@pytest.fixture
def discount_bond():
    """1000 face, 5% semi-annual, 10 years, priced at 950."""
    return BondInput(
        face_value=1000.0,
        coupon_rate=5.0,
        market_price=950.0,
        years_to_maturity=10.0,
        coupon_frequency=CouponFrequency.SEMI_ANNUAL,
    )


@pytest.fixture
def par_bond():
    return BondInput(
        face_value=1000.0,
        coupon_rate=5.0,
        market_price=1000.0,
        years_to_maturity=10.0,
        coupon_frequency=CouponFrequency.SEMI_ANNUAL,
    )


@pytest.fixture
def valid_payload():
    """JSON body accepted by POST /api/bond/calculate."""
    return {
        "faceValue": 1000,
        "couponRate": 5,
        "marketPrice": 950,
        "yearsToMaturity": 10,
        "couponFrequency": "semi-annual",
    }


@pytest.fixture
def freeze_time():
    """Use freezegun.freeze_time for tests that rely on 'today'."""
    from freezegun import freeze_time

    return freeze_time("2025-01-15 10:00:00")
