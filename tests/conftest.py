"""Canonical loan fixtures used across all engine tests.

Fixture: 200K loan, 20yr, 12% TEA, no grace, no fees.
"""

import pytest
from decimal import Decimal

from loansim.models.loan import LoanParameters, GraceMode, RateMode, Capitalization


@pytest.fixture
def standard_loan() -> LoanParameters:
    """200K French loan at 12% TEA over 20 years."""
    return LoanParameters(
        amount=Decimal("200000"),
        annual_rate=Decimal("12"),
        term_years=Decimal("20"),
        rate_mode=RateMode.EFFECTIVE,
    )


@pytest.fixture
def zero_rate_loan() -> LoanParameters:
    """120K interest-free over 10 years: 1000/month straight line."""
    return LoanParameters(
        amount=Decimal("120000"),
        annual_rate=Decimal("0"),
        term_years=Decimal("10"),
    )


@pytest.fixture
def total_grace_loan() -> LoanParameters:
    """100K, 10 years, 6 months of total grace (interest capitalizes)."""
    return LoanParameters(
        amount=Decimal("100000"),
        annual_rate=Decimal("12"),
        term_years=Decimal("10"),
        grace_months=6,
        grace_mode=GraceMode.TOTAL,
    )


@pytest.fixture
def partial_grace_loan() -> LoanParameters:
    """100K, 10 years, 6 months interest-only."""
    return LoanParameters(
        amount=Decimal("100000"),
        annual_rate=Decimal("12"),
        term_years=Decimal("10"),
        grace_months=6,
        grace_mode=GraceMode.PARTIAL,
    )


@pytest.fixture
def loan_with_fees() -> LoanParameters:
    """150K at 10% TNA capitalized monthly, with bank fees and life insurance."""
    return LoanParameters(
        amount=Decimal("150000"),
        annual_rate=Decimal("10"),
        term_years=Decimal("15"),
        rate_mode=RateMode.NOMINAL,
        capitalization=Capitalization.MONTHLY,
        admin_fees_percent=Decimal("1.5"),
        evaluation_fee_percent=Decimal("0.5"),
        life_insurance_percent=Decimal("0.3"),
        discount_rate_annual_percent=Decimal("8"),
    )
