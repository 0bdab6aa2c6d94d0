"""Canonical test fixtures used across all engine tests.

Fixture: 12,000 financed at 12% a.a. (1% a.m.) over 12 months, first due 2024-01-01.
"""

import pytest
from datetime import date
from decimal import Decimal

from src.models.financing import AmortizationMethod, LoanTerms


@pytest.fixture
def sac_terms() -> LoanTerms:
    """12-month SAC financing: 1,000 amortized every month."""
    return LoanTerms(
        principal=Decimal("12000"),
        annual_interest_rate=Decimal("0.12"),
        term_months=12,
        method=AmortizationMethod.SAC,
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def price_terms() -> LoanTerms:
    """Same financing under the Price (constant installment) method."""
    return LoanTerms(
        principal=Decimal("12000"),
        annual_interest_rate=Decimal("0.12"),
        term_months=12,
        method=AmortizationMethod.PRICE,
        start_date=date(2024, 1, 1),
    )


@pytest.fixture
def mortgage_terms() -> LoanTerms:
    """Long Price mortgage: 400K at 7% over 30 years."""
    return LoanTerms(
        principal=Decimal("400000"),
        annual_interest_rate=Decimal("0.07"),
        term_months=360,
        method=AmortizationMethod.PRICE,
        start_date=date(2025, 1, 31),
    )
