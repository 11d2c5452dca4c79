"""Shared deal fixtures used across engine and API tests.

Base deal: $1M commercial property, $120K rent, 5% vacancy, $40K opex,
5-year hold, sold for $1.1M with 6% selling costs. Year-1 NOI = $74,000.
"""

import pytest
from dataclasses import replace
from decimal import Decimal

from proforma.models.assumptions import (
    AggregateExpenses,
    Amount,
    AmountKind,
    DealAssumptions,
    DispositionPriceType,
    DispositionTerms,
    FinancingTerms,
    FinancingType,
    PropertyType,
)


@pytest.fixture
def cash_deal() -> DealAssumptions:
    """All-cash purchase with flat income and a fixed-price exit."""
    return DealAssumptions(
        purchase_price=Decimal("1000000"),
        hold_years=5,
        rental_income=(Decimal("120000"),) * 5,
        vacancy_rates=(Decimal("0.05"),) * 5,
        expenses=AggregateExpenses(kind=AmountKind.DOLLAR, amounts=(Decimal("40000"),) * 5),
        financing=FinancingTerms(type=FinancingType.CASH),
        property_type=PropertyType.COMMERCIAL,
        land_pct=Decimal("20"),
        improvements_pct=Decimal("80"),
        ordinary_income_tax_rate=Decimal("0.35"),
        capital_gains_tax_rate=Decimal("0.20"),
        depreciation_recapture_rate=Decimal("0.25"),
        disposition=DispositionTerms(
            price_type=DispositionPriceType.DOLLAR,
            price=Decimal("1100000"),
            selling_costs=Amount.percent(Decimal("0.06")),
        ),
    )


@pytest.fixture
def levered_deal(cash_deal) -> DealAssumptions:
    """Base deal with a $750K, 6.5%, 30yr monthly loan and 1% loan costs."""
    return replace(
        cash_deal,
        financing=FinancingTerms(
            type=FinancingType.FIXED,
            loan_amount=Decimal("750000"),
            interest_rate=Decimal("0.065"),
            amortization_years=30,
            loan_term_years=10,
            payments_per_year=12,
            loan_costs=Amount.percent(Decimal("0.01")),
        ),
    )


@pytest.fixture
def dscr_deal(cash_deal) -> DealAssumptions:
    """Base deal financed at a 1.25x DSCR, 6% over 30 years."""
    return replace(
        cash_deal,
        financing=FinancingTerms(
            type=FinancingType.DSCR,
            interest_rate=Decimal("0.06"),
            amortization_years=30,
            payments_per_year=12,
            target_dscr=Decimal("1.25"),
        ),
    )


@pytest.fixture
def cap_rate_deal(cash_deal) -> DealAssumptions:
    """Base deal sold at a 7.4% cap on terminal NOI ($74K / 0.074 = $1M)."""
    return replace(
        cash_deal,
        disposition=DispositionTerms(
            price_type=DispositionPriceType.CAP_RATE,
            cap_rate=Decimal("0.074"),
            selling_costs=Amount.percent(Decimal("0.06")),
        ),
    )
