"""Taxable income and tax liability from operations.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import TaxableIncomeBasis

TWO_PLACES = Decimal("0.01")


def taxable_income(
    basis: TaxableIncomeBasis,
    noi: Decimal,
    before_tax_cashflow: Decimal,
    interest_paid: Decimal,
    depreciation: Decimal,
    loan_costs_amortization: Decimal = Decimal("0"),
) -> Decimal:
    """Compute taxable income from rental operations.

    CASH_FLOW: before-tax cash flow - depreciation. Debt service (principal
    included) has already come out of before-tax cash flow, so only the
    depreciation shield is applied here.

    INTEREST_DEDUCTION: NOI - interest - depreciation - loan cost amortization.
    Principal payments are not deductible.
    """
    if basis is TaxableIncomeBasis.INTEREST_DEDUCTION:
        return noi - interest_paid - depreciation - loan_costs_amortization
    return before_tax_cashflow - depreciation


def tax_liability(taxable: Decimal, ordinary_income_tax_rate: Decimal) -> Decimal:
    """Tax on operations. Negative when taxable income is a loss (tax savings)."""
    return (taxable * ordinary_income_tax_rate).quantize(TWO_PLACES, ROUND_HALF_UP)
