"""Advisory checks on deal assumptions.

The engine computes regardless; these messages tell the caller which inputs
will produce a degenerate or implausible projection.
"""

from decimal import Decimal

from proforma.engine.income import value_at
from proforma.models.assumptions import (
    MAX_HOLD_YEARS,
    AggregateExpenses,
    AmountKind,
    DealAssumptions,
    DispositionPriceType,
    FinancingType,
)


def _check_income(assumptions: DealAssumptions, errors: list[str]) -> None:
    if value_at(assumptions.rental_income, 1) <= 0:
        errors.append("Year 1 rental income must be greater than 0")
        return

    expenses = assumptions.expenses
    for year in range(1, assumptions.hold_period + 1):
        if value_at(assumptions.rental_income, year) <= 0:
            errors.append(f"Year {year} rental income must be greater than 0")
            break
        vacancy = value_at(assumptions.vacancy_rates, year)
        if vacancy < 0 or vacancy > 1:
            errors.append(f"Year {year} vacancy rate must be between 0% and 100%")
            break
        if isinstance(expenses, AggregateExpenses):
            figure = value_at(expenses.amounts, year)
            if expenses.kind is AmountKind.PERCENTAGE and (figure < 0 or figure > 1):
                errors.append(f"Year {year} operating expenses must be between 0% and 100%")
                break
            if expenses.kind is AmountKind.DOLLAR and figure < 0:
                errors.append(f"Year {year} operating expenses must be positive")
                break


def _check_financing(assumptions: DealAssumptions, errors: list[str]) -> None:
    financing = assumptions.financing
    if financing.type in (FinancingType.UNSET, FinancingType.CASH):
        return

    if financing.interest_rate < 0 or financing.interest_rate > 1:
        errors.append("Interest rate must be between 0% and 100%")
    if financing.amortization_years <= 0:
        errors.append("Amortization period must be greater than 0")
    if financing.payments_per_year <= 0:
        errors.append("Payments per year must be greater than 0")
    if 0 < financing.amortization_years < financing.loan_term_years:
        errors.append("Loan term cannot exceed amortization period")

    if financing.type is FinancingType.FIXED:
        if financing.loan_amount < 0:
            errors.append("Loan amount must be 0 or greater")
        elif assumptions.purchase_price and financing.loan_amount > assumptions.purchase_price:
            errors.append("Loan amount cannot exceed purchase price")
    elif financing.type is FinancingType.LTV:
        if financing.target_ltv <= 0 or financing.target_ltv > 1:
            errors.append("Target LTV must be between 0% and 100%")
    elif financing.type is FinancingType.DSCR:
        if financing.target_dscr <= 0:
            errors.append("Target DSCR must be greater than 0")

    if financing.type in (FinancingType.LTV, FinancingType.DSCR) and financing.interest_rate == 0:
        errors.append("Interest rate must be greater than 0 to size a DSCR or LTV loan")


def validate_assumptions(assumptions: DealAssumptions) -> list[str]:
    """Return human-readable problems with the assumptions (empty when clean)."""
    errors: list[str] = []

    if assumptions.purchase_price <= 0:
        errors.append("Purchase price must be greater than 0")

    if assumptions.hold_years <= 0 or assumptions.hold_years > MAX_HOLD_YEARS:
        errors.append(f"Hold period must be between 1 and {MAX_HOLD_YEARS} years")

    _check_income(assumptions, errors)
    _check_financing(assumptions, errors)

    for label, rate in (
        ("Ordinary income tax rate", assumptions.ordinary_income_tax_rate),
        ("Capital gains tax rate", assumptions.capital_gains_tax_rate),
        ("Depreciation recapture rate", assumptions.depreciation_recapture_rate),
    ):
        if rate < 0 or rate > 1:
            errors.append(f"{label} must be between 0% and 100%")

    for label, pct in (
        ("Land percentage", assumptions.land_pct),
        ("Improvements percentage", assumptions.improvements_pct),
    ):
        if pct < 0 or pct > 100:
            errors.append(f"{label} must be between 0% and 100%")
    if abs(assumptions.land_pct + assumptions.improvements_pct - 100) > Decimal("0.01"):
        errors.append("Land % and Improvements % must add up to 100%")

    if not 0 <= assumptions.acquisition_month <= 12:
        errors.append("Acquisition month must be between 1 and 12")

    terms = assumptions.disposition
    if terms.price_type is DispositionPriceType.CAP_RATE and (terms.cap_rate <= 0 or terms.cap_rate > 1):
        errors.append("Exit cap rate must be between 0% and 100%")
    if terms.price_type is DispositionPriceType.DOLLAR and terms.price <= 0:
        errors.append("Sale price must be greater than 0")

    return errors
