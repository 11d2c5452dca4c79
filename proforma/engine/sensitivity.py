"""Sensitivity of returns to exit cap rate, rent growth and loan rate.

Each shock re-runs the pro forma on a modified copy of the assumptions.
Pure computation. No I/O.
"""

from dataclasses import replace
from decimal import Decimal

from proforma.config import settings
from proforma.engine.cashflow import dscr
from proforma.engine.debt import periodic_payment
from proforma.engine.proforma import run_proforma
from proforma.models.assumptions import DealAssumptions, DispositionPriceType
from proforma.models.results import ProFormaResults, SensitivityResult


def _step(value: float) -> Decimal:
    return Decimal(str(value))


def shift_rent_growth(assumptions: DealAssumptions, delta: Decimal) -> DealAssumptions:
    """Compound an extra ``delta`` of annual growth onto years 2..n of rental income."""
    shifted = tuple(
        rent * (1 + delta) ** i for i, rent in enumerate(assumptions.rental_income)
    )
    return replace(assumptions, rental_income=shifted)


def _irr_with_cap_rate(assumptions: DealAssumptions, cap_rate: Decimal) -> Decimal | None:
    terms = replace(assumptions.disposition, cap_rate=cap_rate)
    return run_proforma(replace(assumptions, disposition=terms)).irr


def _dscr_at_rate(base: ProFormaResults, assumptions: DealAssumptions, rate: Decimal) -> Decimal:
    financing = assumptions.financing
    if base.loan.loan_amount <= 0 or rate < 0:
        return Decimal("0")
    payment = periodic_payment(
        base.loan.loan_amount, rate, financing.amortization_years, financing.payments_per_year
    )
    return dscr(base.year1_noi, payment * financing.payments_per_year)


def run_sensitivity(
    assumptions: DealAssumptions,
    base: ProFormaResults | None = None,
) -> SensitivityResult:
    """After-tax IRR under exit cap and rent growth shocks; year-1 DSCR under rate shocks.

    The rate shock holds the base loan amount fixed and reprices the payment.
    Cap-rate shocks apply only to cap-rate priced exits.
    """
    if base is None:
        base = run_proforma(assumptions)

    result = SensitivityResult()

    terms = assumptions.disposition
    if terms.price_type is DispositionPriceType.CAP_RATE and terms.cap_rate > 0:
        step = _step(settings.sensitivity_cap_rate_step)
        result.exit_cap_minus_irr = _irr_with_cap_rate(assumptions, terms.cap_rate - step)
        result.exit_cap_plus_irr = _irr_with_cap_rate(assumptions, terms.cap_rate + step)

    if assumptions.rental_income:
        step = _step(settings.sensitivity_rent_growth_step)
        result.rent_growth_minus_irr = run_proforma(shift_rent_growth(assumptions, -step)).irr
        result.rent_growth_plus_irr = run_proforma(shift_rent_growth(assumptions, step)).irr

    rate = assumptions.financing.interest_rate
    step = _step(settings.sensitivity_interest_rate_step)
    result.interest_rate_minus_dscr = _dscr_at_rate(base, assumptions, rate - step)
    result.interest_rate_plus_dscr = _dscr_at_rate(base, assumptions, rate + step)

    return result
