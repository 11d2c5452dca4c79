"""Pro forma orchestrator: composes all engine sub-modules into a full projection.

Pure computation. No I/O. Dataclasses in, ProFormaResults out.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.config import settings
from proforma.models.assumptions import DealAssumptions
from proforma.models.results import AnnualCashflow, LoanSummary, ProFormaResults

from proforma.engine.income import project_operations
from proforma.engine.debt import (
    amortization_schedule,
    derive_loan_amount,
    loan_costs_amortization,
    yearly_debt_summary,
)
from proforma.engine.depreciation import (
    compute_yearly_depreciation,
    improvements_placed_in_service,
)
from proforma.engine.cashflow import assemble_cashflow
from proforma.engine.disposition import compute_disposition
from proforma.engine.metrics import compute_return_metrics

TWO_PLACES = Decimal("0.01")


def run_proforma(
    assumptions: DealAssumptions,
    discount_rate: Decimal | None = None,
) -> ProFormaResults:
    """Run complete pro forma analysis.

    Returns ProFormaResults with annual cash flows, sale proceeds, and levered /
    unlevered, before / after-tax return metrics. NPV uses ``discount_rate``,
    defaulting to the configured rate.
    """
    if discount_rate is None:
        discount_rate = Decimal(str(settings.default_discount_rate))

    hold = assumptions.hold_period
    financing = assumptions.financing

    # Operations first: DSCR sizing needs year-1 NOI
    operations = project_operations(assumptions, hold)
    year1_noi = operations[0].noi

    # Debt
    loan_amount = derive_loan_amount(financing, assumptions.purchase_price, year1_noi)
    loan_costs = Decimal("0")
    if loan_amount > 0:
        loan_costs = financing.loan_costs.resolve(loan_amount).quantize(TWO_PLACES, ROUND_HALF_UP)

    amort = amortization_schedule(
        principal=loan_amount,
        annual_rate=financing.interest_rate,
        amortization_years=financing.amortization_years,
        payments_per_year=financing.payments_per_year,
        hold_years=hold,
        loan_term_years=financing.loan_term_years,
    )
    yearly_debt = yearly_debt_summary(amort, hold)
    loan_term = financing.loan_term_years or financing.amortization_years

    # Annual rows
    cashflows: list[AnnualCashflow] = []
    total_dep = Decimal("0")
    for ops, debt_year in zip(operations, yearly_debt):
        dep = compute_yearly_depreciation(assumptions, ops.year)
        total_dep += dep.total

        cashflows.append(assemble_cashflow(
            operations=ops,
            debt=debt_year,
            depreciation=dep.total,
            loan_costs_amortization=loan_costs_amortization(loan_costs, loan_term, ops.year),
            taxable_income_basis=assumptions.taxable_income_basis,
            ordinary_income_tax_rate=assumptions.ordinary_income_tax_rate,
        ))

    # Disposition
    sale = compute_disposition(
        assumptions=assumptions,
        cashflows=cashflows,
        accumulated_depreciation=total_dep,
        improvements_basis=improvements_placed_in_service(assumptions, hold),
    )

    loan = LoanSummary(
        loan_amount=loan_amount,
        loan_costs=loan_costs,
        periodic_payment=amort.periodic_payment,
        payments_per_year=financing.payments_per_year if loan_amount > 0 else 0,
        annual_debt_service=amort.periodic_payment * financing.payments_per_year if loan_amount > 0 else Decimal("0"),
        balloon_year=amort.balloon_year,
        balloon_payment=amort.balloon_payment,
    )

    return compute_return_metrics(assumptions, cashflows, sale, loan, discount_rate)
