"""Cash flow assembly: one AnnualCashflow row per year, plus row-level ratios.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.engine.income import OperatingYear
from proforma.engine.tax import taxable_income, tax_liability
from proforma.models.assumptions import TaxableIncomeBasis
from proforma.models.results import AnnualCashflow, DebtYear

FOUR_PLACES = Decimal("0.0001")


def assemble_cashflow(
    operations: OperatingYear,
    debt: DebtYear,
    depreciation: Decimal,
    loan_costs_amortization: Decimal,
    taxable_income_basis: TaxableIncomeBasis,
    ordinary_income_tax_rate: Decimal,
) -> AnnualCashflow:
    """Merge operations, debt service and depreciation into one year's row.

    CFBT = NOI - debt service; CFAT = CFBT - taxes.
    """
    cfbt = operations.noi - debt.debt_service
    taxable = taxable_income(
        basis=taxable_income_basis,
        noi=operations.noi,
        before_tax_cashflow=cfbt,
        interest_paid=debt.interest,
        depreciation=depreciation,
        loan_costs_amortization=loan_costs_amortization,
    )
    taxes = tax_liability(taxable, ordinary_income_tax_rate)

    return AnnualCashflow(
        year=operations.year,
        potential_rental_income=operations.potential_rental_income,
        vacancy_loss=operations.vacancy_loss,
        other_income=operations.other_income,
        effective_gross_income=operations.effective_gross_income,
        operating_expenses=operations.operating_expenses,
        noi=operations.noi,
        debt_service=debt.debt_service,
        interest_expense=debt.interest,
        principal_payment=debt.principal,
        before_tax_cashflow=cfbt,
        depreciation=depreciation,
        loan_costs_amortization=loan_costs_amortization,
        taxable_income=taxable,
        taxes=taxes,
        after_tax_cashflow=cfbt - taxes,
        loan_balance=debt.ending_balance,
    )


def cash_on_cash(cash_flow: Decimal, initial_equity: Decimal) -> Decimal:
    """Cash-on-cash return = annual cash flow / equity invested."""
    if initial_equity == 0:
        return Decimal("0")
    return (cash_flow / initial_equity).quantize(FOUR_PLACES, ROUND_HALF_UP)


def dscr(noi_amount: Decimal, annual_debt_service: Decimal) -> Decimal:
    """Debt Service Coverage Ratio = NOI / annual debt service."""
    if annual_debt_service == 0:
        return Decimal("0")
    return (noi_amount / annual_debt_service).quantize(FOUR_PLACES, ROUND_HALF_UP)
