"""Return metrics: levered/unlevered, before/after-tax IRR, NPV and equity
multiple, plus year-1 debt and yield ratios.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.engine.cashflow import cash_on_cash, dscr
from proforma.engine.irr import (
    compute_equity_multiple,
    compute_irr,
    compute_npv,
    payback_year,
)
from proforma.engine.tax import tax_liability
from proforma.models.assumptions import DealAssumptions
from proforma.models.results import (
    AnnualCashflow,
    LoanSummary,
    ProFormaResults,
    ReturnMetrics,
    SaleProceeds,
)

FOUR_PLACES = Decimal("0.0001")


def _ratio(numerator: Decimal, denominator: Decimal) -> Decimal:
    if denominator == 0:
        return Decimal("0")
    return (numerator / denominator).quantize(FOUR_PLACES, ROUND_HALF_UP)


def cash_flow_series(
    initial_equity: Decimal,
    annual: list[Decimal],
    sale_proceeds: Decimal,
) -> list[Decimal]:
    """[-equity, CF1, ..., CFn + sale proceeds]."""
    series = [-initial_equity, *annual]
    if annual:
        series[-1] += sale_proceeds
    return series


def variant_metrics(
    initial_equity: Decimal,
    annual: list[Decimal],
    sale_proceeds: Decimal,
    discount_rate: Decimal,
) -> ReturnMetrics:
    series = cash_flow_series(initial_equity, annual, sale_proceeds)
    total_returned = sum(annual, Decimal("0")) + sale_proceeds
    return ReturnMetrics(
        initial_equity=initial_equity,
        irr=compute_irr(series),
        npv=compute_npv(series, discount_rate),
        equity_multiple=compute_equity_multiple(total_returned, initial_equity),
        total_cash_returned=total_returned,
    )


def unlevered_after_tax_cashflows(
    assumptions: DealAssumptions,
    cashflows: list[AnnualCashflow],
) -> list[Decimal]:
    """NOI less tax on (NOI - depreciation): no interest, no loan costs."""
    return [
        cf.noi - tax_liability(cf.noi - cf.depreciation, assumptions.ordinary_income_tax_rate)
        for cf in cashflows
    ]


def compute_return_metrics(
    assumptions: DealAssumptions,
    cashflows: list[AnnualCashflow],
    sale: SaleProceeds,
    loan: LoanSummary,
    discount_rate: Decimal,
) -> ProFormaResults:
    """Aggregate annual rows and sale proceeds into a ProFormaResults."""
    acquisition_costs = assumptions.acquisition_cost_amount
    total_project_cost = assumptions.purchase_price + acquisition_costs + loan.loan_costs
    initial_equity = total_project_cost - loan.loan_amount
    unlevered_equity = assumptions.purchase_price + acquisition_costs

    after_tax = variant_metrics(
        initial_equity,
        [cf.after_tax_cashflow for cf in cashflows],
        sale.after_tax_sale_proceeds,
        discount_rate,
    )
    before_tax = variant_metrics(
        initial_equity,
        [cf.before_tax_cashflow for cf in cashflows],
        sale.before_tax_sale_proceeds,
        discount_rate,
    )
    unlevered_after_tax = variant_metrics(
        unlevered_equity,
        unlevered_after_tax_cashflows(assumptions, cashflows),
        sale.net_sale_proceeds - sale.taxes_on_sale,
        discount_rate,
    )
    unlevered_before_tax = variant_metrics(
        unlevered_equity,
        [cf.noi for cf in cashflows],
        sale.net_sale_proceeds,
        discount_rate,
    )

    # Average cash on cash
    yearly_coc = [cash_on_cash(cf.after_tax_cashflow, initial_equity) for cf in cashflows]
    avg_coc = sum(yearly_coc, Decimal("0")) / len(yearly_coc) if yearly_coc else Decimal("0")

    total_tax_savings = sum(
        (max(Decimal("0"), -cf.taxes) for cf in cashflows), Decimal("0")
    )

    year1 = cashflows[0] if cashflows else AnnualCashflow(year=1)
    stabilized_index = min(max(assumptions.stabilized_year, 1), max(len(cashflows), 1)) - 1
    stabilized_noi = cashflows[stabilized_index].noi if cashflows else Decimal("0")

    return ProFormaResults(
        annual_cashflows=cashflows,
        sale_proceeds=sale,
        loan=loan,
        discount_rate=discount_rate,
        total_equity_invested=initial_equity,
        total_cash_returned=after_tax.total_cash_returned,
        net_profit=after_tax.total_cash_returned - initial_equity,
        irr=after_tax.irr,
        npv=after_tax.npv,
        equity_multiple=after_tax.equity_multiple,
        average_cash_on_cash=avg_coc.quantize(FOUR_PLACES, ROUND_HALF_UP),
        total_tax_savings=total_tax_savings,
        before_tax=before_tax,
        unlevered_after_tax=unlevered_after_tax,
        unlevered_before_tax=unlevered_before_tax,
        year1_noi=year1.noi,
        dscr=dscr(year1.noi, year1.debt_service),
        debt_yield=_ratio(year1.noi, loan.loan_amount),
        yield_on_cost=_ratio(stabilized_noi, total_project_cost),
        purchase_cap_rate=_ratio(year1.noi, assumptions.purchase_price),
        loan_to_value=_ratio(loan.loan_amount, assumptions.purchase_price),
        year1_cash_on_cash=cash_on_cash(year1.after_tax_cashflow, initial_equity),
        total_project_cost=total_project_cost,
        payback_year=payback_year(
            cash_flow_series(
                initial_equity,
                [cf.after_tax_cashflow for cf in cashflows],
                sale.after_tax_sale_proceeds,
            )
        ),
    )
