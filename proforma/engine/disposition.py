"""Property disposition (sale) analysis.

Sale price from a fixed figure or a capitalized NOI, selling costs, loan
payoff, depreciation recapture and capital gains.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from proforma.engine.income import expenses_provided, noi, rental_growth_rate, value_at
from proforma.models.assumptions import DealAssumptions, DispositionPriceType, SaleNOIBasis
from proforma.models.results import AnnualCashflow, SaleProceeds

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def representative_noi(
    assumptions: DealAssumptions,
    cashflows: list[AnnualCashflow],
    basis: SaleNOIBasis,
) -> Decimal:
    """NOI capitalized into a cap-rate sale price.

    TERMINAL_YEAR: NOI of the final hold year.
    STABILIZED_YEAR: NOI of ``assumptions.stabilized_year`` (clamped to the hold).
    FORWARD_YEAR: NOI of year N+1 from the income/expense inputs when both run
    past the hold; otherwise the terminal NOI grown at the trailing rent growth.
    """
    if not cashflows:
        return Decimal("0")

    if basis is SaleNOIBasis.STABILIZED_YEAR:
        year = min(max(assumptions.stabilized_year, 1), len(cashflows))
        return cashflows[year - 1].noi

    terminal = cashflows[-1].noi
    if basis is SaleNOIBasis.FORWARD_YEAR:
        forward_year = len(cashflows) + 1
        if (
            value_at(assumptions.rental_income, forward_year) > 0
            and expenses_provided(assumptions, forward_year)
        ):
            return noi(assumptions, forward_year)
        growth = rental_growth_rate(assumptions, len(cashflows))
        return (terminal * (1 + growth)).quantize(TWO_PLACES, ROUND_HALF_UP)

    return terminal


def sale_price(assumptions: DealAssumptions, noi_amount: Decimal) -> Decimal:
    """Gross sale price. Without a pricing method the asset sells at its purchase price."""
    terms = assumptions.disposition
    if terms.price_type is DispositionPriceType.DOLLAR:
        return terms.price
    if terms.price_type is DispositionPriceType.CAP_RATE:
        if terms.cap_rate <= 0:
            return Decimal("0")
        return (noi_amount / terms.cap_rate).quantize(TWO_PLACES, ROUND_HALF_UP)
    return assumptions.purchase_price


def exit_cap_rate(assumptions: DealAssumptions, noi_amount: Decimal, price: Decimal) -> Decimal:
    """Stated cap rate for cap-rate pricing, otherwise the cap rate implied by the price."""
    if assumptions.disposition.price_type is DispositionPriceType.CAP_RATE:
        return assumptions.disposition.cap_rate
    if price <= 0:
        return Decimal("0")
    return (noi_amount / price).quantize(FOUR_PLACES, ROUND_HALF_UP)


def compute_disposition(
    assumptions: DealAssumptions,
    cashflows: list[AnnualCashflow],
    accumulated_depreciation: Decimal,
    improvements_basis: Decimal = Decimal("0"),
) -> SaleProceeds:
    """Compute before- and after-tax proceeds from the terminal-year sale.

    Args:
        assumptions: Deal assumptions (pricing, selling costs, tax rates)
        cashflows: The assembled annual rows; the last row's loan balance is paid off
        accumulated_depreciation: Sum of all depreciation taken over the hold
        improvements_basis: Capital improvements added to basis during the hold
    """
    basis_choice = assumptions.disposition.noi_basis
    rep_noi = representative_noi(assumptions, cashflows, basis_choice)
    price = sale_price(assumptions, rep_noi)

    selling_costs = assumptions.disposition.selling_costs.resolve(price).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )
    net_sale_proceeds = price - selling_costs
    loan_balance = cashflows[-1].loan_balance if cashflows else Decimal("0")
    before_tax_proceeds = net_sale_proceeds - loan_balance

    # Gain calculation
    original_basis = assumptions.original_basis + improvements_basis
    adjusted_basis = original_basis - accumulated_depreciation
    gain_over_basis = max(Decimal("0"), price - adjusted_basis)
    total_gain = gain_over_basis  # Losses are not deducted

    # Recapture is capped by the depreciation actually taken
    depreciation_recapture = min(accumulated_depreciation, gain_over_basis)
    capital_gains = total_gain - depreciation_recapture

    capital_gains_tax = (capital_gains * assumptions.capital_gains_tax_rate).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )
    recapture_tax = (depreciation_recapture * assumptions.depreciation_recapture_rate).quantize(
        TWO_PLACES, ROUND_HALF_UP
    )
    taxes_on_sale = capital_gains_tax + recapture_tax

    return SaleProceeds(
        noi_basis=basis_choice.value,
        representative_noi=rep_noi,
        exit_cap_rate=exit_cap_rate(assumptions, rep_noi, price),
        sale_price=price,
        selling_costs=selling_costs,
        net_sale_proceeds=net_sale_proceeds,
        original_basis=original_basis,
        accumulated_depreciation=accumulated_depreciation,
        adjusted_basis=adjusted_basis,
        loan_balance=loan_balance,
        before_tax_sale_proceeds=before_tax_proceeds,
        total_gain=total_gain,
        depreciation_recapture=depreciation_recapture,
        capital_gains=capital_gains,
        capital_gains_tax=capital_gains_tax,
        depreciation_recapture_tax=recapture_tax,
        taxes_on_sale=taxes_on_sale,
        after_tax_sale_proceeds=before_tax_proceeds - taxes_on_sale,
    )
