"""Amortization schedule computation and loan sizing.

Pure functions: Decimal in, dataclass out. No I/O.

Loan sizing policy: a financed loan needs positive amortization years and
payments per year, and a non-negative rate. DSCR- and LTV-sized loans also need
a strictly positive rate. Anything else sizes the loan at 0 (all-cash) instead
of raising, so a half-filled assumption set still produces a projection.
"""

from dataclasses import dataclass, field
from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import FinancingTerms, FinancingType
from proforma.models.results import DebtYear

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class AmortizationPayment:
    period: int
    payment: Decimal
    principal: Decimal
    interest: Decimal
    balance: Decimal


@dataclass(frozen=True)
class AmortizationSchedule:
    payments: list[AmortizationPayment] = field(default_factory=list)
    periodic_payment: Decimal = Decimal("0")
    payments_per_year: int = 12
    total_interest: Decimal = Decimal("0")
    total_principal: Decimal = Decimal("0")
    balloon_year: int | None = None
    balloon_payment: Decimal = Decimal("0")


def periodic_payment(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
) -> Decimal:
    """Level payment that fully amortizes the principal."""
    n = amortization_years * payments_per_year
    if principal <= 0 or n <= 0:
        return Decimal("0")
    if annual_rate == 0:
        return (principal / n).quantize(TWO_PLACES, ROUND_HALF_UP)

    r = annual_rate / payments_per_year
    # PMT = P * [r(1+r)^n] / [(1+r)^n - 1]
    factor = (1 + r) ** n
    payment = principal * (r * factor) / (factor - 1)
    return payment.quantize(TWO_PLACES, ROUND_HALF_UP)


def principal_from_payment(
    payment: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
) -> Decimal:
    """Present value of a level payment stream (inverse of periodic_payment)."""
    n = amortization_years * payments_per_year
    if payment <= 0 or n <= 0:
        return Decimal("0")
    if annual_rate == 0:
        return payment * n

    r = annual_rate / payments_per_year
    return payment * (1 - (1 + r) ** -n) / r


def derive_loan_amount(
    financing: FinancingTerms,
    purchase_price: Decimal,
    year1_noi: Decimal,
) -> Decimal:
    """Size the loan from the financing terms.

    DSCR: year-1 NOI / target DSCR is the maximum annual debt service; the
    periodic share of it is converted to principal with the annuity formula.
    LTV: target LTV * purchase price. FIXED: the given amount.
    """
    kind = financing.type
    if kind in (FinancingType.UNSET, FinancingType.CASH):
        return Decimal("0")

    if (
        financing.amortization_years <= 0
        or financing.payments_per_year <= 0
        or financing.interest_rate < 0
    ):
        return Decimal("0")

    if kind is FinancingType.FIXED:
        return max(financing.loan_amount, Decimal("0"))

    if financing.interest_rate <= 0:
        return Decimal("0")

    if kind is FinancingType.LTV:
        if financing.target_ltv <= 0 or purchase_price <= 0:
            return Decimal("0")
        return (financing.target_ltv * purchase_price).quantize(TWO_PLACES, ROUND_HALF_UP)

    if kind is FinancingType.DSCR:
        if financing.target_dscr <= 0 or year1_noi <= 0:
            return Decimal("0")
        max_annual_debt_service = year1_noi / financing.target_dscr
        payment = max_annual_debt_service / financing.payments_per_year
        principal = principal_from_payment(
            payment,
            financing.interest_rate,
            financing.amortization_years,
            financing.payments_per_year,
        )
        return principal.quantize(TWO_PLACES, ROUND_HALF_UP)

    return Decimal("0")


def amortization_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    amortization_years: int,
    payments_per_year: int = 12,
    hold_years: int | None = None,
    loan_term_years: int = 0,
) -> AmortizationSchedule:
    """Generate full or partial amortization schedule.

    Args:
        principal: Loan amount
        annual_rate: Annual nominal rate (e.g. 0.065 for 6.5%)
        amortization_years: Years over which the payment is amortized
        payments_per_year: Payment frequency
        hold_years: If provided, stop the schedule at the end of this year
        loan_term_years: Maturity; when shorter than both amortization and
            the hold the outstanding balance is paid as a balloon in that
            year. A term ending with the hold leaves the balance to the sale.
    """
    if principal <= 0 or amortization_years <= 0 or payments_per_year <= 0:
        return AmortizationSchedule(payments_per_year=max(payments_per_year, 1))

    pmt = periodic_payment(principal, annual_rate, amortization_years, payments_per_year)
    r = annual_rate / payments_per_year
    total_periods = amortization_years * payments_per_year

    horizon_years = min(amortization_years, hold_years or amortization_years)
    maturity_year = None
    if 0 < loan_term_years < amortization_years and loan_term_years < horizon_years:
        maturity_year = loan_term_years
        horizon_years = loan_term_years
    maturity_period = maturity_year * payments_per_year if maturity_year else None

    payments: list[AmortizationPayment] = []
    balance = principal
    total_interest = Decimal("0")
    total_principal = Decimal("0")
    balloon_payment = Decimal("0")

    for period in range(1, horizon_years * payments_per_year + 1):
        interest = (balance * r).quantize(TWO_PLACES, ROUND_HALF_UP)
        principal_paid = pmt - interest

        # Final amortization payment retires whatever rounding left behind
        if period == total_periods or principal_paid > balance:
            principal_paid = balance
            actual_payment = interest + principal_paid
        else:
            actual_payment = pmt

        if period == maturity_period and balance - principal_paid > 0:
            balloon_payment = balance - principal_paid
            principal_paid = balance
            actual_payment += balloon_payment

        balance -= principal_paid
        total_interest += interest
        total_principal += principal_paid

        payments.append(AmortizationPayment(
            period=period,
            payment=actual_payment,
            principal=principal_paid,
            interest=interest,
            balance=balance,
        ))

    return AmortizationSchedule(
        payments=payments,
        periodic_payment=pmt,
        payments_per_year=payments_per_year,
        total_interest=total_interest,
        total_principal=total_principal,
        balloon_year=maturity_year if balloon_payment > 0 else None,
        balloon_payment=balloon_payment,
    )


def yearly_debt_summary(schedule: AmortizationSchedule, years: int) -> list[DebtYear]:
    """Aggregate the schedule into one DebtYear per projected year.

    Years after the loan is retired (fully amortized or ballooned) are zero.
    """
    totals: dict[int, list[Decimal]] = {}
    balances: dict[int, Decimal] = {}

    for p in schedule.payments:
        year = (p.period - 1) // schedule.payments_per_year + 1
        bucket = totals.setdefault(year, [Decimal("0"), Decimal("0"), Decimal("0")])
        bucket[0] += p.payment
        bucket[1] += p.interest
        bucket[2] += p.principal
        balances[year] = p.balance

    yearly: list[DebtYear] = []
    for year in range(1, years + 1):
        if year not in totals:
            yearly.append(DebtYear(year=year))
            continue
        debt_service, interest, principal = totals[year]
        yearly.append(DebtYear(
            year=year,
            debt_service=debt_service,
            interest=interest,
            principal=principal,
            ending_balance=balances[year],
        ))
    return yearly


def loan_costs_amortization(
    loan_costs: Decimal,
    loan_term_years: int,
    year: int,
) -> Decimal:
    """Straight-line write-off of loan costs over the loan term."""
    if loan_costs <= 0 or loan_term_years <= 0 or year > loan_term_years:
        return Decimal("0")
    return (loan_costs / loan_term_years).quantize(TWO_PLACES, ROUND_HALF_UP)
