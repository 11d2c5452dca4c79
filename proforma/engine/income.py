"""Income & expense projection: EGI, operating expenses, NOI.

Pure functions: Decimal in, Decimal out. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP
from typing import Sequence

from proforma.models.assumptions import (
    AggregateExpenses,
    AmountKind,
    DealAssumptions,
    ItemizedExpenses,
)

TWO_PLACES = Decimal("0.01")


@dataclass(frozen=True)
class OperatingYear:
    year: int
    potential_rental_income: Decimal
    vacancy_loss: Decimal
    other_income: Decimal
    effective_gross_income: Decimal
    operating_expenses: Decimal
    noi: Decimal


def value_at(values: Sequence[Decimal], year: int) -> Decimal:
    """Read the 1-indexed year from a per-year sequence; missing years are 0."""
    if year < 1 or year > len(values):
        return Decimal("0")
    return Decimal(values[year - 1])


def vacancy_loss(assumptions: DealAssumptions, year: int) -> Decimal:
    rent = value_at(assumptions.rental_income, year)
    rate = value_at(assumptions.vacancy_rates, year)
    return (rent * rate).quantize(TWO_PLACES, ROUND_HALF_UP)


def effective_gross_income(assumptions: DealAssumptions, year: int) -> Decimal:
    """EGI = rental income * (1 - vacancy) + other income."""
    rent = value_at(assumptions.rental_income, year)
    other = value_at(assumptions.other_income, year)
    return rent - vacancy_loss(assumptions, year) + other


def operating_expenses(assumptions: DealAssumptions, year: int) -> Decimal:
    """Total operating expenses for a year.

    Aggregate mode reads one figure per year, either dollars or a fraction of
    that year's EGI. Itemized mode sums the six dollar categories.
    """
    expenses = assumptions.expenses

    if isinstance(expenses, ItemizedExpenses):
        total = sum((value_at(c, year) for c in expenses.categories), Decimal("0"))
        return total.quantize(TWO_PLACES, ROUND_HALF_UP)

    if isinstance(expenses, AggregateExpenses):
        figure = value_at(expenses.amounts, year)
        if expenses.kind is AmountKind.PERCENTAGE:
            figure = effective_gross_income(assumptions, year) * figure
        return figure.quantize(TWO_PLACES, ROUND_HALF_UP)

    return Decimal("0")


def expenses_provided(assumptions: DealAssumptions, year: int) -> bool:
    """True when every expense input in use carries a figure for the year."""
    expenses = assumptions.expenses
    if isinstance(expenses, ItemizedExpenses):
        used = [c for c in expenses.categories if c]
        return bool(used) and all(len(c) >= year for c in used)
    if isinstance(expenses, AggregateExpenses):
        return len(expenses.amounts) >= year
    return False


def noi(assumptions: DealAssumptions, year: int) -> Decimal:
    """Net Operating Income = EGI - operating expenses."""
    return effective_gross_income(assumptions, year) - operating_expenses(assumptions, year)


def operating_year(assumptions: DealAssumptions, year: int) -> OperatingYear:
    egi = effective_gross_income(assumptions, year)
    opex = operating_expenses(assumptions, year)
    return OperatingYear(
        year=year,
        potential_rental_income=value_at(assumptions.rental_income, year),
        vacancy_loss=vacancy_loss(assumptions, year),
        other_income=value_at(assumptions.other_income, year),
        effective_gross_income=egi,
        operating_expenses=opex,
        noi=egi - opex,
    )


def project_operations(assumptions: DealAssumptions, years: int) -> list[OperatingYear]:
    """Operating statement for years 1..years."""
    return [operating_year(assumptions, year) for year in range(1, years + 1)]


def rental_growth_rate(assumptions: DealAssumptions, year: int) -> Decimal:
    """Trailing growth of rental income into the given year (0 if undefined)."""
    current = value_at(assumptions.rental_income, year)
    prior = value_at(assumptions.rental_income, year - 1)
    if prior <= 0 or current <= 0:
        return Decimal("0")
    return current / prior - 1
