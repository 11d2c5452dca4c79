"""Straight-line depreciation: statutory 27.5yr residential / 39yr nonresidential,
optional mid-month convention, and capital improvements on their own schedules.

Pure functions. No I/O.
"""

from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP

from proforma.models.assumptions import DealAssumptions, PropertyType

TWO_PLACES = Decimal("0.01")

RESIDENTIAL_LIFE = Decimal("27.5")
NONRESIDENTIAL_LIFE = Decimal("39")


@dataclass(frozen=True)
class YearlyDepreciation:
    year: int
    building: Decimal  # Acquisition basis
    improvements: Decimal  # Capital improvements placed in service during the hold
    total: Decimal


def depreciation_life(property_type: PropertyType, override: Decimal = Decimal("0")) -> Decimal:
    """Recovery period in years. An explicit override wins over the statutory life."""
    if override > 0:
        return Decimal(override)
    if property_type is PropertyType.RESIDENTIAL:
        return RESIDENTIAL_LIFE
    return NONRESIDENTIAL_LIFE


def depreciable_basis(assumptions: DealAssumptions) -> Decimal:
    """(Purchase price + acquisition costs) * improvements % / 100. Land is not depreciable."""
    basis = assumptions.original_basis * assumptions.improvements_pct / 100
    return basis.quantize(TWO_PLACES, ROUND_HALF_UP)


def mid_month_factor(placed_in_service_month: int) -> Decimal:
    """Fraction of year 1 in service under the mid-month convention.

    February (month 2) = (12 - 2 + 0.5) / 12 = 0.875.
    """
    return (Decimal("12") - placed_in_service_month + Decimal("0.5")) / 12


def straight_line_depreciation(
    basis: Decimal,
    life: Decimal,
    year: int,
    placed_in_service_month: int = 0,
) -> Decimal:
    """Depreciation for one year of service (1-indexed).

    Full years take basis / life; the fractional last year of a 27.5yr life
    takes half; nothing after the life ends.
    """
    if basis <= 0 or life <= 0 or year < 1:
        return Decimal("0")

    annual = basis / life
    remaining = life - (year - 1)
    if remaining <= 0:
        return Decimal("0")
    factor = min(remaining, Decimal("1"))

    if year == 1 and 1 <= placed_in_service_month <= 12:
        factor = min(factor, mid_month_factor(placed_in_service_month))

    return (annual * factor).quantize(TWO_PLACES, ROUND_HALF_UP)


def compute_yearly_depreciation(
    assumptions: DealAssumptions,
    year: int,
) -> YearlyDepreciation:
    """Total depreciation for a hold year across the acquisition basis and improvements."""
    life = depreciation_life(assumptions.property_type, assumptions.depreciation_years)
    building = straight_line_depreciation(
        depreciable_basis(assumptions), life, year, assumptions.acquisition_month
    )

    improvements = Decimal("0")
    for improvement in assumptions.capital_improvements:
        if improvement.year < 1 or improvement.year > year:
            continue
        recovery = improvement.recovery_years if improvement.recovery_years > 0 else life
        # Improvements follow the acquisition's convention, placed in service in January
        month = 1 if assumptions.acquisition_month else 0
        improvements += straight_line_depreciation(
            improvement.amount, recovery, year - improvement.year + 1, month
        )

    return YearlyDepreciation(
        year=year,
        building=building,
        improvements=improvements,
        total=building + improvements,
    )


def improvements_placed_in_service(assumptions: DealAssumptions, through_year: int) -> Decimal:
    """Cost of capital improvements placed in service in years 1..through_year."""
    return sum(
        (ci.amount for ci in assumptions.capital_improvements if 1 <= ci.year <= through_year),
        Decimal("0"),
    )
