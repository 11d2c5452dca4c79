"""IRR, NPV and equity multiple over an annual cash flow vector.

IRR uses scipy. Pure functions. No I/O.
"""

import math
from decimal import Decimal, ROUND_HALF_UP

from scipy.optimize import brentq, newton

from proforma.config import settings

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")


def has_sign_change(cash_flows: list[Decimal]) -> bool:
    return any(cf > 0 for cf in cash_flows) and any(cf < 0 for cf in cash_flows)


def compute_irr(cash_flows: list[Decimal]) -> Decimal | None:
    """Compute IRR from a vector of annual cash flows.

    cash_flows[0] is the initial equity (negative); the last entry includes
    sale proceeds. Returns None when no rate zeroes NPV: fewer than two flows,
    no sign change, or the solver does not converge.

    Brent's method over the configured bracket; when the bracket does not
    straddle a root, a secant/Newton search from the initial guess.
    """
    if not cash_flows or len(cash_flows) < 2:
        return None
    if not has_sign_change(cash_flows):
        return None

    # Convert to float for scipy
    cf_float = [float(cf) for cf in cash_flows]

    def npv(rate: float) -> float:
        return sum(cf / (1 + rate) ** t for t, cf in enumerate(cf_float))

    lower, upper = settings.irr_lower_bound, settings.irr_upper_bound
    try:
        if npv(lower) * npv(upper) < 0:
            irr = brentq(
                npv, lower, upper,
                xtol=settings.irr_tolerance, maxiter=settings.irr_max_iterations,
            )
        else:
            irr = newton(
                npv, settings.irr_initial_guess,
                tol=settings.irr_tolerance, maxiter=settings.irr_max_iterations,
            )
    except (ValueError, RuntimeError, OverflowError, ZeroDivisionError):
        return None

    irr = float(irr)
    if not math.isfinite(irr) or irr <= -1:
        return None
    return Decimal(str(irr)).quantize(FOUR_PLACES, ROUND_HALF_UP)


def compute_npv(cash_flows: list[Decimal], discount_rate: Decimal) -> Decimal:
    """NPV with cash_flows[0] at t=0. A rate at or below -100% yields 0."""
    growth = 1 + discount_rate
    if growth <= 0:
        return Decimal("0")
    total = sum(
        (cf / growth ** t for t, cf in enumerate(cash_flows)),
        Decimal("0"),
    )
    return total.quantize(TWO_PLACES, ROUND_HALF_UP)


def compute_equity_multiple(
    total_cash_returned: Decimal, total_cash_invested: Decimal
) -> Decimal:
    """Equity multiple = total cash out / total cash in."""
    if total_cash_invested == 0:
        return Decimal("0")
    return (total_cash_returned / total_cash_invested).quantize(FOUR_PLACES, ROUND_HALF_UP)


def payback_year(cash_flows: list[Decimal]) -> int | None:
    """First year in which cumulative cash flow turns non-negative (simple payback)."""
    cumulative = Decimal("0")
    for t, cf in enumerate(cash_flows):
        cumulative += cf
        if t > 0 and cumulative >= 0:
            return t
    return None
