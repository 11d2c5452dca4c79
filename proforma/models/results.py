from dataclasses import dataclass, field
from decimal import Decimal


@dataclass(frozen=True)
class DebtYear:
    year: int
    debt_service: Decimal = Decimal("0")
    interest: Decimal = Decimal("0")
    principal: Decimal = Decimal("0")
    ending_balance: Decimal = Decimal("0")


@dataclass(frozen=True)
class LoanSummary:
    loan_amount: Decimal = Decimal("0")
    loan_costs: Decimal = Decimal("0")
    periodic_payment: Decimal = Decimal("0")
    payments_per_year: int = 0
    annual_debt_service: Decimal = Decimal("0")  # Scheduled, excluding any balloon
    balloon_year: int | None = None
    balloon_payment: Decimal = Decimal("0")


@dataclass
class AnnualCashflow:
    year: int

    # Income
    potential_rental_income: Decimal = Decimal("0")
    vacancy_loss: Decimal = Decimal("0")
    other_income: Decimal = Decimal("0")
    effective_gross_income: Decimal = Decimal("0")
    operating_expenses: Decimal = Decimal("0")
    noi: Decimal = Decimal("0")

    # Debt
    debt_service: Decimal = Decimal("0")
    interest_expense: Decimal = Decimal("0")
    principal_payment: Decimal = Decimal("0")
    before_tax_cashflow: Decimal = Decimal("0")

    # Tax
    depreciation: Decimal = Decimal("0")
    loan_costs_amortization: Decimal = Decimal("0")
    taxable_income: Decimal = Decimal("0")
    taxes: Decimal = Decimal("0")  # Negative = tax savings
    after_tax_cashflow: Decimal = Decimal("0")

    loan_balance: Decimal = Decimal("0")  # End of year


@dataclass
class SaleProceeds:
    # Sale price
    noi_basis: str = ""
    representative_noi: Decimal = Decimal("0")
    exit_cap_rate: Decimal = Decimal("0")
    sale_price: Decimal = Decimal("0")

    selling_costs: Decimal = Decimal("0")
    net_sale_proceeds: Decimal = Decimal("0")

    # Basis
    original_basis: Decimal = Decimal("0")
    accumulated_depreciation: Decimal = Decimal("0")
    adjusted_basis: Decimal = Decimal("0")

    loan_balance: Decimal = Decimal("0")
    before_tax_sale_proceeds: Decimal = Decimal("0")

    # Gain split
    total_gain: Decimal = Decimal("0")
    depreciation_recapture: Decimal = Decimal("0")
    capital_gains: Decimal = Decimal("0")

    # Tax on sale
    capital_gains_tax: Decimal = Decimal("0")
    depreciation_recapture_tax: Decimal = Decimal("0")
    taxes_on_sale: Decimal = Decimal("0")

    after_tax_sale_proceeds: Decimal = Decimal("0")


@dataclass
class ReturnMetrics:
    """IRR / NPV / equity multiple for one cash flow variant."""
    initial_equity: Decimal = Decimal("0")
    irr: Decimal | None = None  # None when no rate solves the series
    npv: Decimal = Decimal("0")
    equity_multiple: Decimal = Decimal("0")
    total_cash_returned: Decimal = Decimal("0")


@dataclass
class ProFormaResults:
    annual_cashflows: list[AnnualCashflow] = field(default_factory=list)
    sale_proceeds: SaleProceeds = field(default_factory=SaleProceeds)
    loan: LoanSummary = field(default_factory=LoanSummary)
    discount_rate: Decimal = Decimal("0")

    # Levered, after-tax headline metrics
    total_equity_invested: Decimal = Decimal("0")
    total_cash_returned: Decimal = Decimal("0")
    net_profit: Decimal = Decimal("0")
    irr: Decimal | None = None
    npv: Decimal = Decimal("0")
    equity_multiple: Decimal = Decimal("0")
    average_cash_on_cash: Decimal = Decimal("0")
    total_tax_savings: Decimal = Decimal("0")

    # Variants
    before_tax: ReturnMetrics = field(default_factory=ReturnMetrics)
    unlevered_after_tax: ReturnMetrics = field(default_factory=ReturnMetrics)
    unlevered_before_tax: ReturnMetrics = field(default_factory=ReturnMetrics)

    # Deal metrics
    year1_noi: Decimal = Decimal("0")
    dscr: Decimal = Decimal("0")
    debt_yield: Decimal = Decimal("0")
    yield_on_cost: Decimal = Decimal("0")
    purchase_cap_rate: Decimal = Decimal("0")
    loan_to_value: Decimal = Decimal("0")
    year1_cash_on_cash: Decimal = Decimal("0")
    total_project_cost: Decimal = Decimal("0")
    payback_year: int | None = None


@dataclass
class SensitivityResult:
    exit_cap_minus_irr: Decimal | None = None
    exit_cap_plus_irr: Decimal | None = None
    rent_growth_minus_irr: Decimal | None = None
    rent_growth_plus_irr: Decimal | None = None
    interest_rate_minus_dscr: Decimal = Decimal("0")
    interest_rate_plus_dscr: Decimal = Decimal("0")
