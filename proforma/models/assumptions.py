from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

MAX_HOLD_YEARS = 30


class AmountKind(Enum):
    DOLLAR = "dollar"
    PERCENTAGE = "percentage"


class FinancingType(Enum):
    UNSET = ""
    CASH = "cash"
    FIXED = "fixed"  # Loan amount given directly
    DSCR = "dscr"  # Sized to a target debt service coverage ratio
    LTV = "ltv"  # Sized to a target loan-to-value


class PropertyType(Enum):
    UNSET = ""
    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    INDUSTRIAL = "industrial"


class DispositionPriceType(Enum):
    UNSET = ""
    DOLLAR = "dollar"
    CAP_RATE = "caprate"


class SaleNOIBasis(Enum):
    """Which year's NOI is capitalized into a cap-rate sale price."""
    TERMINAL_YEAR = "terminal_year"
    FORWARD_YEAR = "forward_year"  # Year N+1, what a buyer underwrites
    STABILIZED_YEAR = "stabilized_year"


class TaxableIncomeBasis(Enum):
    CASH_FLOW = "cash_flow"  # Before-tax cash flow - depreciation
    INTEREST_DEDUCTION = "interest_deduction"  # NOI - interest - depreciation - loan cost amortization


@dataclass(frozen=True)
class Amount:
    """A dollar figure or a fraction of some base (0.06 = 6%)."""
    kind: AmountKind = AmountKind.DOLLAR
    value: Decimal = Decimal("0")

    def resolve(self, base: Decimal) -> Decimal:
        if self.kind is AmountKind.PERCENTAGE:
            return self.value * base
        return self.value

    @classmethod
    def dollars(cls, value: Decimal) -> "Amount":
        return cls(AmountKind.DOLLAR, value)

    @classmethod
    def percent(cls, value: Decimal) -> "Amount":
        return cls(AmountKind.PERCENTAGE, value)


@dataclass(frozen=True)
class AggregateExpenses:
    """One operating expense figure per year: dollars, or a fraction of EGI."""
    kind: AmountKind = AmountKind.DOLLAR
    amounts: tuple[Decimal, ...] = ()


@dataclass(frozen=True)
class ItemizedExpenses:
    """Per-year dollar amounts by category."""
    property_taxes: tuple[Decimal, ...] = ()
    insurance: tuple[Decimal, ...] = ()
    maintenance: tuple[Decimal, ...] = ()
    management: tuple[Decimal, ...] = ()
    utilities: tuple[Decimal, ...] = ()
    other: tuple[Decimal, ...] = ()

    @property
    def categories(self) -> tuple[tuple[Decimal, ...], ...]:
        return (
            self.property_taxes,
            self.insurance,
            self.maintenance,
            self.management,
            self.utilities,
            self.other,
        )


ExpenseAssumptions = AggregateExpenses | ItemizedExpenses


@dataclass(frozen=True)
class FinancingTerms:
    type: FinancingType = FinancingType.UNSET
    loan_amount: Decimal = Decimal("0")  # Used when type is FIXED
    interest_rate: Decimal = Decimal("0")  # Annual nominal
    amortization_years: int = 0
    loan_term_years: int = 0  # 0 = same as amortization (no balloon)
    payments_per_year: int = 0  # 1, 2, 4, 12
    loan_costs: Amount = field(default_factory=Amount)  # Percentage is of the loan amount
    target_dscr: Decimal = Decimal("0")
    target_ltv: Decimal = Decimal("0")  # Fraction of purchase price


@dataclass(frozen=True)
class CapitalImprovement:
    year: int  # Year placed in service
    amount: Decimal
    description: str = ""
    recovery_years: Decimal = Decimal("0")  # 0 = property's depreciation life


@dataclass(frozen=True)
class DispositionTerms:
    price_type: DispositionPriceType = DispositionPriceType.UNSET
    price: Decimal = Decimal("0")
    cap_rate: Decimal = Decimal("0")
    noi_basis: SaleNOIBasis = SaleNOIBasis.TERMINAL_YEAR
    selling_costs: Amount = field(default_factory=Amount)  # Percentage is of the sale price


@dataclass(frozen=True)
class DealAssumptions:
    # Acquisition
    purchase_price: Decimal = Decimal("0")
    acquisition_costs: Amount = field(default_factory=Amount)  # Percentage is of the purchase price
    hold_years: int = 0

    # Income (index 0 = year 1)
    rental_income: tuple[Decimal, ...] = ()
    other_income: tuple[Decimal, ...] = ()
    vacancy_rates: tuple[Decimal, ...] = ()  # Fraction of rental income lost

    # Expenses
    expenses: ExpenseAssumptions = field(default_factory=AggregateExpenses)

    # Financing
    financing: FinancingTerms = field(default_factory=FinancingTerms)

    # Tax & depreciation
    property_type: PropertyType = PropertyType.UNSET
    depreciation_years: Decimal = Decimal("0")  # 0 = statutory life for property_type
    land_pct: Decimal = Decimal("0")  # 0-100
    improvements_pct: Decimal = Decimal("0")  # 0-100
    acquisition_month: int = 0  # 1-12 applies mid-month convention; 0 = full first year
    capital_improvements: tuple[CapitalImprovement, ...] = ()
    ordinary_income_tax_rate: Decimal = Decimal("0")
    capital_gains_tax_rate: Decimal = Decimal("0")
    depreciation_recapture_rate: Decimal = Decimal("0")
    taxable_income_basis: TaxableIncomeBasis = TaxableIncomeBasis.CASH_FLOW

    # Disposition
    disposition: DispositionTerms = field(default_factory=DispositionTerms)
    stabilized_year: int = 1

    @property
    def hold_period(self) -> int:
        """Hold years clamped to the supported 1-30 range."""
        return min(max(self.hold_years, 1), MAX_HOLD_YEARS)

    @property
    def acquisition_cost_amount(self) -> Decimal:
        return self.acquisition_costs.resolve(self.purchase_price)

    @property
    def original_basis(self) -> Decimal:
        """Cost basis = purchase price + acquisition costs."""
        return self.purchase_price + self.acquisition_cost_amount
