"""Pydantic schemas for API request/response models."""

from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from proforma.models.assumptions import (
    AggregateExpenses,
    Amount,
    AmountKind,
    CapitalImprovement,
    DealAssumptions,
    DispositionPriceType,
    DispositionTerms,
    FinancingTerms,
    FinancingType,
    ItemizedExpenses,
    PropertyType,
    SaleNOIBasis,
    TaxableIncomeBasis,
)


# ---- Request schemas ----

class AmountIn(BaseModel):
    kind: AmountKind = AmountKind.DOLLAR
    value: Decimal = Decimal("0")

    def to_domain(self) -> Amount:
        return Amount(kind=self.kind, value=self.value)


class AggregateExpensesIn(BaseModel):
    mode: Literal["aggregate"] = "aggregate"
    kind: AmountKind = AmountKind.DOLLAR
    amounts: list[Decimal] = []

    def to_domain(self) -> AggregateExpenses:
        return AggregateExpenses(kind=self.kind, amounts=tuple(self.amounts))


class ItemizedExpensesIn(BaseModel):
    mode: Literal["itemized"]
    property_taxes: list[Decimal] = []
    insurance: list[Decimal] = []
    maintenance: list[Decimal] = []
    management: list[Decimal] = []
    utilities: list[Decimal] = []
    other: list[Decimal] = []

    def to_domain(self) -> ItemizedExpenses:
        return ItemizedExpenses(
            property_taxes=tuple(self.property_taxes),
            insurance=tuple(self.insurance),
            maintenance=tuple(self.maintenance),
            management=tuple(self.management),
            utilities=tuple(self.utilities),
            other=tuple(self.other),
        )


class FinancingIn(BaseModel):
    type: FinancingType = FinancingType.UNSET
    loan_amount: Decimal = Decimal("0")
    interest_rate: Decimal = Decimal("0")
    amortization_years: int = 0
    loan_term_years: int = 0
    payments_per_year: int = 0
    loan_costs: AmountIn = Field(default_factory=AmountIn)
    target_dscr: Decimal = Decimal("0")
    target_ltv: Decimal = Decimal("0")

    def to_domain(self) -> FinancingTerms:
        return FinancingTerms(
            type=self.type,
            loan_amount=self.loan_amount,
            interest_rate=self.interest_rate,
            amortization_years=self.amortization_years,
            loan_term_years=self.loan_term_years,
            payments_per_year=self.payments_per_year,
            loan_costs=self.loan_costs.to_domain(),
            target_dscr=self.target_dscr,
            target_ltv=self.target_ltv,
        )


class CapitalImprovementIn(BaseModel):
    year: int
    amount: Decimal
    description: str = ""
    recovery_years: Decimal = Decimal("0")


class DispositionIn(BaseModel):
    price_type: DispositionPriceType = DispositionPriceType.UNSET
    price: Decimal = Decimal("0")
    cap_rate: Decimal = Decimal("0")
    noi_basis: SaleNOIBasis = SaleNOIBasis.TERMINAL_YEAR
    selling_costs: AmountIn = Field(default_factory=AmountIn)

    def to_domain(self) -> DispositionTerms:
        return DispositionTerms(
            price_type=self.price_type,
            price=self.price,
            cap_rate=self.cap_rate,
            noi_basis=self.noi_basis,
            selling_costs=self.selling_costs.to_domain(),
        )


class AssumptionsIn(BaseModel):
    """Deal assumptions. Every field is optional; unset numbers are 0."""

    purchase_price: Decimal = Decimal("0")
    acquisition_costs: AmountIn = Field(default_factory=AmountIn)
    hold_years: int = 0

    rental_income: list[Decimal] = []
    other_income: list[Decimal] = []
    vacancy_rates: list[Decimal] = []
    expenses: AggregateExpensesIn | ItemizedExpensesIn = Field(
        default_factory=AggregateExpensesIn, discriminator="mode"
    )

    financing: FinancingIn = Field(default_factory=FinancingIn)

    property_type: PropertyType = PropertyType.UNSET
    depreciation_years: Decimal = Decimal("0")
    land_pct: Decimal = Decimal("0")
    improvements_pct: Decimal = Decimal("0")
    acquisition_month: int = 0
    capital_improvements: list[CapitalImprovementIn] = []
    ordinary_income_tax_rate: Decimal = Decimal("0")
    capital_gains_tax_rate: Decimal = Decimal("0")
    depreciation_recapture_rate: Decimal = Decimal("0")
    taxable_income_basis: TaxableIncomeBasis = TaxableIncomeBasis.CASH_FLOW

    disposition: DispositionIn = Field(default_factory=DispositionIn)
    stabilized_year: int = 1

    def to_domain(self) -> DealAssumptions:
        return DealAssumptions(
            purchase_price=self.purchase_price,
            acquisition_costs=self.acquisition_costs.to_domain(),
            hold_years=self.hold_years,
            rental_income=tuple(self.rental_income),
            other_income=tuple(self.other_income),
            vacancy_rates=tuple(self.vacancy_rates),
            expenses=self.expenses.to_domain(),
            financing=self.financing.to_domain(),
            property_type=self.property_type,
            depreciation_years=self.depreciation_years,
            land_pct=self.land_pct,
            improvements_pct=self.improvements_pct,
            acquisition_month=self.acquisition_month,
            capital_improvements=tuple(
                CapitalImprovement(
                    year=ci.year,
                    amount=ci.amount,
                    description=ci.description,
                    recovery_years=ci.recovery_years,
                )
                for ci in self.capital_improvements
            ),
            ordinary_income_tax_rate=self.ordinary_income_tax_rate,
            capital_gains_tax_rate=self.capital_gains_tax_rate,
            depreciation_recapture_rate=self.depreciation_recapture_rate,
            taxable_income_basis=self.taxable_income_basis,
            disposition=self.disposition.to_domain(),
            stabilized_year=self.stabilized_year,
        )


class ProFormaRequest(BaseModel):
    assumptions: AssumptionsIn
    discount_rate: Decimal | None = Field(None, description="NPV discount rate; server default if omitted")


# ---- Response schemas ----

class _FromEngine(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class AnnualCashflowResponse(_FromEngine):
    year: int
    potential_rental_income: Decimal
    vacancy_loss: Decimal
    other_income: Decimal
    effective_gross_income: Decimal
    operating_expenses: Decimal
    noi: Decimal
    debt_service: Decimal
    interest_expense: Decimal
    principal_payment: Decimal
    before_tax_cashflow: Decimal
    depreciation: Decimal
    loan_costs_amortization: Decimal
    taxable_income: Decimal
    taxes: Decimal
    after_tax_cashflow: Decimal
    loan_balance: Decimal


class SaleProceedsResponse(_FromEngine):
    noi_basis: str
    representative_noi: Decimal
    exit_cap_rate: Decimal
    sale_price: Decimal
    selling_costs: Decimal
    net_sale_proceeds: Decimal
    original_basis: Decimal
    accumulated_depreciation: Decimal
    adjusted_basis: Decimal
    loan_balance: Decimal
    before_tax_sale_proceeds: Decimal
    total_gain: Decimal
    depreciation_recapture: Decimal
    capital_gains: Decimal
    capital_gains_tax: Decimal
    depreciation_recapture_tax: Decimal
    taxes_on_sale: Decimal
    after_tax_sale_proceeds: Decimal


class LoanSummaryResponse(_FromEngine):
    loan_amount: Decimal
    loan_costs: Decimal
    periodic_payment: Decimal
    payments_per_year: int
    annual_debt_service: Decimal
    balloon_year: int | None = None
    balloon_payment: Decimal


class ReturnMetricsResponse(_FromEngine):
    initial_equity: Decimal
    irr: Decimal | None = None
    npv: Decimal
    equity_multiple: Decimal
    total_cash_returned: Decimal


class ProFormaResponse(_FromEngine):
    annual_cashflows: list[AnnualCashflowResponse]
    sale_proceeds: SaleProceedsResponse
    loan: LoanSummaryResponse
    discount_rate: Decimal

    total_equity_invested: Decimal
    total_cash_returned: Decimal
    net_profit: Decimal
    irr: Decimal | None = None
    npv: Decimal
    equity_multiple: Decimal
    average_cash_on_cash: Decimal
    total_tax_savings: Decimal

    before_tax: ReturnMetricsResponse
    unlevered_after_tax: ReturnMetricsResponse
    unlevered_before_tax: ReturnMetricsResponse

    year1_noi: Decimal
    dscr: Decimal
    debt_yield: Decimal
    yield_on_cost: Decimal
    purchase_cap_rate: Decimal
    loan_to_value: Decimal
    year1_cash_on_cash: Decimal
    total_project_cost: Decimal
    payback_year: int | None = None

    warnings: list[str] = []


class SensitivityResponse(_FromEngine):
    exit_cap_minus_irr: Decimal | None = None
    exit_cap_plus_irr: Decimal | None = None
    rent_growth_minus_irr: Decimal | None = None
    rent_growth_plus_irr: Decimal | None = None
    interest_rate_minus_dscr: Decimal
    interest_rate_plus_dscr: Decimal


class ValidationResponse(BaseModel):
    valid: bool
    errors: list[str]
