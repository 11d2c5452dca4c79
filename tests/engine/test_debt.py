from decimal import Decimal

from proforma.engine.debt import (
    amortization_schedule,
    derive_loan_amount,
    loan_costs_amortization,
    periodic_payment,
    principal_from_payment,
    yearly_debt_summary,
)
from proforma.models.assumptions import FinancingTerms, FinancingType


class TestPeriodicPayment:
    def test_standard_mortgage(self):
        """$400K loan at 7% for 30 years, monthly."""
        pmt = periodic_payment(Decimal("400000"), Decimal("0.07"), 30, 12)
        assert pmt == Decimal("2661.21")

    def test_zero_rate_is_straight_line(self):
        pmt = periodic_payment(Decimal("500000"), Decimal("0"), 10, 1)
        assert pmt == Decimal("50000.00")

    def test_zero_principal(self):
        assert periodic_payment(Decimal("0"), Decimal("0.07"), 30) == Decimal("0")

    def test_zero_periods(self):
        assert periodic_payment(Decimal("400000"), Decimal("0.07"), 0) == Decimal("0")

    def test_principal_from_payment_inverts(self):
        pmt = periodic_payment(Decimal("400000"), Decimal("0.07"), 30, 12)
        principal = principal_from_payment(pmt, Decimal("0.07"), 30, 12)
        assert abs(principal - Decimal("400000")) < Decimal("1")


class TestAmortizationSchedule:
    def test_payment_count(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert len(schedule.payments) == 360

    def test_partial_schedule(self):
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, hold_years=7
        )
        assert len(schedule.payments) == 84

    def test_first_payment_split(self):
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        first = schedule.payments[0]
        # 400000 * 0.07 / 12 = 2333.33
        assert first.interest == Decimal("2333.33")
        assert first.principal == Decimal("327.88")

    def test_principal_sums_to_loan(self):
        """Full schedule retires exactly the original principal."""
        schedule = amortization_schedule(Decimal("400000"), Decimal("0.07"), 30)
        assert schedule.total_principal == Decimal("400000")
        assert schedule.payments[-1].balance == Decimal("0")

    def test_balance_plus_principal_paid_is_loan(self):
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, hold_years=5
        )
        assert schedule.total_principal + schedule.payments[-1].balance == Decimal("400000")

    def test_payment_is_interest_plus_principal(self):
        schedule = amortization_schedule(Decimal("250000"), Decimal("0.055"), 15, 4)
        for p in schedule.payments:
            assert p.payment == p.interest + p.principal

    def test_zero_rate_annual(self):
        schedule = amortization_schedule(Decimal("500000"), Decimal("0"), 10, 1)
        assert len(schedule.payments) == 10
        for p in schedule.payments:
            assert p.principal == Decimal("50000.00")
            assert p.interest == Decimal("0.00")
        assert schedule.payments[-1].balance == Decimal("0")

    def test_balloon_at_maturity(self):
        """7-year term on a 30-year amortization: balance due in year 7."""
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, 12,
            hold_years=10, loan_term_years=7,
        )
        assert len(schedule.payments) == 84
        assert schedule.balloon_year == 7
        assert schedule.balloon_payment > Decimal("300000")
        assert schedule.payments[-1].balance == Decimal("0")
        assert schedule.payments[-1].payment == schedule.periodic_payment + schedule.balloon_payment
        assert schedule.total_principal == Decimal("400000")

    def test_no_balloon_when_sold_before_maturity(self):
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, 12,
            hold_years=5, loan_term_years=10,
        )
        assert schedule.balloon_year is None
        assert schedule.balloon_payment == Decimal("0")
        assert len(schedule.payments) == 60

    def test_no_balloon_when_term_equals_hold(self):
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, 12,
            hold_years=7, loan_term_years=7,
        )
        assert schedule.balloon_year is None
        assert schedule.balloon_payment == Decimal("0")
        assert len(schedule.payments) == 84
        assert schedule.payments[-1].payment == schedule.periodic_payment
        assert schedule.payments[-1].balance > Decimal("300000")

    def test_no_loan(self):
        schedule = amortization_schedule(Decimal("0"), Decimal("0.07"), 30)
        assert schedule.payments == []


class TestYearlyDebtSummary:
    def test_one_row_per_year(self):
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, hold_years=7
        )
        yearly = yearly_debt_summary(schedule, 7)
        assert [y.year for y in yearly] == list(range(1, 8))

    def test_yearly_totals_match(self):
        schedule = amortization_schedule(
            Decimal("400000"), Decimal("0.07"), 30, hold_years=7
        )
        yearly = yearly_debt_summary(schedule, 7)
        assert yearly[0].debt_service == sum(p.payment for p in schedule.payments[:12])
        assert yearly[0].interest + yearly[0].principal == yearly[0].debt_service
        assert yearly[6].ending_balance == schedule.payments[-1].balance

    def test_years_after_payoff_are_zero(self):
        schedule = amortization_schedule(Decimal("500000"), Decimal("0"), 10, 1)
        yearly = yearly_debt_summary(schedule, 12)
        assert yearly[9].ending_balance == Decimal("0")
        assert yearly[10].debt_service == Decimal("0")
        assert yearly[11].principal == Decimal("0")

    def test_cash_deal_all_zero(self):
        yearly = yearly_debt_summary(amortization_schedule(Decimal("0"), Decimal("0"), 0), 3)
        assert len(yearly) == 3
        assert all(y.debt_service == 0 and y.ending_balance == 0 for y in yearly)


class TestDeriveLoanAmount:
    PRICE = Decimal("1000000")
    NOI = Decimal("74000")

    def _terms(self, **kwargs) -> FinancingTerms:
        base = dict(
            interest_rate=Decimal("0.065"),
            amortization_years=30,
            payments_per_year=12,
        )
        base.update(kwargs)
        return FinancingTerms(**base)

    def test_cash(self):
        assert derive_loan_amount(self._terms(type=FinancingType.CASH), self.PRICE, self.NOI) == 0

    def test_unset_is_cash(self):
        assert derive_loan_amount(self._terms(), self.PRICE, self.NOI) == 0

    def test_fixed(self):
        terms = self._terms(type=FinancingType.FIXED, loan_amount=Decimal("750000"))
        assert derive_loan_amount(terms, self.PRICE, self.NOI) == Decimal("750000")

    def test_fixed_zero_rate_allowed(self):
        terms = self._terms(
            type=FinancingType.FIXED, loan_amount=Decimal("500000"), interest_rate=Decimal("0")
        )
        assert derive_loan_amount(terms, self.PRICE, self.NOI) == Decimal("500000")

    def test_ltv(self):
        terms = self._terms(type=FinancingType.LTV, target_ltv=Decimal("0.75"))
        assert derive_loan_amount(terms, self.PRICE, self.NOI) == Decimal("750000.00")

    def test_ltv_needs_positive_rate(self):
        terms = self._terms(
            type=FinancingType.LTV, target_ltv=Decimal("0.75"), interest_rate=Decimal("0")
        )
        assert derive_loan_amount(terms, self.PRICE, self.NOI) == 0

    def test_dscr_sizes_to_target_coverage(self):
        terms = self._terms(
            type=FinancingType.DSCR, target_dscr=Decimal("1.25"), interest_rate=Decimal("0.06")
        )
        loan = derive_loan_amount(terms, self.PRICE, self.NOI)
        assert Decimal("0") < loan < self.PRICE
        annual = periodic_payment(loan, Decimal("0.06"), 30, 12) * 12
        # 74000 / 1.25 = 59200 of annual debt service
        assert abs(annual - Decimal("59200")) < Decimal("1")

    def test_dscr_with_no_noi(self):
        terms = self._terms(type=FinancingType.DSCR, target_dscr=Decimal("1.25"))
        assert derive_loan_amount(terms, self.PRICE, Decimal("0")) == 0

    def test_invalid_terms_size_to_zero(self):
        fixed = dict(type=FinancingType.FIXED, loan_amount=Decimal("750000"))
        assert derive_loan_amount(self._terms(amortization_years=0, **fixed), self.PRICE, self.NOI) == 0
        assert derive_loan_amount(self._terms(payments_per_year=0, **fixed), self.PRICE, self.NOI) == 0
        assert derive_loan_amount(
            self._terms(interest_rate=Decimal("-0.01"), **fixed), self.PRICE, self.NOI
        ) == 0


class TestLoanCostsAmortization:
    def test_straight_line_over_term(self):
        assert loan_costs_amortization(Decimal("7500"), 10, 1) == Decimal("750.00")
        assert loan_costs_amortization(Decimal("7500"), 10, 10) == Decimal("750.00")

    def test_nothing_after_term(self):
        assert loan_costs_amortization(Decimal("7500"), 10, 11) == Decimal("0")

    def test_no_costs(self):
        assert loan_costs_amortization(Decimal("0"), 10, 1) == Decimal("0")
