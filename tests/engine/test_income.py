from dataclasses import replace
from decimal import Decimal

from proforma.engine.income import (
    effective_gross_income,
    expenses_provided,
    noi,
    operating_expenses,
    project_operations,
    rental_growth_rate,
    vacancy_loss,
    value_at,
)
from proforma.models.assumptions import AggregateExpenses, AmountKind, ItemizedExpenses


class TestValueAt:
    def test_one_indexed(self):
        values = (Decimal("1"), Decimal("2"), Decimal("3"))
        assert value_at(values, 1) == Decimal("1")
        assert value_at(values, 3) == Decimal("3")

    def test_missing_years_are_zero(self):
        values = (Decimal("1"),)
        assert value_at(values, 0) == Decimal("0")
        assert value_at(values, 2) == Decimal("0")
        assert value_at((), 1) == Decimal("0")


class TestEffectiveGrossIncome:
    def test_vacancy_loss(self, cash_deal):
        assert vacancy_loss(cash_deal, 1) == Decimal("6000.00")

    def test_egi(self, cash_deal):
        # 120000 * (1 - 0.05)
        assert effective_gross_income(cash_deal, 1) == Decimal("114000")

    def test_other_income_added_after_vacancy(self, cash_deal):
        deal = replace(cash_deal, other_income=(Decimal("5000"),))
        assert effective_gross_income(deal, 1) == Decimal("119000")
        assert effective_gross_income(deal, 2) == Decimal("114000")

    def test_beyond_inputs(self, cash_deal):
        assert effective_gross_income(cash_deal, 6) == Decimal("0")


class TestOperatingExpenses:
    def test_aggregate_dollars(self, cash_deal):
        assert operating_expenses(cash_deal, 1) == Decimal("40000")

    def test_aggregate_percentage_of_egi(self, cash_deal):
        deal = replace(
            cash_deal,
            expenses=AggregateExpenses(kind=AmountKind.PERCENTAGE, amounts=(Decimal("0.40"),)),
        )
        assert operating_expenses(deal, 1) == Decimal("45600.00")

    def test_itemized_sum(self, cash_deal):
        deal = replace(
            cash_deal,
            expenses=ItemizedExpenses(
                property_taxes=(Decimal("15000"),),
                insurance=(Decimal("4000"),),
                maintenance=(Decimal("6000"),),
                management=(Decimal("5700"),),
                utilities=(Decimal("3000"),),
                other=(Decimal("1300"),),
            ),
        )
        assert operating_expenses(deal, 1) == Decimal("35000.00")

    def test_itemized_missing_category_year(self, cash_deal):
        deal = replace(
            cash_deal,
            expenses=ItemizedExpenses(
                property_taxes=(Decimal("15000"), Decimal("15500")),
                insurance=(Decimal("4000"),),
            ),
        )
        assert operating_expenses(deal, 2) == Decimal("15500.00")


class TestNOI:
    def test_noi(self, cash_deal):
        assert noi(cash_deal, 1) == Decimal("74000")

    def test_project_operations(self, cash_deal):
        years = project_operations(cash_deal, 5)
        assert [y.year for y in years] == [1, 2, 3, 4, 5]
        for y in years:
            assert y.noi == y.effective_gross_income - y.operating_expenses
            assert y.effective_gross_income == (
                y.potential_rental_income - y.vacancy_loss + y.other_income
            )

    def test_rental_growth_rate(self, cash_deal):
        deal = replace(cash_deal, rental_income=(Decimal("100000"), Decimal("103000")))
        assert rental_growth_rate(deal, 2) == Decimal("0.03")
        assert rental_growth_rate(deal, 1) == Decimal("0")


class TestExpensesProvided:
    def test_aggregate(self, cash_deal):
        assert expenses_provided(cash_deal, 5)
        assert not expenses_provided(cash_deal, 6)

    def test_itemized_every_used_category(self, cash_deal):
        deal = replace(
            cash_deal,
            expenses=ItemizedExpenses(
                property_taxes=(Decimal("15000"), Decimal("15500")),
                insurance=(Decimal("4000"),),
            ),
        )
        assert expenses_provided(deal, 1)
        assert not expenses_provided(deal, 2)

    def test_itemized_empty(self, cash_deal):
        assert not expenses_provided(replace(cash_deal, expenses=ItemizedExpenses()), 1)
