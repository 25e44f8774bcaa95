"""Tests for tax calculations."""

import pytest

from rentaltax.domain.entities import CashflowResults, DepreciationResults
from rentaltax.domain.tax import (
    calculate_income_tax,
    calculate_medicare_levy,
    calculate_net_rental_result,
    calculate_rental_pl_results,
    calculate_tax_benefit,
    calculate_tax_impact_results,
    calculate_tax_scenario,
    calculate_total_tax,
)


def make_cashflow(net: float) -> CashflowResults:
    return CashflowResults(
        gross_rental_income=0,
        total_operating_expenses=0,
        interest_expense=0,
        net_cashflow_pre_tax=net,
    )


def make_depreciation(total: float) -> DepreciationResults:
    return DepreciationResults(
        capital_works_deduction=total,
        plant_equipment_deduction=0,
        total_depreciation=total,
    )


class TestIncomeTax:
    """Tests for flat marginal rate tax."""

    def test_positive_income(self):
        assert calculate_income_tax(100000, 0.37) == pytest.approx(37000)

    def test_negative_income_is_floored(self):
        assert calculate_income_tax(-5000, 0.37) == 0

    def test_zero_rate(self):
        assert calculate_income_tax(100000, 0) == 0


class TestMedicareLevy:
    """Tests for Medicare levy."""

    def test_positive_income(self):
        assert calculate_medicare_levy(100000, 0.02) == pytest.approx(2000)

    def test_negative_income_is_floored(self):
        assert calculate_medicare_levy(-1, 0.02) == 0


class TestSimpleHelpers:
    """Tests for the arithmetic helpers."""

    def test_total_tax(self):
        assert calculate_total_tax(37000, 2000) == 39000

    def test_net_rental_result(self):
        assert calculate_net_rental_result(-8300, 12500) == -20800

    def test_tax_benefit_is_saving_when_positive(self):
        assert calculate_tax_benefit(39000, 30888) == 8112

    def test_tax_benefit_is_cost_when_negative(self):
        assert calculate_tax_benefit(39000, 40000) == -1000


class TestTaxScenario:
    """Tests for a single tax scenario."""

    def test_scenario_components(self):
        scenario = calculate_tax_scenario(79200, 0.37, 0.02)

        assert scenario.taxable_income == 79200
        assert scenario.income_tax == pytest.approx(29304)
        assert scenario.medicare_levy == pytest.approx(1584)
        assert scenario.total_tax == pytest.approx(30888)

    def test_negative_income_pays_no_tax(self):
        scenario = calculate_tax_scenario(-20000, 0.37, 0.02)

        assert scenario.taxable_income == -20000
        assert scenario.total_tax == 0


class TestRentalPL:
    """Tests for rental profit and loss."""

    def test_negatively_geared(self):
        result = calculate_rental_pl_results(make_cashflow(-8300), make_depreciation(12500))

        assert result.net_cashflow_pre_tax == -8300
        assert result.total_depreciation == 12500
        assert result.net_rental_result == -20800
        assert result.is_negatively_geared is True

    def test_exactly_zero_is_not_negatively_geared(self):
        result = calculate_rental_pl_results(make_cashflow(5000), make_depreciation(5000))

        assert result.net_rental_result == 0
        assert result.is_negatively_geared is False

    def test_slight_loss_is_negatively_geared(self):
        result = calculate_rental_pl_results(make_cashflow(4999.99), make_depreciation(5000))

        assert result.is_negatively_geared is True

    def test_positively_geared(self):
        result = calculate_rental_pl_results(make_cashflow(20000), make_depreciation(5000))

        assert result.net_rental_result == 15000
        assert result.is_negatively_geared is False


class TestTaxImpact:
    """Tests for the with/without property comparison."""

    def test_worked_example(self):
        """Income $100,000 at 37% + 2% with a $20,800 rental loss."""
        impact = calculate_tax_impact_results(100000, -20800, -8300, 0.37, 0.02)

        assert impact.without_property.total_tax == pytest.approx(39000)
        assert impact.with_property.taxable_income == 79200
        assert impact.with_property.total_tax == pytest.approx(30888)
        assert impact.tax_benefit == pytest.approx(8112)
        assert impact.after_tax_cashflow == pytest.approx(-188)

    def test_after_tax_cashflow_uses_pre_tax_cashflow(self):
        impact = calculate_tax_impact_results(100000, -20800, -8300, 0.37, 0.02)

        assert impact.after_tax_cashflow == pytest.approx(-8300 + impact.tax_benefit)

    def test_loss_larger_than_income_floors_tax(self):
        impact = calculate_tax_impact_results(10000, -30000, -25000, 0.30, 0.02)

        assert impact.with_property.taxable_income == -20000
        assert impact.with_property.total_tax == 0
        assert impact.tax_benefit == pytest.approx(impact.without_property.total_tax)

    def test_positive_rental_result_costs_tax(self):
        impact = calculate_tax_impact_results(100000, 10000, 12000, 0.37, 0.02)

        assert impact.tax_benefit == pytest.approx(-3900)
        assert impact.after_tax_cashflow == pytest.approx(8100)

    def test_zero_rental_result_has_no_benefit(self):
        impact = calculate_tax_impact_results(100000, 0, 0, 0.37, 0.02)

        assert impact.tax_benefit == 0
        assert impact.after_tax_cashflow == 0
