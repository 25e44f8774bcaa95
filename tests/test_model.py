"""Tests for the property model service."""

import dataclasses

import pytest

from rentaltax.domain.constants import TaxConfig, ValidationLimits
from rentaltax.domain.errors import ValidationError
from rentaltax.domain.model import PropertyModelService


class TestRecompute:
    """Tests for PropertyModelService.recompute."""

    def test_worked_example(self, model_service, sample_inputs):
        """Test the full pipeline against the hand-calculated example."""
        results = model_service.recompute(sample_inputs)

        assert results.cashflow.gross_rental_income == pytest.approx(27500)
        assert results.cashflow.total_operating_expenses == pytest.approx(7000)
        assert results.cashflow.interest_expense == pytest.approx(28800)
        assert results.cashflow.net_cashflow_pre_tax == pytest.approx(-8300)

        assert results.depreciation.capital_works_deduction == pytest.approx(7500)
        assert results.depreciation.plant_equipment_deduction == pytest.approx(5000)
        assert results.depreciation.total_depreciation == pytest.approx(12500)

        assert results.rental_pl.net_rental_result == pytest.approx(-20800)
        assert results.rental_pl.is_negatively_geared is True

        assert results.tax_impact.without_property.total_tax == pytest.approx(39000)
        assert results.tax_impact.with_property.total_tax == pytest.approx(30888)
        assert results.tax_impact.tax_benefit == pytest.approx(8112)
        assert results.tax_impact.after_tax_cashflow == pytest.approx(-188)

    def test_is_idempotent(self, model_service, sample_inputs):
        assert model_service.recompute(sample_inputs) == model_service.recompute(sample_inputs)

    def test_rental_pl_carries_upstream_values(self, sample_results):
        assert sample_results.rental_pl.net_cashflow_pre_tax == sample_results.cashflow.net_cashflow_pre_tax
        assert (
            sample_results.rental_pl.total_depreciation
            == sample_results.depreciation.total_depreciation
        )

    def test_half_ownership_halves_property_figures(self, model_service, sample_inputs):
        half = model_service.update_inputs(sample_inputs, "personal", ownership_percentage=50)

        full_results = model_service.recompute(sample_inputs)
        half_results = model_service.recompute(half)

        assert half_results.cashflow.net_cashflow_pre_tax == pytest.approx(
            full_results.cashflow.net_cashflow_pre_tax / 2
        )
        assert half_results.depreciation.total_depreciation == pytest.approx(
            full_results.depreciation.total_depreciation / 2
        )
        assert half_results.rental_pl.net_rental_result == pytest.approx(-10400)
        # Base income is personal and never scaled
        assert half_results.tax_impact.without_property.taxable_income == 100000

    def test_zero_ownership_has_no_property_effect(self, model_service, sample_inputs):
        none_owned = model_service.update_inputs(sample_inputs, "personal", ownership_percentage=0)
        results = model_service.recompute(none_owned)

        assert results.rental_pl.net_rental_result == 0
        assert results.rental_pl.is_negatively_geared is False
        assert results.tax_impact.tax_benefit == 0

    def test_positively_geared_property(self, model_service, sample_inputs):
        inputs = model_service.update_inputs(sample_inputs, "rental_income", weekly_rent=1200)
        results = model_service.recompute(inputs)

        assert results.rental_pl.net_rental_result > 0
        assert results.rental_pl.is_negatively_geared is False
        assert results.tax_impact.tax_benefit < 0

    def test_uses_configured_rates(self, sample_inputs):
        service = PropertyModelService(config=TaxConfig(capital_works_rate=0.04))
        results = service.recompute(sample_inputs)

        assert results.depreciation.capital_works_deduction == pytest.approx(12000)

    def test_does_not_validate(self, model_service, sample_inputs):
        """Out of range inputs still produce numbers."""
        inputs = model_service.update_inputs(sample_inputs, "personal", ownership_percentage=150)
        results = model_service.recompute(inputs)

        assert results.cashflow.gross_rental_income == pytest.approx(27500 * 1.5)


class TestEvaluate:
    """Tests for PropertyModelService.evaluate."""

    def test_valid_inputs_without_warnings(self, model_service, sample_inputs):
        evaluation = model_service.evaluate(sample_inputs)

        assert evaluation.validation.is_valid is True
        assert evaluation.validation.errors == ()
        assert evaluation.warnings == ()
        assert evaluation.inputs is sample_inputs
        assert evaluation.results == model_service.recompute(sample_inputs)

    def test_collects_input_and_result_warnings(self, model_service, sample_inputs):
        inputs = model_service.update_inputs(
            sample_inputs, "property_purchase", loan_amount=700000
        )
        inputs = model_service.update_inputs(
            inputs, "depreciation", construction_value=0, plant_equipment_annual=0
        )
        evaluation = model_service.evaluate(inputs)

        messages = [w.message for w in evaluation.warnings]
        assert "Loan amount exceeds purchase price" in messages
        assert "No depreciation claimed - consider getting a quantity surveyor report" in messages
        assert evaluation.validation.is_valid is True

    def test_high_gearing_warning(self, model_service, sample_inputs):
        inputs = model_service.update_inputs(sample_inputs, "personal", base_taxable_income=30000)
        evaluation = model_service.evaluate(inputs)

        fields = [w.field for w in evaluation.warnings]
        assert "rentalPL.netRentalResult" in fields

    def test_invalid_inputs_still_have_results(self, model_service, sample_inputs):
        inputs = model_service.update_inputs(sample_inputs, "rental_income", weekly_rent=-10)
        evaluation = model_service.evaluate(inputs)

        assert evaluation.validation.is_valid is False
        assert evaluation.results.cashflow.gross_rental_income < 0


class TestLoanHelpers:
    """Tests for loan comparison and milestones through the service."""

    def test_compare_loans_uses_full_loan(self, model_service, sample_inputs):
        half = model_service.update_inputs(sample_inputs, "personal", ownership_percentage=50)

        assert model_service.compare_loans(half) == model_service.compare_loans(sample_inputs)
        assert model_service.compare_loans(sample_inputs).monthly_io == pytest.approx(2400)

    def test_amortization_milestones(self, model_service, sample_inputs):
        milestones = model_service.amortization_milestones(sample_inputs)

        assert [m.year for m in milestones] == [1, 5, 10, 15, 20, 25, 30]


class TestUpdateInputs:
    """Tests for PropertyModelService.update_inputs."""

    def test_returns_new_snapshot(self, model_service, sample_inputs):
        updated = model_service.update_inputs(sample_inputs, "rental_income", weekly_rent=600)

        assert updated.rental_income.weekly_rent == 600
        assert sample_inputs.rental_income.weekly_rent == 550
        assert updated.personal is sample_inputs.personal

    def test_multiple_fields(self, model_service, sample_inputs):
        updated = model_service.update_inputs(
            sample_inputs, "property_purchase", interest_rate=0.055, is_interest_only=False
        )

        assert updated.property_purchase.interest_rate == 0.055
        assert updated.property_purchase.is_interest_only is False
        assert updated.property_purchase.loan_amount == 480000

    def test_unknown_section(self, model_service, sample_inputs):
        with pytest.raises(ValidationError, match="Unknown input section"):
            model_service.update_inputs(sample_inputs, "mortgage", loan_amount=1)

    def test_unknown_field(self, model_service, sample_inputs):
        with pytest.raises(ValidationError, match="weekly_rnt"):
            model_service.update_inputs(sample_inputs, "rental_income", weekly_rnt=600)

    def test_snapshot_is_frozen(self, sample_inputs):
        with pytest.raises(dataclasses.FrozenInstanceError):
            sample_inputs.rental_income.weekly_rent = 600



class TestRequireValid:
    """Tests for PropertyModelService.require_valid."""

    def test_valid(self, model_service, sample_inputs):
        assert model_service.require_valid(sample_inputs).is_valid is True

    def test_invalid_raises_with_issues(self, model_service, sample_inputs):
        inputs = model_service.update_inputs(sample_inputs, "personal", ownership_percentage=150)

        with pytest.raises(ValidationError) as excinfo:
            model_service.require_valid(inputs)

        assert [issue.field for issue in excinfo.value.issues] == ["personal.ownershipPercentage"]

    def test_uses_service_limits(self, sample_inputs):
        service = PropertyModelService(limits=ValidationLimits(max_weekly_rent=500))

        with pytest.raises(ValidationError, match="rentalIncome.weeklyRent"):
            service.require_valid(sample_inputs)


def test_evaluate_includes_advice(model_service, sample_inputs):
    evaluation = model_service.evaluate(sample_inputs)

    assert evaluation.advice[0].title == "Negatively Geared Property"
    assert len(evaluation.advice) == 4


class TestCompare:
    """Tests for PropertyModelService.compare."""

    def test_same_inputs(self, model_service, sample_inputs):
        rows = model_service.compare(sample_inputs, sample_inputs)

        assert [row.label for row in rows] == [
            "Net Cashflow (Pre-Tax)",
            "Net Rental Result",
            "Tax Benefit/Cost",
            "After-Tax Cashflow",
        ]
        assert [row.first for row in rows] == pytest.approx([-8300, -20800, 8112, -188])
        assert all(row.difference == 0 for row in rows)

    def test_difference_is_second_minus_first(self, model_service, sample_inputs):
        higher_rent = model_service.update_inputs(sample_inputs, "rental_income", weekly_rent=650)

        rows = model_service.compare(sample_inputs, higher_rent)

        # 100 more per week over 50 rented weeks
        assert rows[0].second == pytest.approx(-3300)
        assert rows[0].difference == pytest.approx(5000)
        assert rows[1].difference == pytest.approx(5000)
        assert rows[2].difference < 0
