"""Tests for JSON serialization of inputs, results and scenarios."""

import json
import math
from datetime import datetime, UTC

import pytest

from rentaltax.domain.entities import Scenario
from rentaltax.domain.errors import ValidationError
from rentaltax.domain.serialization import (
    dumps_inputs,
    dumps_results,
    inputs_from_dict,
    inputs_to_dict,
    loads_inputs,
    results_from_dict,
    results_to_dict,
    scenario_from_dict,
    scenario_to_dict,
    to_camel,
)


class TestKeys:
    """Tests for JSON key naming."""

    @pytest.mark.parametrize(
        "name,key",
        [
            ("base_taxable_income", "baseTaxableIncome"),
            ("insurance", "insurance"),
            ("property_purchase", "propertyPurchase"),
            ("rental_pl", "rentalPL"),
            ("monthly_pi", "monthlyPI"),
            ("principal_remaining_io", "principalRemainingIO"),
        ],
    )
    def test_to_camel(self, name, key):
        assert to_camel(name) == key

    def test_inputs_layout(self, sample_inputs):
        data = inputs_to_dict(sample_inputs)

        assert list(data) == [
            "personal",
            "propertyPurchase",
            "rentalIncome",
            "operatingExpenses",
            "depreciation",
        ]
        assert data["personal"]["ownershipPercentage"] == 100
        assert data["propertyPurchase"]["isInterestOnly"] is True
        assert data["propertyPurchase"]["settlementDate"] == "2024-07-01"
        assert data["operatingExpenses"]["otherExpensesDescription"] == ""

    def test_results_layout(self, sample_results):
        data = results_to_dict(sample_results)

        assert list(data) == ["cashflow", "depreciation", "rentalPL", "taxImpact"]
        assert data["rentalPL"]["isNegativelyGeared"] is True
        assert data["taxImpact"]["withoutProperty"]["totalTax"] == pytest.approx(39000)


class TestInputs:
    """Tests for loading inputs."""

    def test_round_trip(self, sample_inputs):
        assert loads_inputs(dumps_inputs(sample_inputs)) == sample_inputs

    def test_missing_keys_fall_back_to_defaults(self, sample_inputs):
        inputs = inputs_from_dict({"rentalIncome": {"weeklyRent": 620}}, defaults=sample_inputs)

        assert inputs.rental_income.weekly_rent == 620
        assert inputs.rental_income.vacancy_weeks_per_year == 2
        assert inputs.personal == sample_inputs.personal

    def test_empty_object_is_defaults(self, sample_inputs):
        assert inputs_from_dict({}, defaults=sample_inputs) == sample_inputs

    def test_unknown_keys_are_ignored(self, sample_inputs):
        data = inputs_to_dict(sample_inputs)
        data["personal"]["favouriteColour"] = "blue"
        data["notes"] = "ignored"

        assert inputs_from_dict(data) == sample_inputs

    def test_loan_term_is_integer(self, sample_inputs):
        inputs = inputs_from_dict({"propertyPurchase": {"loanTermYears": 25.0}}, sample_inputs)

        assert inputs.property_purchase.loan_term_years == 25
        assert isinstance(inputs.property_purchase.loan_term_years, int)

    def test_wrong_type_is_rejected(self, sample_inputs):
        with pytest.raises(ValidationError, match="rentalIncome.weeklyRent"):
            inputs_from_dict({"rentalIncome": {"weeklyRent": "lots"}}, sample_inputs)

    def test_wrong_bool_type_is_rejected(self, sample_inputs):
        with pytest.raises(ValidationError, match="isInterestOnly"):
            inputs_from_dict({"propertyPurchase": {"isInterestOnly": "yes"}}, sample_inputs)

    def test_section_must_be_object(self, sample_inputs):
        with pytest.raises(ValidationError, match="personal: Input should be a valid dictionary"):
            inputs_from_dict({"personal": [1, 2]}, sample_inputs)

    def test_top_level_must_be_object(self):
        with pytest.raises(ValidationError, match="JSON object"):
            inputs_from_dict([1, 2, 3])

    def test_invalid_json(self):
        with pytest.raises(ValidationError, match="Invalid JSON"):
            loads_inputs("{not json")

    def test_numeric_string_is_rejected(self, sample_inputs):
        with pytest.raises(ValidationError, match="expected a number"):
            inputs_from_dict({"rentalIncome": {"weeklyRent": "550"}}, sample_inputs)

    def test_fractional_loan_term_is_kept(self, sample_inputs):
        inputs = inputs_from_dict({"propertyPurchase": {"loanTermYears": 25.5}}, sample_inputs)

        assert inputs.property_purchase.loan_term_years == 25.5

    def test_non_finite_numbers_reach_the_validation_gate(self, sample_inputs):
        inputs = loads_inputs('{"rentalIncome": {"weeklyRent": NaN}}', sample_inputs)

        assert math.isnan(inputs.rental_income.weekly_rent)


class TestResults:
    """Tests for result serialization."""

    def test_round_trip(self, sample_results):
        assert results_from_dict(json.loads(dumps_results(sample_results))) == sample_results

    def test_missing_key(self, sample_results):
        data = results_to_dict(sample_results)
        del data["taxImpact"]

        with pytest.raises(ValidationError, match="taxImpact"):
            results_from_dict(data)

    def test_section_of_wrong_type(self, sample_results):
        data = results_to_dict(sample_results)
        data["cashflow"] = []

        with pytest.raises(ValidationError, match="cashflow"):
            results_from_dict(data)

    def test_string_amount_is_rejected(self, sample_results):
        data = results_to_dict(sample_results)
        data["cashflow"]["grossRentalIncome"] = "lots"

        with pytest.raises(ValidationError, match="cashflow.grossRentalIncome"):
            results_from_dict(data)

    def test_acronym_keys(self, sample_results):
        data = results_to_dict(sample_results)
        data["rentalPL"]["isNegativelyGeared"] = "yes"

        with pytest.raises(ValidationError, match="rentalPL.isNegativelyGeared"):
            results_from_dict(data)


class TestScenario:
    """Tests for scenario serialization."""

    def test_round_trip(self, sample_inputs):
        created = datetime(2024, 7, 1, 9, 30, tzinfo=UTC)
        scenario = Scenario(
            id="scenario_1719826200000_a1b2c3d",
            name="Unit",
            inputs=sample_inputs,
            created_at=created,
            updated_at=created,
        )

        data = scenario_to_dict(scenario)

        assert data["createdAt"] == "2024-07-01T09:30:00+00:00"
        assert scenario_from_dict(data) == scenario

    def test_accepts_z_suffix(self, sample_inputs):
        data = {
            "id": "scenario_1_abc",
            "name": "Unit",
            "inputs": inputs_to_dict(sample_inputs),
            "createdAt": "2024-07-01T09:30:00.000Z",
            "updatedAt": "2024-07-02T10:00:00.000Z",
        }

        scenario = scenario_from_dict(data)

        assert scenario.created_at == datetime(2024, 7, 1, 9, 30, tzinfo=UTC)
        assert scenario.updated_at.day == 2

    def test_missing_key(self):
        with pytest.raises(ValidationError, match="name"):
            scenario_from_dict({"id": "x"})

    def test_bad_timestamp(self, sample_inputs):
        data = {
            "id": "x",
            "name": "Unit",
            "inputs": inputs_to_dict(sample_inputs),
            "createdAt": "yesterday",
            "updatedAt": "yesterday",
        }

        with pytest.raises(ValidationError, match="timestamp"):
            scenario_from_dict(data)

    def test_numeric_timestamp_is_rejected(self, sample_inputs):
        data = {
            "id": "x",
            "name": "Unit",
            "inputs": inputs_to_dict(sample_inputs),
            "createdAt": 1700000000,
            "updatedAt": "2024-07-01T09:30:00+00:00",
        }

        with pytest.raises(ValidationError, match="createdAt"):
            scenario_from_dict(data)

    def test_missing_input_fields_use_defaults(self, sample_inputs):
        data = {
            "id": "x",
            "name": "Unit",
            "inputs": {"rentalIncome": {"weeklyRent": 700}},
            "createdAt": "2024-07-01T09:30:00+00:00",
            "updatedAt": "2024-07-01T09:30:00+00:00",
        }

        scenario = scenario_from_dict(data)

        assert scenario.inputs.rental_income.weekly_rent == 700
        assert scenario.inputs.personal == sample_inputs.personal

    def test_wrong_input_type(self, sample_inputs):
        data = scenario_to_dict(
            Scenario(
                id="x",
                name="Unit",
                inputs=sample_inputs,
                created_at=datetime(2024, 7, 1, tzinfo=UTC),
                updated_at=datetime(2024, 7, 1, tzinfo=UTC),
            )
        )
        data["inputs"]["personal"]["baseTaxableIncome"] = None

        with pytest.raises(ValidationError, match="inputs.personal.baseTaxableIncome"):
            scenario_from_dict(data)
