"""Tests for database mappers."""

import json
from datetime import datetime, UTC

from rentaltax.database.mappers import (
    as_utc,
    inputs_from_json,
    inputs_to_json,
    scenario_to_domain,
)
from rentaltax.database.models import Scenario as ORMScenario
from rentaltax.domain.entities import Scenario


def test_as_utc_attaches_timezone():
    naive = datetime(2024, 7, 1, 9, 30)

    assert as_utc(naive) == datetime(2024, 7, 1, 9, 30, tzinfo=UTC)


def test_as_utc_keeps_aware_values():
    aware = datetime(2024, 7, 1, 9, 30, tzinfo=UTC)

    assert as_utc(aware) is aware


def test_inputs_json_is_compact(sample_inputs):
    text = inputs_to_json(sample_inputs)

    assert "\n" not in text
    assert json.loads(text)["rentalIncome"]["weeklyRent"] == 550
    assert inputs_from_json(text) == sample_inputs


def test_scenario_to_domain(sample_inputs):
    """Test converting ORM Scenario to domain Scenario."""
    created = datetime(2024, 7, 1, 9, 30)
    orm_scenario = ORMScenario(
        id="scenario_1_aaaaaaa",
        name="Unit",
        inputs_json=inputs_to_json(sample_inputs),
        created_at=created,
        updated_at=created,
    )

    scenario = scenario_to_domain(orm_scenario)

    assert isinstance(scenario, Scenario)
    assert scenario.id == "scenario_1_aaaaaaa"
    assert scenario.name == "Unit"
    assert scenario.inputs == sample_inputs
    assert scenario.created_at == datetime(2024, 7, 1, 9, 30, tzinfo=UTC)
