"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, including the JSON encoding of
input snapshots, so the storage layout can change without touching the
domain services.
"""

from datetime import datetime, UTC

from rentaltax.domain import entities as domain
from rentaltax.domain.serialization import dumps_inputs, loads_inputs
from rentaltax.database.models import Scenario as ORMScenario


def as_utc(value: datetime) -> datetime:
    """Attach UTC to naive timestamps read back from SQLite."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def inputs_to_json(inputs: domain.PropertyModelInputs) -> str:
    """Encode an input snapshot for storage."""
    return dumps_inputs(inputs, indent=None)


def inputs_from_json(text: str) -> domain.PropertyModelInputs:
    """Decode a stored input snapshot."""
    return loads_inputs(text)


def scenario_to_domain(orm_scenario: ORMScenario) -> domain.Scenario:
    """Convert SQLAlchemy Scenario model to domain Scenario entity."""
    return domain.Scenario(
        id=orm_scenario.id,
        name=orm_scenario.name,
        inputs=inputs_from_json(orm_scenario.inputs_json),
        created_at=as_utc(orm_scenario.created_at),
        updated_at=as_utc(orm_scenario.updated_at),
    )
