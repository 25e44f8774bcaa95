"""Scenario domain service."""

import dataclasses
import json
import logging
import secrets
import string
import time
from datetime import datetime, UTC
from typing import Any, Optional

from rentaltax.database.base import Database
from rentaltax.domain import errors
from rentaltax.domain.entities import PropertyModelInputs, Scenario as ScenarioEntity
from rentaltax.domain.serialization import scenario_from_dict, scenario_to_dict

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


def generate_scenario_id() -> str:
    """Return a new scenario ID like ``scenario_1718000000000_k3j9x0a``."""
    millis = int(time.time() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(7))
    return f"scenario_{millis}_{suffix}"


class ScenarioService:
    """Service for managing saved scenarios and the last working session."""

    def __init__(self, db: Database):
        """Initialize scenario service.

        Args:
            db: Database instance
        """
        self.db = db

    def _clean_name(self, name: str) -> str:
        if name is None or not name.strip():
            raise errors.ValidationError(errors.scenario_name_required())
        return name.strip()

    def _free_name(self, name: str, label: str) -> str:
        """Return ``<name> (<label>)``, adding a counter until the name is unused."""
        candidate = f"{name} ({label})"
        counter = 2
        while self.db.get_scenario_by_name(candidate) is not None:
            candidate = f"{name} ({label} {counter})"
            counter += 1
        return candidate

    def _require(self, scenario_id: str) -> ScenarioEntity:
        scenario = self.db.get_scenario(scenario_id)
        if scenario is None:
            raise errors.NotFoundError(errors.scenario_not_found(scenario_id))
        return scenario

    def save_scenario(self, name: str, inputs: PropertyModelInputs) -> ScenarioEntity:
        """Save inputs as a new named scenario.

        Args:
            name: Scenario name
            inputs: Input snapshot to store

        Returns:
            The saved scenario

        Raises:
            ValidationError: If the name is blank
            ConflictError: If a scenario with the same name exists
        """
        name = self._clean_name(name)
        if self.db.get_scenario_by_name(name) is not None:
            raise errors.ConflictError(f"Scenario with name '{name}' already exists")

        scenario_id = self.db.create_scenario(generate_scenario_id(), name, inputs)
        logger.info("Saved scenario '%s' (%s)", name, scenario_id)
        return self._require(scenario_id)

    def update_scenario(
        self, scenario_id: str, inputs: PropertyModelInputs, name: Optional[str] = None
    ) -> ScenarioEntity:
        """Replace a scenario's inputs and optionally its name.

        Raises:
            NotFoundError: If the scenario does not exist
            ConflictError: If the new name is taken
        """
        self._require(scenario_id)
        if name is not None:
            name = self._clean_name(name)
        self.db.update_scenario(scenario_id, name=name, inputs=inputs)
        return self._require(scenario_id)

    def rename_scenario(self, scenario_id: str, name: str) -> ScenarioEntity:
        """Rename a scenario.

        Raises:
            NotFoundError: If the scenario does not exist
            ValidationError: If the name is blank
            ConflictError: If the new name is taken
        """
        self._require(scenario_id)
        self.db.update_scenario(scenario_id, name=self._clean_name(name))
        return self._require(scenario_id)

    def duplicate_scenario(self, scenario_id: str) -> ScenarioEntity:
        """Copy a scenario under the name ``<name> (Copy)``.

        A numeric suffix is added when that name is already taken.

        Raises:
            NotFoundError: If the scenario does not exist
        """
        original = self._require(scenario_id)

        return self.save_scenario(self._free_name(original.name, "Copy"), original.inputs)

    def delete_scenario(self, scenario_id: str) -> None:
        """Delete a scenario.

        Raises:
            NotFoundError: If the scenario does not exist
        """
        scenario = self._require(scenario_id)
        self.db.delete_scenario(scenario_id)
        logger.info("Deleted scenario '%s' (%s)", scenario.name, scenario_id)

    def get_scenario(self, scenario_id: str) -> Optional[ScenarioEntity]:
        """Get scenario by ID, or None if not found."""
        return self.db.get_scenario(scenario_id)

    def get_scenario_by_name(self, name: str) -> Optional[ScenarioEntity]:
        """Get scenario by name, or None if not found."""
        return self.db.get_scenario_by_name(name)

    def resolve_scenario(self, identifier: str) -> ScenarioEntity:
        """Find a scenario by ID first, then by name.

        Raises:
            NotFoundError: If neither matches
        """
        scenario = self.db.get_scenario(identifier)
        if scenario is None:
            scenario = self.db.get_scenario_by_name(identifier)
        if scenario is None:
            raise errors.NotFoundError(errors.scenario_name_not_found(identifier))
        return scenario

    def list_scenarios(self) -> list[ScenarioEntity]:
        """List saved scenarios, oldest first."""
        return self.db.list_scenarios()

    def export_scenarios(self) -> str:
        """Return every saved scenario as a JSON array, oldest first."""
        return json.dumps([scenario_to_dict(s) for s in self.list_scenarios()], indent=2)

    def _parse_import(self, text: str) -> list[ScenarioEntity]:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise errors.ValidationError(f"Invalid JSON: {e}") from e
        if not isinstance(data, list):
            raise errors.ValidationError("Scenario import must be a JSON array")

        now = datetime.now(UTC).isoformat()
        parsed = []
        for index, item in enumerate(data):
            if not isinstance(item, dict):
                raise errors.ValidationError(f"Scenario {index + 1} must be a JSON object")
            # IDs are regenerated and updatedAt is reset on import
            record: dict[str, Any] = {"createdAt": now, **item, "id": "", "updatedAt": now}
            if record.get("inputs") is None:
                record["inputs"] = {}
            try:
                scenario = scenario_from_dict(record)
                parsed.append(dataclasses.replace(scenario, name=self._clean_name(scenario.name)))
            except errors.ValidationError as e:
                raise errors.ValidationError(f"Scenario {index + 1}: {e}") from e
        return parsed

    def import_scenarios(self, text: str, replace: bool = False) -> list[ScenarioEntity]:
        """Import scenarios from a JSON array written by export_scenarios.

        Every scenario gets a new ID and keeps its creation time; missing
        inputs fall back to defaults. Names already in use get an
        ``(Imported)`` suffix. Nothing is written unless the whole array
        parses.

        Args:
            text: JSON text
            replace: Delete all existing scenarios first

        Returns:
            The imported scenarios in file order

        Raises:
            ValidationError: If the text is not a valid scenario array
        """
        parsed = self._parse_import(text)

        if replace:
            for existing in self.list_scenarios():
                self.db.delete_scenario(existing.id)

        imported = []
        for scenario in parsed:
            name = scenario.name
            if self.db.get_scenario_by_name(name) is not None:
                name = self._free_name(name, "Imported")
            scenario_id = self.db.create_scenario(
                generate_scenario_id(), name, scenario.inputs, created_at=scenario.created_at
            )
            imported.append(self._require(scenario_id))

        logger.info("Imported %d scenario(s) (replace=%s)", len(imported), replace)
        return imported

    def save_last_session(self, inputs: PropertyModelInputs) -> None:
        """Auto-save the working inputs."""
        self.db.save_last_session(inputs)

    def load_last_session(self) -> Optional[PropertyModelInputs]:
        """Return the auto-saved working inputs, or None."""
        return self.db.load_last_session()

    def clear_last_session(self) -> None:
        """Discard the auto-saved working inputs."""
        self.db.clear_last_session()
