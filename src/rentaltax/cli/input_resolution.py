"""CLI helpers for resolving which inputs a command works on."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import click

from rentaltax.cli.error_handling import handle_domain_error
from rentaltax.domain.entities import PropertyModelInputs, default_inputs
from rentaltax.domain.model import PropertyModelService
from rentaltax.domain.scenario import ScenarioService
from rentaltax.domain.serialization import loads_inputs


def load_base_inputs(
    scenario_service: ScenarioService,
    inputs_file: str | None,
    scenario: str | None,
) -> PropertyModelInputs:
    """Pick the starting inputs for a command.

    An inputs file wins over a saved scenario, which wins over the last
    session. Defaults are used when none of those exist.

    Raises:
        ValueError: If both sources are given, or the source cannot be read
    """
    if inputs_file and scenario:
        raise ValueError("Use either --inputs or --scenario, not both")

    if inputs_file:
        text = Path(inputs_file).read_text(encoding="utf-8")
        return loads_inputs(text)

    if scenario:
        return scenario_service.resolve_scenario(scenario).inputs

    last_session = scenario_service.load_last_session()
    if last_session is not None:
        return last_session
    return default_inputs()


def apply_overrides(
    inputs: PropertyModelInputs, overrides: dict[str, dict[str, Any]]
) -> PropertyModelInputs:
    """Apply grouped field overrides to a snapshot."""
    service = PropertyModelService()
    for section, changes in overrides.items():
        inputs = service.update_inputs(inputs, section, **changes)
    return inputs


def resolve_inputs_or_exit(
    ctx: click.Context,
    inputs_file: str | None,
    scenario: str | None,
    overrides: dict[str, dict[str, Any]],
) -> PropertyModelInputs:
    """Resolve command inputs, or exit with a CLI error.

    This keeps error messaging and exit behavior consistent across commands.
    """
    scenario_service = ScenarioService(ctx.obj["db"])
    try:
        inputs = load_base_inputs(scenario_service, inputs_file, scenario)
        return apply_overrides(inputs, overrides)
    except ValueError as exc:
        handle_domain_error(ctx, exc)
