"""Scenario management commands."""

import json

import click

from rentaltax.cli.error_handling import handle_domain_error
from rentaltax.cli.input_options import input_options, pop_overrides
from rentaltax.cli.input_resolution import apply_overrides, resolve_inputs_or_exit
from rentaltax.domain.csv_export import format_currency
from rentaltax.domain.model import PropertyModelService
from rentaltax.domain.scenario import ScenarioService
from rentaltax.domain.serialization import scenario_to_dict


@click.group()
def scenario_group():
    """Manage saved scenarios."""
    pass


@scenario_group.command("save")
@click.argument("name", metavar="SCENARIO_NAME")
@click.option(
    "--inputs",
    "inputs_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with model inputs (defaults to the last session)",
)
@input_options
@click.pass_context
def save_scenario(ctx, name: str, inputs_file: str | None, **params):
    """Save inputs as a named scenario.

    Examples:
        rentaltax scenario save "Unit in Parramatta"
        rentaltax scenario save "Higher rent" --weekly-rent 620
    """
    overrides = pop_overrides(params)
    inputs = resolve_inputs_or_exit(ctx, inputs_file, None, overrides)
    service = ScenarioService(ctx.obj["db"])

    try:
        scenario = service.save_scenario(name, inputs)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Saved scenario '{scenario.name}' (ID: {scenario.id})")


@scenario_group.command("list")
@click.pass_context
def list_scenarios(ctx):
    """List saved scenarios with their headline figures."""
    service = ScenarioService(ctx.obj["db"])
    model = PropertyModelService()

    scenarios = service.list_scenarios()
    if not scenarios:
        click.echo("No scenarios found.")
        return

    click.echo("\nScenarios:")
    click.echo("-" * 100)
    for item in scenarios:
        results = model.recompute(item.inputs)
        click.echo(
            f"{item.id:32s} | {item.name:24s} | "
            f"Tax benefit: {format_currency(results.tax_impact.tax_benefit):>12} | "
            f"After tax: {format_currency(results.tax_impact.after_tax_cashflow):>12}"
        )


@scenario_group.command("show")
@click.argument("scenario", metavar="SCENARIO")
@click.pass_context
def show_scenario(ctx, scenario: str):
    """Show a scenario's details and inputs.

    SCENARIO can be a scenario name or ID.
    """
    service = ScenarioService(ctx.obj["db"])
    try:
        item = service.resolve_scenario(scenario)
    except ValueError as e:
        handle_domain_error(ctx, e)

    data = scenario_to_dict(item)
    click.echo(f"Name:    {item.name}")
    click.echo(f"ID:      {item.id}")
    click.echo(f"Created: {data['createdAt']}")
    click.echo(f"Updated: {data['updatedAt']}")
    click.echo("Inputs:")
    click.echo(json.dumps(data["inputs"], indent=2))


@scenario_group.command("dump")
@click.argument("scenario", metavar="SCENARIO")
@click.pass_context
def dump_scenario(ctx, scenario: str):
    """Print a scenario as JSON, including its ID and timestamps."""
    service = ScenarioService(ctx.obj["db"])
    try:
        item = service.resolve_scenario(scenario)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(json.dumps(scenario_to_dict(item), indent=2))


@scenario_group.command("update")
@click.argument("scenario", metavar="SCENARIO")
@click.option(
    "--inputs",
    "inputs_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file replacing the scenario's inputs",
)
@input_options
@click.pass_context
def update_scenario(ctx, scenario: str, inputs_file: str | None, **params):
    """Change fields of a saved scenario.

    Examples:
        rentaltax scenario update "Unit in Parramatta" --interest-rate 5.8%
    """
    overrides = pop_overrides(params)
    service = ScenarioService(ctx.obj["db"])

    try:
        item = service.resolve_scenario(scenario)
        if inputs_file:
            inputs = resolve_inputs_or_exit(ctx, inputs_file, None, overrides)
        else:
            inputs = apply_overrides(item.inputs, overrides)
        updated = service.update_scenario(item.id, inputs)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated scenario '{updated.name}'")


@scenario_group.command("rename")
@click.argument("scenario", metavar="SCENARIO")
@click.argument("new_name", metavar="NEW_NAME")
@click.pass_context
def rename_scenario(ctx, scenario: str, new_name: str):
    """Rename a scenario.

    SCENARIO can be a scenario name or ID.
    """
    service = ScenarioService(ctx.obj["db"])
    try:
        item = service.resolve_scenario(scenario)
        service.rename_scenario(item.id, new_name)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Renamed scenario to '{new_name.strip()}'")


@scenario_group.command("duplicate")
@click.argument("scenario", metavar="SCENARIO")
@click.pass_context
def duplicate_scenario(ctx, scenario: str):
    """Copy a scenario under a new name."""
    service = ScenarioService(ctx.obj["db"])
    try:
        item = service.resolve_scenario(scenario)
        copy = service.duplicate_scenario(item.id)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created scenario '{copy.name}' (ID: {copy.id})")


@scenario_group.command("delete")
@click.argument("scenario", metavar="SCENARIO")
@click.option("--yes", is_flag=True, help="Skip confirmation")
@click.pass_context
def delete_scenario(ctx, scenario: str, yes: bool):
    """Delete a scenario.

    SCENARIO can be a scenario name or ID.
    """
    service = ScenarioService(ctx.obj["db"])
    try:
        item = service.resolve_scenario(scenario)
    except ValueError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(f"Are you sure you want to delete scenario '{item.name}'?"):
        click.echo("Deletion cancelled.")
        return

    service.delete_scenario(item.id)
    click.echo(f"Deleted scenario '{item.name}'")


@scenario_group.command("load")
@click.argument("scenario", metavar="SCENARIO")
@click.pass_context
def load_scenario(ctx, scenario: str):
    """Make a scenario the last session, so later commands start from it."""
    service = ScenarioService(ctx.obj["db"])
    try:
        item = service.resolve_scenario(scenario)
    except ValueError as e:
        handle_domain_error(ctx, e)

    service.save_last_session(item.inputs)
    click.echo(f"Loaded scenario '{item.name}'")


def _format_difference(value: float) -> str:
    sign = "+" if value > 0 else ""
    return f"{sign}{format_currency(value)}"


@scenario_group.command("compare")
@click.argument("first", metavar="SCENARIO_A")
@click.argument("second", metavar="SCENARIO_B")
@click.pass_context
def compare_scenarios(ctx, first: str, second: str):
    """Compare the annual headline figures of two scenarios.

    The difference column is B minus A.

    Examples:
        rentaltax scenario compare "Unit in Parramatta" "Rate rise"
    """
    service = ScenarioService(ctx.obj["db"])
    try:
        scenario_a = service.resolve_scenario(first)
        scenario_b = service.resolve_scenario(second)
    except ValueError as e:
        handle_domain_error(ctx, e)

    rows = PropertyModelService().compare(scenario_a.inputs, scenario_b.inputs)

    click.echo(f"\n{'':<24} {'A':>16} {'B':>16} {'Difference':>16}")
    click.echo(f"{'':<24} {scenario_a.name[:16]:>16} {scenario_b.name[:16]:>16}")
    click.echo("-" * 75)
    for row in rows:
        click.echo(
            f"{row.label:<24} {format_currency(row.first):>16} "
            f"{format_currency(row.second):>16} {_format_difference(row.difference):>16}"
        )


@scenario_group.command("export")
@click.option(
    "--output",
    "-o",
    type=click.File("w", encoding="utf-8"),
    default="-",
    help="Output file (default stdout)",
)
@click.pass_context
def export_scenarios(ctx, output):
    """Write all saved scenarios to a JSON file.

    Examples:
        rentaltax scenario export -o scenarios.json
    """
    output.write(ScenarioService(ctx.obj["db"]).export_scenarios())
    output.write("\n")


@scenario_group.command("import")
@click.argument("source", type=click.File("r", encoding="utf-8"))
@click.option("--replace", is_flag=True, help="Delete existing scenarios first")
@click.option("--yes", is_flag=True, help="Skip confirmation when replacing")
@click.pass_context
def import_scenarios(ctx, source, replace: bool, yes: bool):
    """Import scenarios from a JSON file written by 'scenario export'.

    Imported scenarios get new IDs. Names already in use get an
    "(Imported)" suffix.

    Examples:
        rentaltax scenario import scenarios.json
        rentaltax scenario import scenarios.json --replace --yes
    """
    if replace and not yes and not click.confirm("Replace all existing scenarios?"):
        click.echo("Import cancelled.")
        return

    service = ScenarioService(ctx.obj["db"])
    try:
        imported = service.import_scenarios(source.read(), replace=replace)
    except ValueError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Imported {len(imported)} scenario(s)")
    for item in imported:
        click.echo(f"  {item.id}  {item.name}")


@scenario_group.command("reset")
@click.pass_context
def reset_session(ctx):
    """Forget the last session so commands start from defaults."""
    ScenarioService(ctx.obj["db"]).clear_last_session()
    click.echo("Last session cleared.")


def register_commands(cli):
    """Register scenario commands with main CLI."""
    cli.add_command(scenario_group, name="scenario")
