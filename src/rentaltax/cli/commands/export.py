"""CSV export command."""

import click

from rentaltax.cli.error_handling import handle_domain_error
from rentaltax.cli.input_options import input_options, pop_overrides
from rentaltax.cli.input_resolution import resolve_inputs_or_exit
from rentaltax.domain.csv_export import CSVExportService
from rentaltax.domain.errors import ValidationError
from rentaltax.domain.model import PropertyModelService


@click.command("export")
@click.option(
    "--inputs",
    "inputs_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with model inputs",
)
@click.option("--scenario", help="Saved scenario name or ID to export")
@click.option("--monthly", is_flag=True, help="Export cashflow figures per month")
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Output file ('-' for stdout, default rental-tax-model-<date>.csv)",
)
@input_options
@click.pass_context
def export(ctx, inputs_file, scenario, monthly, output, **params):
    """Export inputs and results to CSV.

    Examples:
        rentaltax export
        rentaltax export --scenario "Unit in Parramatta" --monthly -o unit.csv
        rentaltax export -o -
    """
    overrides = pop_overrides(params)
    inputs = resolve_inputs_or_exit(ctx, inputs_file, scenario, overrides)

    model_service = PropertyModelService()
    try:
        model_service.require_valid(inputs)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    results = model_service.recompute(inputs)
    export_service = CSVExportService()
    view_mode = "monthly" if monthly else "annual"

    if output == "-":
        click.echo(export_service.render(inputs, results, view_mode), nl=False)
        return

    if output is None:
        output = export_service.default_filename()

    try:
        path = export_service.export_to_file(inputs, results, output, view_mode)
    except OSError as e:
        click.echo(f"Error: Could not write {output}: {e}", err=True)
        ctx.exit(1)

    click.echo(f"Exported {view_mode} view to {path}")


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export)
