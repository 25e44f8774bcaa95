"""Calculate command."""

import json

import click

from rentaltax.cli.error_handling import handle_domain_error
from rentaltax.cli.input_options import input_options, pop_overrides
from rentaltax.cli.input_resolution import resolve_inputs_or_exit
from rentaltax.domain.constants import LMI_LVR_THRESHOLD, MARGINAL_TAX_RATES
from rentaltax.domain.csv_export import format_currency
from rentaltax.domain.entities import Advice, ValidationIssue, default_inputs
from rentaltax.domain.errors import ValidationError
from rentaltax.domain.loan import calculate_lvr
from rentaltax.domain.model import ModelEvaluation, PropertyModelService
from rentaltax.domain.scenario import ScenarioService
from rentaltax.domain.serialization import dumps_inputs, inputs_to_dict, results_to_dict

LABEL_WIDTH = 40
AMOUNT_WIDTH = 20


def _line(label: str, value: float, divisor: int = 1) -> None:
    click.echo(f"{label:<{LABEL_WIDTH}} {format_currency(value / divisor):>{AMOUNT_WIDTH}}")


def _heading(title: str) -> None:
    click.echo(f"\n{title}")
    click.echo("-" * (LABEL_WIDTH + AMOUNT_WIDTH + 1))


def display_evaluation(evaluation: ModelEvaluation, monthly: bool = False) -> None:
    """Print the cashflow, depreciation, P&L and tax impact report."""
    results = evaluation.results
    divisor = 12 if monthly else 1
    period = "Monthly" if monthly else "Annual"

    cashflow = results.cashflow
    _heading(f"Rental Cashflow ({period})")
    _line("Gross Rental Income", cashflow.gross_rental_income, divisor)
    _line("Total Operating Expenses", cashflow.total_operating_expenses, divisor)
    _line("Interest Expense", cashflow.interest_expense, divisor)
    _line("Net Cashflow (Pre-Tax)", cashflow.net_cashflow_pre_tax, divisor)

    depreciation = results.depreciation
    _heading(f"Depreciation ({period})")
    _line("Capital Works (Div 43)", depreciation.capital_works_deduction, divisor)
    _line("Plant & Equipment (Div 40)", depreciation.plant_equipment_deduction, divisor)
    _line("Total Depreciation", depreciation.total_depreciation, divisor)

    rental_pl = results.rental_pl
    _heading(f"Rental P&L ({period})")
    _line("Net Cashflow (Pre-Tax)", rental_pl.net_cashflow_pre_tax, divisor)
    _line("Less: Depreciation", rental_pl.total_depreciation, divisor)
    _line("Net Rental Result", rental_pl.net_rental_result, divisor)
    status = "Negatively Geared" if rental_pl.is_negatively_geared else "Positively Geared"
    click.echo(f"{'Gearing Status':<{LABEL_WIDTH}} {status:>{AMOUNT_WIDTH}}")

    tax_impact = results.tax_impact
    without = tax_impact.without_property
    with_ = tax_impact.with_property
    _heading("Tax Impact (Annual)")
    click.echo(f"{'':<{LABEL_WIDTH - AMOUNT_WIDTH}} {'Without Property':>{AMOUNT_WIDTH}} {'With Property':>{AMOUNT_WIDTH}}")
    for label, left, right in (
        ("Taxable Income", without.taxable_income, with_.taxable_income),
        ("Income Tax", without.income_tax, with_.income_tax),
        ("Medicare Levy", without.medicare_levy, with_.medicare_levy),
        ("Total Tax", without.total_tax, with_.total_tax),
    ):
        click.echo(
            f"{label:<{LABEL_WIDTH - AMOUNT_WIDTH}} "
            f"{format_currency(left):>{AMOUNT_WIDTH}} {format_currency(right):>{AMOUNT_WIDTH}}"
        )

    _heading("Summary")
    benefit_note = "saving" if tax_impact.tax_benefit >= 0 else "additional tax"
    click.echo(f"Tax Benefit/Cost: {format_currency(tax_impact.tax_benefit)} ({benefit_note})")
    click.echo(f"After-Tax Cashflow: {format_currency(tax_impact.after_tax_cashflow)}")

    purchase = evaluation.inputs.property_purchase
    lvr = calculate_lvr(purchase.loan_amount, purchase.purchase_price)
    if lvr is not None:
        note = " (above 80%, lenders mortgage insurance likely)" if lvr > LMI_LVR_THRESHOLD else ""
        click.echo(f"LVR: {lvr:.1f}%{note}")

    display_warnings(evaluation.warnings)
    display_advice(evaluation.advice)


def display_warnings(warnings: tuple[ValidationIssue, ...]) -> None:
    if not warnings:
        return
    click.echo("\nWarnings:")
    for warning in warnings:
        click.echo(f"  - {warning.field}: {warning.message}")


def display_advice(advice: tuple[Advice, ...]) -> None:
    if not advice:
        return
    click.echo("\nInsights:")
    for item in advice:
        click.echo(f"  * {item.title}")
        click.echo(f"    {item.description}")


@click.command("calculate")
@click.option(
    "--inputs",
    "inputs_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with model inputs (see 'defaults')",
)
@click.option("--scenario", help="Saved scenario name or ID to start from")
@click.option("--monthly", is_flag=True, help="Show cashflow figures per month")
@click.option("--json", "as_json", is_flag=True, help="Print inputs and results as JSON")
@click.option("--no-save", is_flag=True, help="Do not remember these inputs as the last session")
@input_options
@click.pass_context
def calculate(ctx, inputs_file, scenario, monthly, as_json, no_save, **params):
    """Calculate cashflow, depreciation and tax impact.

    Inputs start from --inputs, --scenario or the last session (falling
    back to defaults) and individual options override single fields.

    Examples:
        rentaltax calculate
        rentaltax calculate --weekly-rent 600 --interest-rate 6.2%
        rentaltax calculate --scenario "Unit in Parramatta" --monthly
    """
    overrides = pop_overrides(params)
    inputs = resolve_inputs_or_exit(ctx, inputs_file, scenario, overrides)

    service = PropertyModelService()
    try:
        service.require_valid(inputs)
    except ValidationError as e:
        handle_domain_error(ctx, e)
    evaluation = service.evaluate(inputs)

    if not no_save:
        ScenarioService(ctx.obj["db"]).save_last_session(inputs)

    if as_json:
        payload = {
            "inputs": inputs_to_dict(inputs),
            "results": results_to_dict(evaluation.results),
            "warnings": [
                {"field": w.field, "message": w.message} for w in evaluation.warnings
            ],
            "advice": [
                {"kind": a.kind, "title": a.title, "description": a.description}
                for a in evaluation.advice
            ],
        }
        click.echo(json.dumps(payload, indent=2))
        return

    display_evaluation(evaluation, monthly=monthly)


@click.command("defaults")
def defaults():
    """Print the default inputs as JSON.

    Save the output to a file, edit it, and pass it back with --inputs.

    Examples:
        rentaltax defaults > property.json
    """
    click.echo(dumps_inputs(default_inputs()))


@click.command("rates")
def rates():
    """List the 2024-25 marginal tax rates for use with --marginal-rate."""
    for rate, label in MARGINAL_TAX_RATES:
        click.echo(f"{rate:<6g} {label}")


def register_commands(cli):
    """Register calculate commands with main CLI."""
    cli.add_command(calculate)
    cli.add_command(defaults)
    cli.add_command(rates)
