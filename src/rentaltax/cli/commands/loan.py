"""Loan comparison command."""

import click

from rentaltax.cli.error_handling import handle_domain_error
from rentaltax.cli.input_options import input_options, pop_overrides
from rentaltax.cli.input_resolution import resolve_inputs_or_exit
from rentaltax.domain.csv_export import format_currency
from rentaltax.domain.errors import ValidationError
from rentaltax.domain.model import PropertyModelService


@click.command("loan")
@click.option(
    "--inputs",
    "inputs_file",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file with model inputs",
)
@click.option("--scenario", help="Saved scenario name or ID to start from")
@input_options
@click.pass_context
def loan(ctx, inputs_file, scenario, **params):
    """Compare principal & interest with interest-only repayments.

    Examples:
        rentaltax loan
        rentaltax loan --loan-amount 480000 --interest-rate 6% --term 30
    """
    overrides = pop_overrides(params)
    inputs = resolve_inputs_or_exit(ctx, inputs_file, scenario, overrides)

    service = PropertyModelService()
    try:
        service.require_valid(inputs)
    except ValidationError as e:
        handle_domain_error(ctx, e)

    purchase = inputs.property_purchase
    comparison = service.compare_loans(inputs)
    milestones = service.amortization_milestones(inputs)

    click.echo(
        f"\nLoan: {format_currency(purchase.loan_amount)} at "
        f"{purchase.interest_rate * 100:.2f}% over {purchase.loan_term_years} years"
    )
    click.echo("-" * 62)
    click.echo(f"{'':<20} {'P&I':>20} {'Interest Only':>20}")
    click.echo(f"{'Monthly Repayment':<20} {format_currency(comparison.monthly_pi):>20} {format_currency(comparison.monthly_io):>20}")
    click.echo(f"{'Annual Repayment':<20} {format_currency(comparison.annual_pi):>20} {format_currency(comparison.annual_io):>20}")
    click.echo(f"{'Total Interest':<20} {format_currency(comparison.total_interest_pi):>20} {format_currency(comparison.total_interest_io):>20}")
    click.echo(f"{'Principal at End':<20} {format_currency(0):>20} {format_currency(comparison.principal_remaining_io):>20}")
    click.echo()
    click.echo(f"Monthly saving with interest only: {format_currency(comparison.monthly_savings_io)}")
    click.echo(f"Extra interest with interest only: {format_currency(comparison.extra_interest_io)}")

    if not milestones:
        return

    click.echo("\nP&I Amortization Milestones:")
    click.echo("-" * 70)
    click.echo(f"{'Year':>4} {'Principal Paid':>20} {'Interest Paid':>20} {'Balance':>20}")
    for milestone in milestones:
        click.echo(
            f"{milestone.year:>4} {format_currency(milestone.principal_paid):>20} "
            f"{format_currency(milestone.interest_paid):>20} "
            f"{format_currency(milestone.remaining_balance):>20}"
        )


def register_commands(cli):
    """Register loan commands with main CLI."""
    cli.add_command(loan)
