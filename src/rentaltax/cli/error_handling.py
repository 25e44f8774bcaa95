"""CLI error handling helpers."""

import click

from rentaltax.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Validation errors carrying field issues are listed one per line.
    """
    if isinstance(error, ValidationError) and error.issues:
        for issue in error.issues:
            click.echo(f"Error: {issue.field}: {issue.message}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
