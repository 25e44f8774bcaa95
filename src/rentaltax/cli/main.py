"""Main CLI entry point."""

import logging

import click
from rentaltax.database.factories import create_sqlite_database

# Import and register all commands at module level
from rentaltax.cli.commands import (
    calculate,
    loan,
    export,
    scenario,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides RENTALTAX_DB_PATH environment variable)",
    envvar="RENTALTAX_DB_PATH",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: bool):
    """Rentaltax - Rental property tax impact calculator.

    Estimate the cashflow, depreciation and income tax effect of owning an
    Australian residential rental property, and keep named scenarios to
    compare.
    """
    ctx.ensure_object(dict)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
calculate.register_commands(cli)
loan.register_commands(cli)
export.register_commands(cli)
scenario.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
