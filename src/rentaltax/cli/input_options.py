"""Shared click options for overriding individual model inputs."""

from typing import Any, Callable

import click

from rentaltax.utils.amount_parser import parse_amount, parse_percentage, parse_rate
from rentaltax.utils.date_parser import parse_date


def _parse_term(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        raise ValueError(f"Could not parse loan term '{value}': expected whole years")


def _parse_settlement(value: str) -> str:
    return parse_date(value).isoformat()


def _parse_text(value: str) -> str:
    return value


# (option name, section, field, parser, help)
INPUT_OPTIONS: tuple[tuple[str, str, str, Callable[[str], Any], str], ...] = (
    ("--income", "personal", "base_taxable_income", parse_amount,
     "Base taxable income excluding the property"),
    ("--ownership", "personal", "ownership_percentage", parse_percentage,
     "Ownership percentage, 0-100 (e.g. 50 or 50%)"),
    ("--marginal-rate", "personal", "marginal_tax_rate", parse_rate,
     "Marginal tax rate (e.g. 37% or 0.37)"),
    ("--medicare-rate", "personal", "medicare_levy_rate", parse_rate,
     "Medicare levy rate (e.g. 2% or 0.02)"),
    ("--purchase-price", "property_purchase", "purchase_price", parse_amount,
     "Property purchase price"),
    ("--loan-amount", "property_purchase", "loan_amount", parse_amount,
     "Loan amount"),
    ("--interest-rate", "property_purchase", "interest_rate", parse_rate,
     "Annual interest rate (e.g. 6% or 0.06)"),
    ("--term", "property_purchase", "loan_term_years", _parse_term,
     "Loan term in years"),
    ("--settlement-date", "property_purchase", "settlement_date", _parse_settlement,
     "Settlement date (YYYY-MM-DD or relative like 'next month')"),
    ("--weekly-rent", "rental_income", "weekly_rent", parse_amount,
     "Weekly rent"),
    ("--vacancy-weeks", "rental_income", "vacancy_weeks_per_year", parse_amount,
     "Vacancy weeks per year"),
    ("--property-management", "operating_expenses", "property_management", parse_amount,
     "Annual property management fees"),
    ("--council-rates", "operating_expenses", "council_rates", parse_amount,
     "Annual council rates"),
    ("--water-rates", "operating_expenses", "water_rates", parse_amount,
     "Annual water rates"),
    ("--insurance", "operating_expenses", "insurance", parse_amount,
     "Annual landlord insurance"),
    ("--repairs", "operating_expenses", "repairs_maintenance", parse_amount,
     "Annual repairs and maintenance"),
    ("--body-corporate", "operating_expenses", "body_corporate", parse_amount,
     "Annual body corporate / strata fees"),
    ("--other-expenses", "operating_expenses", "other_expenses", parse_amount,
     "Other annual expenses"),
    ("--other-description", "operating_expenses", "other_expenses_description", _parse_text,
     "Description of other expenses"),
    ("--construction-value", "depreciation", "construction_value", parse_amount,
     "Construction value for Division 43 capital works"),
    ("--plant-equipment", "depreciation", "plant_equipment_annual", parse_amount,
     "Annual Division 40 plant and equipment estimate"),
)


def _param_name(option: str) -> str:
    return option.lstrip("-").replace("-", "_")


def _make_callback(parser: Callable[[str], Any]):
    def callback(ctx, param, value):
        if value is None:
            return None
        try:
            return parser(value)
        except ValueError as e:
            raise click.BadParameter(str(e))

    return callback


def input_options(func):
    """Decorate a command with one option per model input field."""
    func = click.option(
        "--interest-only/--principal-and-interest",
        "is_interest_only",
        default=None,
        help="Loan repayment type",
    )(func)
    for option, _section, _field, parser, help_text in reversed(INPUT_OPTIONS):
        func = click.option(option, callback=_make_callback(parser), help=help_text)(func)
    return func


def pop_overrides(params: dict[str, Any]) -> dict[str, dict[str, Any]]:
    """Remove input option values from params and group them by section.

    Options that were not given are skipped.

    Returns:
        Mapping of section name to {field: value}
    """
    overrides: dict[str, dict[str, Any]] = {}
    for option, section, field, _parser, _help in INPUT_OPTIONS:
        value = params.pop(_param_name(option), None)
        if value is not None:
            overrides.setdefault(section, {})[field] = value

    is_interest_only = params.pop("is_interest_only", None)
    if is_interest_only is not None:
        overrides.setdefault("property_purchase", {})["is_interest_only"] = is_interest_only

    return overrides
