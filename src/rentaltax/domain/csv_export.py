"""CSV export domain service."""

import csv
import io
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from rentaltax.domain.entities import PropertyModelInputs, PropertyModelResults
from rentaltax.domain.errors import ValidationError

logger = logging.getLogger(__name__)

VIEW_MODES = {"annual": 1, "monthly": 12}


def format_currency(value: float) -> str:
    """Format an amount as ``$1,234.56`` (``-$1,234.56`` when negative)."""
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_percent(value: float, decimals: int) -> str:
    """Format a decimal rate (0.06) as a percentage string (6.00%)."""
    return f"{value * 100:.{decimals}f}%"


def format_plain(value: float) -> str:
    """Format a number without trailing zeros (2.0 becomes 2)."""
    return f"{value:g}"


class CSVExportService:
    """Service for exporting model inputs and results to CSV."""

    def build_rows(
        self,
        inputs: PropertyModelInputs,
        results: PropertyModelResults,
        view_mode: str = "annual",
        generated_at: Optional[datetime] = None,
    ) -> list[list[str]]:
        """Build the export as a list of rows.

        Cashflow, depreciation and rental P&L figures are divided by 12 in
        monthly view. Tax impact and the summary are always annual.

        Args:
            inputs: Input snapshot
            results: Result set computed from the inputs
            view_mode: 'annual' or 'monthly'
            generated_at: Timestamp for the header (defaults to now)

        Returns:
            Rows of cells in a fixed order

        Raises:
            ValidationError: If view_mode is not recognised
        """
        if view_mode not in VIEW_MODES:
            raise ValidationError(
                f"Invalid view mode '{view_mode}'. Must be one of: {', '.join(VIEW_MODES)}"
            )
        if generated_at is None:
            generated_at = datetime.now()

        divisor = VIEW_MODES[view_mode]
        period = view_mode.capitalize()

        personal = inputs.personal
        purchase = inputs.property_purchase
        rental = inputs.rental_income
        expenses = inputs.operating_expenses
        depreciation = inputs.depreciation

        cashflow = results.cashflow
        deductions = results.depreciation
        rental_pl = results.rental_pl
        without = results.tax_impact.without_property
        with_ = results.tax_impact.with_property

        def per_period(value: float) -> str:
            return format_currency(value / divisor)

        rows = [
            ["Rental Property Tax Model Export"],
            [f"Generated: {generated_at.strftime('%Y-%m-%d %H:%M:%S')}"],
            [f"View Mode: {period}"],
            [],
            ["=== ASSUMPTIONS ==="],
            [],
            ["Personal Details"],
            ["Base Taxable Income", format_currency(personal.base_taxable_income)],
            ["Ownership Percentage", f"{format_plain(personal.ownership_percentage)}%"],
            ["Marginal Tax Rate", format_percent(personal.marginal_tax_rate, 0)],
            ["Medicare Levy Rate", format_percent(personal.medicare_levy_rate, 1)],
            [],
            ["Property Purchase"],
            ["Purchase Price", format_currency(purchase.purchase_price)],
            ["Loan Amount", format_currency(purchase.loan_amount)],
            ["Interest Rate", format_percent(purchase.interest_rate, 2)],
            ["Loan Term", f"{format_plain(purchase.loan_term_years)} years"],
            ["Interest Only", "Yes" if purchase.is_interest_only else "No"],
            [],
            ["Rental Income"],
            ["Weekly Rent", format_currency(rental.weekly_rent)],
            ["Vacancy Weeks/Year", format_plain(rental.vacancy_weeks_per_year)],
            [],
            ["Operating Expenses (Annual)"],
            ["Property Management", format_currency(expenses.property_management)],
            ["Council Rates", format_currency(expenses.council_rates)],
            ["Water Rates", format_currency(expenses.water_rates)],
            ["Insurance", format_currency(expenses.insurance)],
            ["Repairs & Maintenance", format_currency(expenses.repairs_maintenance)],
            ["Body Corporate", format_currency(expenses.body_corporate)],
            ["Other Expenses", format_currency(expenses.other_expenses)],
        ]
        if expenses.other_expenses_description:
            rows.append(["Other Expenses Description", expenses.other_expenses_description])

        rows += [
            [],
            ["Depreciation"],
            ["Construction Value (Div 43)", format_currency(depreciation.construction_value)],
            ["Plant & Equipment (Div 40)", format_currency(depreciation.plant_equipment_annual)],
            [],
            ["=== RESULTS ==="],
            [],
            [f"Rental Cashflow ({period})"],
            ["Gross Rental Income", per_period(cashflow.gross_rental_income)],
            ["Total Operating Expenses", per_period(cashflow.total_operating_expenses)],
            ["Interest Expense", per_period(cashflow.interest_expense)],
            ["Net Cashflow (Pre-Tax)", per_period(cashflow.net_cashflow_pre_tax)],
            [],
            [f"Depreciation ({period})"],
            ["Capital Works (Div 43)", per_period(deductions.capital_works_deduction)],
            ["Plant & Equipment (Div 40)", per_period(deductions.plant_equipment_deduction)],
            ["Total Depreciation", per_period(deductions.total_depreciation)],
            [],
            [f"Rental P&L ({period})"],
            ["Net Cashflow (Pre-Tax)", per_period(rental_pl.net_cashflow_pre_tax)],
            ["Less: Depreciation", per_period(rental_pl.total_depreciation)],
            ["Net Rental Result", per_period(rental_pl.net_rental_result)],
            [
                "Gearing Status",
                "Negatively Geared" if rental_pl.is_negatively_geared else "Positively Geared",
            ],
            [],
            ["Tax Impact (Annual)"],
            ["", "Without Property", "With Property"],
            ["Taxable Income", format_currency(without.taxable_income), format_currency(with_.taxable_income)],
            ["Income Tax", format_currency(without.income_tax), format_currency(with_.income_tax)],
            ["Medicare Levy", format_currency(without.medicare_levy), format_currency(with_.medicare_levy)],
            ["Total Tax", format_currency(without.total_tax), format_currency(with_.total_tax)],
            [],
            ["Summary"],
            ["Tax Benefit/Cost", format_currency(results.tax_impact.tax_benefit)],
            ["After-Tax Cashflow", format_currency(results.tax_impact.after_tax_cashflow)],
        ]
        return rows

    def render(
        self,
        inputs: PropertyModelInputs,
        results: PropertyModelResults,
        view_mode: str = "annual",
        generated_at: Optional[datetime] = None,
    ) -> str:
        """Render the export as CSV text."""
        rows = self.build_rows(inputs, results, view_mode, generated_at)
        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerows(rows)
        return buffer.getvalue()

    def default_filename(self, today: Optional[date] = None) -> str:
        """Return the default export filename for a given day."""
        if today is None:
            today = date.today()
        return f"rental-tax-model-{today.isoformat()}.csv"

    def export_to_file(
        self,
        inputs: PropertyModelInputs,
        results: PropertyModelResults,
        output_path: str,
        view_mode: str = "annual",
    ) -> Path:
        """Write the export to a file.

        Args:
            inputs: Input snapshot
            results: Result set computed from the inputs
            output_path: Destination file path
            view_mode: 'annual' or 'monthly'

        Returns:
            Path of the written file
        """
        content = self.render(inputs, results, view_mode)
        path = Path(output_path)
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info("Exported %s view to %s", view_mode, path)
        return path
