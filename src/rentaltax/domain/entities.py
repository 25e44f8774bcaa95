"""Domain model entities for rentaltax.

These are pure data classes representing the inputs and results of the
rental property tax model, independent of database schema and of the JSON
layout used for storage. Every record is immutable; a recalculation
replaces the whole result set.
"""

from dataclasses import dataclass
from datetime import datetime, date
from typing import Optional


# Input entities


@dataclass(frozen=True)
class PersonalInputs:
    """Personal financial details of the property owner."""

    base_taxable_income: float
    # 0-100, converted to a decimal before reaching the calculators
    ownership_percentage: float
    marginal_tax_rate: float
    medicare_levy_rate: float


@dataclass(frozen=True)
class PropertyPurchaseInputs:
    """Property purchase and loan details."""

    purchase_price: float
    loan_amount: float
    interest_rate: float
    loan_term_years: int
    is_interest_only: bool
    # ISO date, reserved for future use
    settlement_date: str


@dataclass(frozen=True)
class RentalIncomeInputs:
    """Rental income details."""

    weekly_rent: float
    vacancy_weeks_per_year: float


@dataclass(frozen=True)
class OperatingExpensesInputs:
    """Annual operating expenses."""

    property_management: float
    council_rates: float
    water_rates: float
    insurance: float
    repairs_maintenance: float
    body_corporate: float
    other_expenses: float
    other_expenses_description: str = ""

    def amounts(self) -> tuple[float, ...]:
        """Return the seven expense line items in display order."""
        return (
            self.property_management,
            self.council_rates,
            self.water_rates,
            self.insurance,
            self.repairs_maintenance,
            self.body_corporate,
            self.other_expenses,
        )


@dataclass(frozen=True)
class DepreciationInputs:
    """Depreciation estimates."""

    construction_value: float
    plant_equipment_annual: float


@dataclass(frozen=True)
class PropertyModelInputs:
    """Combined input snapshot for the property model."""

    personal: PersonalInputs
    property_purchase: PropertyPurchaseInputs
    rental_income: RentalIncomeInputs
    operating_expenses: OperatingExpensesInputs
    depreciation: DepreciationInputs


# Result entities


@dataclass(frozen=True)
class CashflowResults:
    """Rental cashflow calculation results."""

    gross_rental_income: float
    total_operating_expenses: float
    interest_expense: float
    net_cashflow_pre_tax: float


@dataclass(frozen=True)
class DepreciationResults:
    """Depreciation calculation results."""

    capital_works_deduction: float
    plant_equipment_deduction: float
    total_depreciation: float


@dataclass(frozen=True)
class RentalPLResults:
    """Rental profit and loss results."""

    net_cashflow_pre_tax: float
    total_depreciation: float
    net_rental_result: float
    is_negatively_geared: bool


@dataclass(frozen=True)
class TaxScenarioResults:
    """Tax payable for a single taxable income."""

    taxable_income: float
    income_tax: float
    medicare_levy: float
    total_tax: float


@dataclass(frozen=True)
class TaxImpactResults:
    """Comparison of tax with and without the property."""

    without_property: TaxScenarioResults
    with_property: TaxScenarioResults
    # Positive is a saving, negative is extra tax owed
    tax_benefit: float
    after_tax_cashflow: float


@dataclass(frozen=True)
class PropertyModelResults:
    """Complete result set for one input snapshot."""

    cashflow: CashflowResults
    depreciation: DepreciationResults
    rental_pl: RentalPLResults
    tax_impact: TaxImpactResults


@dataclass(frozen=True)
class LoanComparisonResults:
    """Principal and interest versus interest-only comparison."""

    monthly_pi: float
    annual_pi: float
    monthly_io: float
    annual_io: float
    monthly_savings_io: float
    total_interest_pi: float
    total_interest_io: float
    extra_interest_io: float
    principal_remaining_io: float


@dataclass(frozen=True)
class AmortizationMilestone:
    """Cumulative loan position at the end of a given year."""

    year: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


@dataclass(frozen=True)
class MetricComparison:
    """One headline figure for two result sets side by side."""

    label: str
    first: float
    second: float
    # second minus first
    difference: float


# Validation entities


@dataclass(frozen=True)
class ValidationIssue:
    """A validation error or warning for a single field."""

    field: str
    message: str


@dataclass(frozen=True)
class ValidationState:
    """Outcome of running the validation gate over an input snapshot."""

    is_valid: bool
    errors: tuple[ValidationIssue, ...] = ()
    warnings: tuple[ValidationIssue, ...] = ()


# Advice entities


@dataclass(frozen=True)
class Advice:
    """A plain-language observation about a result set."""

    # One of positive, neutral, warning
    kind: str
    title: str
    description: str


# Persistence entities


@dataclass(frozen=True)
class Scenario:
    """Named scenario saved by the user."""

    id: str
    name: str
    inputs: PropertyModelInputs
    created_at: datetime
    updated_at: datetime


def default_inputs(settlement_date: Optional[date] = None) -> PropertyModelInputs:
    """Return the starting input snapshot.

    Args:
        settlement_date: Settlement date to use (defaults to today)

    Returns:
        PropertyModelInputs populated with typical values
    """
    if settlement_date is None:
        settlement_date = date.today()

    return PropertyModelInputs(
        personal=PersonalInputs(
            base_taxable_income=100000,
            ownership_percentage=100,
            marginal_tax_rate=0.37,
            medicare_levy_rate=0.02,
        ),
        property_purchase=PropertyPurchaseInputs(
            purchase_price=600000,
            loan_amount=480000,
            interest_rate=0.06,
            loan_term_years=30,
            is_interest_only=True,
            settlement_date=settlement_date.isoformat(),
        ),
        rental_income=RentalIncomeInputs(
            weekly_rent=550,
            vacancy_weeks_per_year=2,
        ),
        operating_expenses=OperatingExpensesInputs(
            property_management=1500,
            council_rates=2000,
            water_rates=1000,
            insurance=1500,
            repairs_maintenance=1000,
            body_corporate=0,
            other_expenses=0,
            other_expenses_description="",
        ),
        depreciation=DepreciationInputs(
            construction_value=300000,
            plant_equipment_annual=5000,
        ),
    )
