"""Validation gate for property model inputs.

The calculators never range-check. This module is the single place where
inputs are rejected or flagged before being handed to the engine, and
where result-based warnings are produced afterwards.
"""

import logging
import math
from typing import Optional

from rentaltax.domain import errors
from rentaltax.domain.constants import (
    DEFAULT_LIMITS,
    HIGH_GEARING_INCOME_SHARE,
    ValidationLimits,
)
from rentaltax.domain.entities import (
    PropertyModelInputs,
    PropertyModelResults,
    ValidationIssue,
    ValidationState,
)

logger = logging.getLogger(__name__)

NOT_A_NUMBER = "Must be a finite number"


def _check_range(
    issues: list[ValidationIssue],
    field: str,
    value: float,
    minimum: Optional[float],
    maximum: Optional[float],
    min_message: str,
    max_message: Optional[str] = None,
) -> None:
    """Append an issue when value is non-finite or outside [minimum, maximum]."""
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        issues.append(ValidationIssue(field=field, message=NOT_A_NUMBER))
        return
    if minimum is not None and value < minimum:
        issues.append(ValidationIssue(field=field, message=min_message))
    elif maximum is not None and value > maximum:
        issues.append(ValidationIssue(field=field, message=max_message or min_message))


def collect_errors(
    inputs: PropertyModelInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> list[ValidationIssue]:
    """Return every blocking range violation in the inputs."""
    issues: list[ValidationIssue] = []

    personal = inputs.personal
    _check_range(
        issues, "personal.baseTaxableIncome", personal.base_taxable_income,
        0, None, "Income cannot be negative",
    )
    _check_range(
        issues, "personal.ownershipPercentage", personal.ownership_percentage,
        limits.min_ownership_pct, limits.max_ownership_pct,
        "Ownership must be at least 0%", "Ownership cannot exceed 100%",
    )
    _check_range(
        issues, "personal.marginalTaxRate", personal.marginal_tax_rate,
        limits.min_marginal_rate, limits.max_marginal_rate,
        "Tax rate cannot be negative", "Tax rate cannot exceed 47%",
    )
    _check_range(
        issues, "personal.medicareLevyRate", personal.medicare_levy_rate,
        limits.min_medicare_rate, limits.max_medicare_rate,
        "Medicare rate cannot be negative", "Medicare rate cannot exceed 3.5%",
    )

    purchase = inputs.property_purchase
    _check_range(
        issues, "propertyPurchase.purchasePrice", purchase.purchase_price,
        0, None, "Purchase price cannot be negative",
    )
    _check_range(
        issues, "propertyPurchase.loanAmount", purchase.loan_amount,
        0, None, "Loan amount cannot be negative",
    )
    _check_range(
        issues, "propertyPurchase.interestRate", purchase.interest_rate,
        limits.min_interest_rate, limits.max_interest_rate,
        "Interest rate cannot be negative", "Interest rate seems too high",
    )
    _check_range(
        issues, "propertyPurchase.loanTermYears", purchase.loan_term_years,
        limits.min_loan_term, limits.max_loan_term,
        "Loan term must be at least 1 year", "Loan term cannot exceed 40 years",
    )

    rental = inputs.rental_income
    _check_range(
        issues, "rentalIncome.weeklyRent", rental.weekly_rent,
        limits.min_weekly_rent, limits.max_weekly_rent,
        "Weekly rent cannot be negative", "Weekly rent seems too high",
    )
    _check_range(
        issues, "rentalIncome.vacancyWeeksPerYear", rental.vacancy_weeks_per_year,
        limits.min_vacancy_weeks, limits.max_vacancy_weeks,
        "Vacancy weeks cannot be negative", "Vacancy weeks cannot exceed 52",
    )

    expenses = inputs.operating_expenses
    for field, value in (
        ("propertyManagement", expenses.property_management),
        ("councilRates", expenses.council_rates),
        ("waterRates", expenses.water_rates),
        ("insurance", expenses.insurance),
        ("repairsMaintenance", expenses.repairs_maintenance),
        ("bodyCorporate", expenses.body_corporate),
        ("otherExpenses", expenses.other_expenses),
    ):
        _check_range(issues, f"operatingExpenses.{field}", value, 0, None, "Cannot be negative")

    depreciation = inputs.depreciation
    _check_range(
        issues, "depreciation.constructionValue", depreciation.construction_value,
        0, None, "Cannot be negative",
    )
    _check_range(
        issues, "depreciation.plantEquipmentAnnual", depreciation.plant_equipment_annual,
        0, None, "Cannot be negative",
    )

    return issues


def collect_input_warnings(inputs: PropertyModelInputs) -> list[ValidationIssue]:
    """Return non-blocking warnings that only depend on the inputs."""
    warnings: list[ValidationIssue] = []
    purchase = inputs.property_purchase

    if purchase.loan_amount > purchase.purchase_price:
        warnings.append(
            ValidationIssue(
                field="propertyPurchase.loanAmount",
                message="Loan amount exceeds purchase price",
            )
        )

    if inputs.depreciation.construction_value > purchase.purchase_price:
        warnings.append(
            ValidationIssue(
                field="depreciation.constructionValue",
                message="Construction value exceeds purchase price (check land value)",
            )
        )

    return warnings


def validate_inputs(
    inputs: PropertyModelInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> ValidationState:
    """Run the validation gate.

    Args:
        inputs: Input snapshot to check
        limits: Bounds to check against

    Returns:
        ValidationState with blocking errors and non-blocking warnings
    """
    found = collect_errors(inputs, limits)
    warnings = collect_input_warnings(inputs)
    if found:
        logger.debug("Validation found %d error(s)", len(found))

    return ValidationState(
        is_valid=not found,
        errors=tuple(found),
        warnings=tuple(warnings),
    )


def ensure_valid(
    inputs: PropertyModelInputs, limits: ValidationLimits = DEFAULT_LIMITS
) -> ValidationState:
    """Validate inputs and raise if any blocking error is found.

    Raises:
        ValidationError: If the inputs fail validation
    """
    state = validate_inputs(inputs, limits)
    if not state.is_valid:
        raise errors.ValidationError(errors.invalid_inputs(state.errors), state.errors)
    return state


def generate_result_warnings(
    inputs: PropertyModelInputs, results: PropertyModelResults
) -> list[ValidationIssue]:
    """Return warnings that depend on calculated results."""
    warnings: list[ValidationIssue] = []

    net_rental_result = results.rental_pl.net_rental_result
    if net_rental_result < 0:
        loss = abs(net_rental_result)
        if loss > inputs.personal.base_taxable_income * HIGH_GEARING_INCOME_SHARE:
            warnings.append(
                ValidationIssue(
                    field="rentalPL.netRentalResult",
                    message="Rental loss exceeds 50% of your base income - high negative gearing",
                )
            )

    if results.depreciation.total_depreciation == 0:
        warnings.append(
            ValidationIssue(
                field="depreciation",
                message="No depreciation claimed - consider getting a quantity surveyor report",
            )
        )

    return warnings
