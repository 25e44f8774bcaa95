"""Property model domain service.

Holds the calling contract around the calculation engine: validate an
input snapshot, recompute the full result set, and derive warnings. Every
call works on a fresh immutable snapshot and returns a fresh result set.
"""

import dataclasses
import logging
from dataclasses import dataclass
from typing import Any

from rentaltax.domain.advice import generate_advice
from rentaltax.domain.constants import (
    DEFAULT_CONFIG,
    DEFAULT_LIMITS,
    MILESTONE_YEARS,
    TaxConfig,
    ValidationLimits,
)
from rentaltax.domain.depreciation import calculate_depreciation_results
from rentaltax.domain.entities import (
    Advice,
    AmortizationMilestone,
    LoanComparisonResults,
    MetricComparison,
    PropertyModelInputs,
    PropertyModelResults,
    ValidationIssue,
    ValidationState,
)
from rentaltax.domain.errors import ValidationError
from rentaltax.domain.loan import calculate_amortization_milestones, calculate_loan_comparison
from rentaltax.domain.rental import calculate_cashflow_results
from rentaltax.domain.tax import calculate_rental_pl_results, calculate_tax_impact_results
from rentaltax.domain.validation import ensure_valid, generate_result_warnings, validate_inputs

logger = logging.getLogger(__name__)

INPUT_SECTIONS = (
    "personal",
    "property_purchase",
    "rental_income",
    "operating_expenses",
    "depreciation",
)

# Headline figures shown when comparing two scenarios
COMPARISON_METRICS = (
    ("Net Cashflow (Pre-Tax)", lambda r: r.cashflow.net_cashflow_pre_tax),
    ("Net Rental Result", lambda r: r.rental_pl.net_rental_result),
    ("Tax Benefit/Cost", lambda r: r.tax_impact.tax_benefit),
    ("After-Tax Cashflow", lambda r: r.tax_impact.after_tax_cashflow),
)


@dataclass(frozen=True)
class ModelEvaluation:
    """Inputs, results, validation and warnings from one evaluation pass."""

    inputs: PropertyModelInputs
    results: PropertyModelResults
    validation: ValidationState
    warnings: tuple[ValidationIssue, ...]
    advice: tuple[Advice, ...] = ()


class PropertyModelService:
    """Service for running the rental property tax model."""

    def __init__(
        self,
        config: TaxConfig = DEFAULT_CONFIG,
        limits: ValidationLimits = DEFAULT_LIMITS,
    ):
        """Initialize property model service.

        Args:
            config: Rate table used by the calculators
            limits: Bounds used by the validation gate
        """
        self.config = config
        self.limits = limits

    def recompute(self, inputs: PropertyModelInputs) -> PropertyModelResults:
        """Run the calculators in dependency order.

        Cashflow, then depreciation, then rental P&L, then tax impact. No
        validation is performed here.

        Args:
            inputs: Input snapshot

        Returns:
            Complete result set
        """
        ownership_decimal = inputs.personal.ownership_percentage / 100

        cashflow = calculate_cashflow_results(
            inputs.rental_income,
            inputs.operating_expenses,
            inputs.property_purchase.loan_amount,
            inputs.property_purchase.interest_rate,
            ownership_decimal,
            self.config,
        )
        depreciation = calculate_depreciation_results(
            inputs.depreciation, ownership_decimal, self.config
        )
        rental_pl = calculate_rental_pl_results(cashflow, depreciation)
        tax_impact = calculate_tax_impact_results(
            inputs.personal.base_taxable_income,
            rental_pl.net_rental_result,
            cashflow.net_cashflow_pre_tax,
            inputs.personal.marginal_tax_rate,
            inputs.personal.medicare_levy_rate,
        )

        return PropertyModelResults(
            cashflow=cashflow,
            depreciation=depreciation,
            rental_pl=rental_pl,
            tax_impact=tax_impact,
        )

    def validate(self, inputs: PropertyModelInputs) -> ValidationState:
        """Run the validation gate over an input snapshot."""
        return validate_inputs(inputs, self.limits)

    def require_valid(self, inputs: PropertyModelInputs) -> ValidationState:
        """Run the validation gate and raise ValidationError on any blocking error."""
        return ensure_valid(inputs, self.limits)

    def evaluate(self, inputs: PropertyModelInputs) -> ModelEvaluation:
        """Validate, recompute and collect warnings in one pass.

        Results are computed even when validation fails, matching the
        behaviour of a live form; callers decide whether to show them.
        """
        validation = self.validate(inputs)
        results = self.recompute(inputs)
        warnings = tuple(validation.warnings) + tuple(generate_result_warnings(inputs, results))
        logger.debug(
            "Evaluated model: valid=%s net_rental_result=%.2f tax_benefit=%.2f",
            validation.is_valid,
            results.rental_pl.net_rental_result,
            results.tax_impact.tax_benefit,
        )

        return ModelEvaluation(
            inputs=inputs,
            results=results,
            validation=validation,
            warnings=warnings,
            advice=tuple(generate_advice(inputs, results)),
        )

    def compare(
        self, first: PropertyModelInputs, second: PropertyModelInputs
    ) -> list[MetricComparison]:
        """Recompute two snapshots and pair up their headline annual figures.

        Args:
            first: Baseline inputs
            second: Inputs compared against the baseline

        Returns:
            One MetricComparison per headline figure, difference is second minus first
        """
        first_results = self.recompute(first)
        second_results = self.recompute(second)
        return [
            MetricComparison(
                label=label,
                first=metric(first_results),
                second=metric(second_results),
                difference=metric(second_results) - metric(first_results),
            )
            for label, metric in COMPARISON_METRICS
        ]

    def compare_loans(self, inputs: PropertyModelInputs) -> LoanComparisonResults:
        """Compare P&I and I/O repayments for the full loan (not ownership scaled)."""
        purchase = inputs.property_purchase
        return calculate_loan_comparison(
            purchase.loan_amount, purchase.interest_rate, purchase.loan_term_years
        )

    def amortization_milestones(self, inputs: PropertyModelInputs) -> list[AmortizationMilestone]:
        """Sample the P&I amortization schedule at the standard milestone years."""
        purchase = inputs.property_purchase
        return calculate_amortization_milestones(
            purchase.loan_amount,
            purchase.interest_rate,
            purchase.loan_term_years,
            MILESTONE_YEARS,
        )

    def update_inputs(
        self, inputs: PropertyModelInputs, section: str, **changes: Any
    ) -> PropertyModelInputs:
        """Return a new snapshot with some fields of one section replaced.

        Args:
            inputs: Current snapshot
            section: Section attribute name (e.g. 'rental_income')
            **changes: Field values to replace within that section

        Returns:
            New PropertyModelInputs

        Raises:
            ValidationError: If the section or a field name is unknown
        """
        if section not in INPUT_SECTIONS:
            raise ValidationError(
                f"Unknown input section '{section}'. "
                f"Must be one of: {', '.join(INPUT_SECTIONS)}"
            )

        current = getattr(inputs, section)
        known = {f.name for f in dataclasses.fields(current)}
        unknown = sorted(set(changes) - known)
        if unknown:
            raise ValidationError(
                f"Unknown field(s) for section '{section}': {', '.join(unknown)}"
            )

        updated = dataclasses.replace(current, **changes)
        return dataclasses.replace(inputs, **{section: updated})
