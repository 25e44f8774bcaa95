"""Tax calculations for the rental property model.

This is a planning model: a single flat marginal rate is applied to model
the marginal effect of the property on total tax. Progressive brackets,
loss carry-forward and capital gains are deliberately not modelled.

None of these functions raise. Negative taxable income produces zero tax.
Non-finite inputs propagate unchecked; callers must run the validation
gate first.
"""

from rentaltax.domain.entities import (
    CashflowResults,
    DepreciationResults,
    RentalPLResults,
    TaxImpactResults,
    TaxScenarioResults,
)


def calculate_income_tax(taxable_income: float, marginal_tax_rate: float) -> float:
    """Apply the marginal rate to taxable income, floored at zero income.

    Example:
        >>> calculate_income_tax(100000, 0.37)
        37000.0
        >>> calculate_income_tax(-5000, 0.37)
        0.0
    """
    # Tax losses carried forward are not modelled
    effective_income = max(0.0, taxable_income)
    return float(effective_income * marginal_tax_rate)


def calculate_medicare_levy(taxable_income: float, medicare_levy_rate: float) -> float:
    """Apply the Medicare levy rate to taxable income, floored at zero income."""
    effective_income = max(0.0, taxable_income)
    return float(effective_income * medicare_levy_rate)


def calculate_total_tax(income_tax: float, medicare_levy: float) -> float:
    return float(income_tax + medicare_levy)


def calculate_net_rental_result(net_cashflow_pre_tax: float, total_depreciation: float) -> float:
    """Taxable rental profit (positive) or deductible loss (negative).

    Example:
        >>> calculate_net_rental_result(-8300, 12500)
        -20800.0
    """
    return float(net_cashflow_pre_tax - total_depreciation)


def calculate_tax_benefit(tax_without_property: float, tax_with_property: float) -> float:
    """Tax saved by owning the property.

    Positive is a saving, negative is additional tax payable.
    """
    return float(tax_without_property - tax_with_property)


def calculate_tax_scenario(
    taxable_income: float, marginal_tax_rate: float, medicare_levy_rate: float
) -> TaxScenarioResults:
    """Calculate income tax, Medicare levy and total for one taxable income."""
    income_tax = calculate_income_tax(taxable_income, marginal_tax_rate)
    medicare_levy = calculate_medicare_levy(taxable_income, medicare_levy_rate)

    return TaxScenarioResults(
        taxable_income=taxable_income,
        income_tax=income_tax,
        medicare_levy=medicare_levy,
        total_tax=calculate_total_tax(income_tax, medicare_levy),
    )


def calculate_rental_pl_results(
    cashflow: CashflowResults, depreciation: DepreciationResults
) -> RentalPLResults:
    """Combine cashflow and depreciation into the rental profit and loss.

    Args:
        cashflow: Cashflow results
        depreciation: Depreciation results

    Returns:
        RentalPLResults including gearing status. A result of exactly zero
        is not negatively geared.
    """
    net_rental_result = calculate_net_rental_result(
        cashflow.net_cashflow_pre_tax, depreciation.total_depreciation
    )

    return RentalPLResults(
        net_cashflow_pre_tax=cashflow.net_cashflow_pre_tax,
        total_depreciation=depreciation.total_depreciation,
        net_rental_result=net_rental_result,
        is_negatively_geared=net_rental_result < 0,
    )


def calculate_tax_impact_results(
    base_taxable_income: float,
    net_rental_result: float,
    net_cashflow_pre_tax: float,
    marginal_tax_rate: float,
    medicare_levy_rate: float,
) -> TaxImpactResults:
    """Compare total tax with and without the property.

    The without-property scenario uses the base taxable income. The
    with-property scenario adds the net rental result, which is not floored
    here; flooring only happens inside each scenario's tax.

    After-tax cashflow is built on the pre-tax cashflow, not the taxable
    rental result. Depreciation reduces tax but is not a cash outflow.

    Args:
        base_taxable_income: Taxable income without the property
        net_rental_result: Taxable rental profit or loss
        net_cashflow_pre_tax: Cash position before tax
        marginal_tax_rate: Marginal tax rate as a decimal
        medicare_levy_rate: Medicare levy rate as a decimal

    Returns:
        TaxImpactResults for both scenarios
    """
    without_property = calculate_tax_scenario(
        base_taxable_income, marginal_tax_rate, medicare_levy_rate
    )
    with_property = calculate_tax_scenario(
        base_taxable_income + net_rental_result, marginal_tax_rate, medicare_levy_rate
    )

    tax_benefit = calculate_tax_benefit(without_property.total_tax, with_property.total_tax)

    return TaxImpactResults(
        without_property=without_property,
        with_property=with_property,
        tax_benefit=tax_benefit,
        after_tax_cashflow=net_cashflow_pre_tax + tax_benefit,
    )
