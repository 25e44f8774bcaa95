"""Investment insights derived from a result set.

Advice is educational only. Each rule looks at the calculated results and
a few inputs and adds at most one observation; the order of the returned
list is the order the rules run in.
"""

from rentaltax.domain.constants import HIGH_MARGINAL_RATE, LMI_LVR_THRESHOLD
from rentaltax.domain.csv_export import format_currency
from rentaltax.domain.entities import Advice, PropertyModelInputs, PropertyModelResults
from rentaltax.domain.loan import calculate_lvr

POSITIVE = "positive"
NEUTRAL = "neutral"
WARNING = "warning"


def _gearing_advice(results: PropertyModelResults) -> list[Advice]:
    rental_pl = results.rental_pl
    tax_benefit = results.tax_impact.tax_benefit

    if not rental_pl.is_negatively_geared:
        return [
            Advice(
                kind=POSITIVE,
                title="Positively Geared Property",
                description=(
                    f"The property makes a net rental profit of "
                    f"{format_currency(rental_pl.net_rental_result)}. This adds to your "
                    f"taxable income but the property pays its own way."
                ),
            )
        ]

    if tax_benefit > 0:
        return [
            Advice(
                kind=NEUTRAL,
                title="Negatively Geared Property",
                description=(
                    f"Expenses exceed rental income by "
                    f"{format_currency(abs(rental_pl.net_rental_result))} a year. The loss "
                    f"reduces your taxable income, saving {format_currency(tax_benefit)} in tax."
                ),
            )
        ]
    return []


def _cashflow_advice(results: PropertyModelResults) -> Advice:
    after_tax = results.tax_impact.after_tax_cashflow

    if after_tax < 0:
        shortfall = abs(after_tax)
        return Advice(
            kind=WARNING,
            title="Out-of-Pocket Contribution Required",
            description=(
                f"After the tax benefit you need to contribute about "
                f"{format_currency(shortfall)} a year ({format_currency(shortfall / 12)} a month) "
                f"from your own funds to hold this property."
            ),
        )
    return Advice(
        kind=POSITIVE,
        title="Positive After-Tax Cashflow",
        description=(
            f"After the tax benefit the property returns {format_currency(after_tax)} a year "
            f"({format_currency(after_tax / 12)} a month)."
        ),
    )


def generate_advice(inputs: PropertyModelInputs, results: PropertyModelResults) -> list[Advice]:
    """Return investment insights for a result set.

    Args:
        inputs: Input snapshot the results were calculated from
        results: Result set to comment on

    Returns:
        List of Advice, possibly empty
    """
    advice = _gearing_advice(results)
    advice.append(_cashflow_advice(results))

    purchase = inputs.property_purchase
    lvr = calculate_lvr(purchase.loan_amount, purchase.purchase_price)
    if lvr is not None and lvr > LMI_LVR_THRESHOLD:
        advice.append(
            Advice(
                kind=NEUTRAL,
                title="High Loan-to-Value Ratio",
                description=(
                    f"An LVR of {lvr:.0f}% is above {LMI_LVR_THRESHOLD:.0f}%, which usually "
                    f"means lenders mortgage insurance. A larger deposit would lower "
                    f"borrowing costs."
                ),
            )
        )

    if purchase.is_interest_only:
        advice.append(
            Advice(
                kind=NEUTRAL,
                title="Interest-Only Loan Structure",
                description=(
                    "Interest-only repayments keep the deductible interest high in the "
                    "short term. Repayments rise once principal repayments begin."
                ),
            )
        )

    marginal_rate = inputs.personal.marginal_tax_rate
    if marginal_rate >= HIGH_MARGINAL_RATE and results.rental_pl.is_negatively_geared:
        advice.append(
            Advice(
                kind=POSITIVE,
                title="Tax Bracket Advantage",
                description=(
                    f"At a {marginal_rate * 100:g}% marginal rate each dollar of deductible "
                    f"loss reduces your tax by about {marginal_rate * 100:g} cents."
                ),
            )
        )

    return advice
